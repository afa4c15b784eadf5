"""
Header summary for the top-level message.

From, To and Subject may carry RFC 2047 encoded-words; they are decoded for
display. Date and Content-Type are shown raw.
"""

from email.errors import HeaderParseError
from email.header import decode_header
from email.message import Message
from typing import List, Optional

import charset_normalizer
import structlog

from ..models.header_summary import HeaderSummary

logger = structlog.get_logger(__name__)


def _decode_bytes(raw: bytes, charset: Optional[str]) -> str:
    # Try declared charset first, unlabelled fragments are normally ASCII
    if charset != "unknown-8bit":
        try:
            return raw.decode(charset or "utf-8")
        except (UnicodeDecodeError, LookupError):
            pass

    # Try charset detection
    detected = charset_normalizer.from_bytes(raw).best()
    if detected:
        return str(detected)

    # Final fallback
    return raw.decode("utf-8", errors="replace")


def decode_words(value: Optional[str]) -> str:
    """
    Decode RFC 2047 encoded-words in a header value.

    Args:
        value: Raw header value (may be None)

    Returns:
        Decoded text; undecodable words are returned as they appear

    Examples:
        >>> decode_words("=?utf-8?q?Caf=C3=A9?= menu")
        'Café menu'
    """
    if not value:
        return ""

    try:
        fragments = decode_header(value)
    except HeaderParseError as e:
        logger.warning("header_decode_failed", value=value, error=str(e))
        return value

    decoded: List[str] = []
    for fragment, charset in fragments:
        if isinstance(fragment, bytes):
            decoded.append(_decode_bytes(fragment, charset))
        else:
            decoded.append(fragment)
    return "".join(decoded)


def summarize_headers(headers: Message) -> HeaderSummary:
    """
    Build the header summary printed before traversal.

    Args:
        headers: Top-level header block

    Returns:
        HeaderSummary with decoded From/To/Subject and raw Date/Content-Type
    """
    return HeaderSummary(
        from_address=decode_words(headers.get("From")),
        to=decode_words(headers.get("To")),
        subject=decode_words(headers.get("Subject")),
        date=headers.get("Date"),
        content_type=headers.get("Content-Type"),
    )


def format_summary(summary: HeaderSummary) -> str:
    """Render the summary as the lines shown to the user, blank line last."""
    lines = [
        f"From: {summary.from_address}",
        f"To: {summary.to}",
        f"Date: {summary.date or ''}",
        f"Subject: {summary.subject}",
        f"Content-Type: {summary.content_type or ''}",
        "",
    ]
    return "\n".join(lines) + "\n"
