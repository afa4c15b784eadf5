"""
Content-Transfer-Encoding dispatch (RFC 2045 section 6).

The header value is resolved once per leaf into a TransferEncoding member;
decode_body() then applies the matching decoder. Only base64 and
quoted-printable change the bytes, every other value (7bit, 8bit, binary,
absent, unknown) passes the body through untouched.
"""

import base64
import binascii
import re
from enum import Enum
from typing import Optional

from ..errors import DecodeError


class TransferEncoding(str, Enum):
    """Content-Transfer-Encoding values that select a decoder."""

    IDENTITY = "identity"
    BASE64 = "base64"
    QUOTED_PRINTABLE = "quoted-printable"

    @classmethod
    def from_header(cls, value: Optional[str]) -> "TransferEncoding":
        """
        Resolve a header value by case-insensitive exact match.

        Examples:
            >>> TransferEncoding.from_header("Base64")
            <TransferEncoding.BASE64: 'base64'>
            >>> TransferEncoding.from_header("7bit")
            <TransferEncoding.IDENTITY: 'identity'>
        """
        normalized = (value or "").strip().upper()
        if normalized == "BASE64":
            return cls.BASE64
        if normalized == "QUOTED-PRINTABLE":
            return cls.QUOTED_PRINTABLE
        return cls.IDENTITY


# "=" must introduce either two hex digits or a soft line break
_QP_BAD_ESCAPE = re.compile(rb"=(?![0-9A-Fa-f]{2})(?![ \t]*(?:\r\n|\n|$))")

# Transport padding at the end of an encoded line is not part of the data
_QP_TRAILING_SPACE = re.compile(rb"[ \t]+(?=\r?\n|\Z)")


def decode_base64(data: bytes) -> bytes:
    """
    Standard base64 decode; CR and LF are ignored, anything else non-alphabet fails.

    Raises:
        DecodeError: On illegal characters or bad padding
    """
    compact = data.replace(b"\r", b"").replace(b"\n", b"")
    try:
        return base64.b64decode(compact, validate=True)
    except binascii.Error as e:
        raise DecodeError(f"illegal base64 data: {e}") from e


def decode_quoted_printable(data: bytes) -> bytes:
    """
    Quoted-printable decode (RFC 2045 section 6.7).

    Raises:
        DecodeError: On an "=" that is neither an escape nor a soft line break
    """
    data = _QP_TRAILING_SPACE.sub(b"", data)
    match = _QP_BAD_ESCAPE.search(data)
    if match is not None:
        snippet = data[match.start():match.start() + 3]
        raise DecodeError(
            f"invalid quoted-printable escape {snippet!r} at offset {match.start()}"
        )
    return binascii.a2b_qp(data)


def decode_body(data: bytes, encoding: TransferEncoding) -> bytes:
    """
    Decode a leaf body according to its transfer encoding.

    Args:
        data: Raw body bytes as read from the part
        encoding: Resolved transfer encoding

    Returns:
        Decoded bytes

    Raises:
        DecodeError: If base64 or quoted-printable data is malformed
    """
    if encoding is TransferEncoding.BASE64:
        return decode_base64(data)
    if encoding is TransferEncoding.QUOTED_PRINTABLE:
        return decode_quoted_printable(data)
    return data
