"""
Media type helpers: Content-Type parsing and extension lookup.
"""

import mimetypes
import re
from email.message import Message
from email.utils import collapse_rfc2231_value
from typing import Dict, Optional, Tuple

from ..errors import HeaderError

# RFC 2045 token characters
_TOKEN = r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+"
_MEDIA_TYPE_RE = re.compile(rf"^\s*({_TOKEN})/({_TOKEN})\s*$")

# Built-in tables only, so the chosen extension does not depend on the
# host's /etc/mime.types
_MIME_TYPES = mimetypes.MimeTypes()


def parse_media_type(value: Optional[str]) -> Tuple[str, Dict[str, str]]:
    """
    Parse a Content-Type value into a lowercased media type and its parameters.

    Args:
        value: Raw header value, e.g. 'multipart/mixed; boundary="abc"'

    Returns:
        Tuple of (media_type, params) with lowercased parameter names

    Raises:
        HeaderError: If the value is missing or has no type/subtype

    Examples:
        >>> parse_media_type('Multipart/Mixed; boundary="abc"')
        ('multipart/mixed', {'boundary': 'abc'})
    """
    if value is None or not value.strip():
        raise HeaderError("no media type")

    main_value = value.split(";", 1)[0]
    match = _MEDIA_TYPE_RE.match(main_value)
    if match is None:
        raise HeaderError(f"invalid media type {main_value.strip()!r}")
    media_type = f"{match.group(1)}/{match.group(2)}".lower()

    # Let the email package handle quoting and RFC 2231 continuations
    holder = Message()
    holder["Content-Type"] = value
    params: Dict[str, str] = {}
    for name, param_value in holder.get_params(failobj=[])[1:]:
        params[name.lower()] = collapse_rfc2231_value(param_value)
    return media_type, params


def is_multipart(media_type: str) -> bool:
    return media_type.startswith("multipart/")


def extension_for(media_type: Optional[str]) -> str:
    """
    First registered file extension for a media type.

    Args:
        media_type: Lowercased type/subtype, or None when unknown

    Returns:
        Extension with leading dot, or "" if the type has none registered
    """
    if not media_type:
        return ""
    return _MIME_TYPES.guess_extension(media_type, strict=False) or ""
