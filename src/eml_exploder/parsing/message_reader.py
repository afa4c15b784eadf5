"""
Top-level message reader.

Splits a raw RFC 5322 message into its header block and a body stream
positioned right after the blank line that ends the headers. The body is not
read here; the walker consumes it part by part.
"""

import io
from dataclasses import dataclass
from email.message import Message
from email.parser import BytesHeaderParser
from typing import BinaryIO, List, Union

from ..errors import FatalInputError, HeaderError
from .boundary_reader import LineSource
from .media_type import is_multipart, parse_media_type

_BLANK_LINES = (b"\r\n", b"\n")


@dataclass
class MailMessage:
    """Parsed top-level headers plus the unread body stream."""

    headers: Message
    body: LineSource


def read_message(source: Union[bytes, BinaryIO]) -> MailMessage:
    """
    Read the header block of a message.

    Args:
        source: Raw message bytes or a binary stream opened for reading

    Returns:
        MailMessage whose body stream starts after the header block

    Raises:
        FatalInputError: If the input is empty or holds no header block
    """
    stream = io.BytesIO(source) if isinstance(source, (bytes, bytearray)) else source

    header_lines: List[bytes] = []
    while True:
        try:
            line = stream.readline()
        except OSError as e:
            raise FatalInputError(f"Failed to read message: {e}") from e
        if not line or line in _BLANK_LINES:
            break
        header_lines.append(line)

    if not header_lines:
        raise FatalInputError("Failed to read message: no header block")

    headers = BytesHeaderParser().parsebytes(b"".join(header_lines))
    if headers.defects:
        raise FatalInputError(f"Failed to read message: {headers.defects[0]!r}")

    return MailMessage(headers=headers, body=stream)


def top_level_boundary(message: MailMessage) -> str:
    """
    Validate that the message is multipart and return its boundary.

    Raises:
        FatalInputError: If Content-Type is missing, unparsable, not
            multipart/*, or lacks a boundary parameter
    """
    try:
        media_type, params = parse_media_type(message.headers.get("Content-Type"))
    except HeaderError as e:
        raise FatalInputError(f"Invalid top-level Content-Type: {e}") from e

    if not is_multipart(media_type):
        raise FatalInputError("Not a multipart MIME message")

    boundary = params.get("boundary", "")
    if not boundary:
        raise FatalInputError("Multipart message without boundary parameter")
    return boundary
