# Message and multipart parsing

from .boundary_reader import BoundaryReader, LineSource, Part
from .header_summary import decode_words, format_summary, summarize_headers
from .media_type import extension_for, is_multipart, parse_media_type
from .message_reader import MailMessage, read_message, top_level_boundary

__all__ = [
    "BoundaryReader",
    "LineSource",
    "Part",
    "MailMessage",
    "read_message",
    "top_level_boundary",
    "parse_media_type",
    "is_multipart",
    "extension_for",
    "decode_words",
    "summarize_headers",
    "format_summary",
]
