# Leaf decoding and filename assignment

from .naming import FilenamePolicy, LevelNamer, synthesize_name
from .transfer_encoding import (
    TransferEncoding,
    decode_base64,
    decode_body,
    decode_quoted_printable,
)

__all__ = [
    "TransferEncoding",
    "decode_body",
    "decode_base64",
    "decode_quoted_printable",
    "FilenamePolicy",
    "LevelNamer",
    "synthesize_name",
]
