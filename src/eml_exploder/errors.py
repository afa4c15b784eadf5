"""
Exception hierarchy for MIME decomposition.

FatalInputError aborts a run before traversal starts. Every other error is
scoped to a single part or subtree: the walker logs it, records it in the
report and moves on to the next sibling.
"""


class ExploderError(Exception):
    """Base class for all errors raised by eml_exploder."""


class FatalInputError(ExploderError):
    """Top-level message is unreadable or is not a multipart message."""


class ParseError(ExploderError):
    """Structural parse failure in a header block or multipart body."""


class BoundaryError(ParseError):
    """Missing or empty boundary, no delimiter found, or truncated body."""


class HeaderError(ParseError):
    """A header value (usually Content-Type) could not be parsed."""


class DecodeError(ExploderError):
    """Body could not be decoded according to its Content-Transfer-Encoding."""


class WriteError(ExploderError):
    """Decoded part could not be written to its destination."""
