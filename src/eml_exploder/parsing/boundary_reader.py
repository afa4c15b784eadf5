"""
Boundary reader for multipart bodies (RFC 2046 section 5.1.1).

A BoundaryReader turns a line-oriented byte stream into a lazy, finite,
non-restartable sequence of Part objects. Each Part is itself a byte stream
that yields only its own body and stops at the next delimiter line, so a
nested multipart body can be read by handing the Part to a new
BoundaryReader with the nested boundary.
"""

from email.message import Message
from email.parser import BytesHeaderParser
from email.utils import collapse_rfc2231_value
from typing import Iterator, List, Optional, Protocol

from ..errors import BoundaryError


class LineSource(Protocol):
    """Anything with a binary readline(): files opened "rb", BytesIO, Part."""

    def readline(self) -> bytes:
        ...


# Delimiter kinds
_DELIMITER = "delimiter"
_CLOSE = "close"

_TRAILING_SPACE = b" \t\r\n"
_BLANK_LINES = (b"\r\n", b"\n")


def _strip_line_break(line: bytes) -> bytes:
    """Remove the CRLF or LF that ends a line, if any."""
    if line.endswith(b"\r\n"):
        return line[:-2]
    if line.endswith(b"\n"):
        return line[:-1]
    return line


class Part:
    """
    One boundary-delimited part: its header block and an unread body stream.

    The body can be consumed once, either line by line with readline() or all
    at once with read(). Once the owning reader moves to the next part, any
    unread remainder is discarded.
    """

    def __init__(self, reader: "BoundaryReader", headers: Message, lookahead: bytes, index: int):
        self.headers = headers
        self.index = index
        self._reader = reader
        self._lookahead = lookahead
        self._done = False

    @property
    def boundary(self) -> str:
        """Boundary of the multipart level this part belongs to."""
        return self._reader.boundary

    @property
    def exhausted(self) -> bool:
        return self._done

    def get_filename(self) -> Optional[str]:
        """Filename declared by the Content-Disposition filename parameter."""
        filename = self.headers.get_param("filename", header="content-disposition")
        if filename is None:
            return None
        return collapse_rfc2231_value(filename).strip()

    def readline(self) -> bytes:
        """
        Return the next body line, or b"" once the part is exhausted.

        The line break in front of a delimiter belongs to the delimiter and is
        removed from the last body line.

        Raises:
            BoundaryError: If the stream ends before the next delimiter
        """
        if self._done:
            return b""

        line = self._lookahead
        if not line:
            raise BoundaryError(
                f"unexpected end of stream before closing boundary {self.boundary!r}"
            )

        kind = self._reader._classify(line)
        if kind is not None:
            # Empty body: the header block is followed directly by a delimiter
            self._finish(kind)
            return b""

        following = self._reader._stream.readline()
        kind = self._reader._classify(following)
        if kind is not None:
            self._finish(kind)
            return _strip_line_break(line)

        self._lookahead = following
        return line

    def read(self) -> bytes:
        """Read the rest of the body."""
        chunks: List[bytes] = []
        while not self._done:
            chunks.append(self.readline())
        return b"".join(chunks)

    def drain(self) -> None:
        """Discard whatever is left of the body."""
        while not self._done:
            self.readline()

    def _finish(self, kind: str) -> None:
        self._done = True
        self._lookahead = b""
        self._reader._last_delimiter = kind

    def __repr__(self) -> str:
        return (
            f"Part(index={self.index}, boundary={self.boundary!r}, "
            f"content_type={self.headers.get('Content-Type')!r})"
        )


class BoundaryReader:
    """
    Lazy iterator over the parts of a multipart body.

    Args:
        stream: Binary line source positioned at the start of the body
        boundary: Boundary token declared by the enclosing Content-Type

    Raises:
        BoundaryError: If boundary is empty

    Examples:
        >>> import io
        >>> body = io.BytesIO(b"--b\\r\\n\\r\\nhello\\r\\n--b--\\r\\n")
        >>> [p.read() for p in BoundaryReader(body, "b")]
        [b'hello']
    """

    def __init__(self, stream: LineSource, boundary: str):
        if not boundary:
            raise BoundaryError("empty boundary token")

        self.boundary = boundary
        self._stream = stream
        self._dash_boundary = b"--" + boundary.encode("utf-8")
        self._close_delimiter = self._dash_boundary + b"--"
        self._current: Optional[Part] = None
        self._last_delimiter: Optional[str] = None
        self._finished = False
        self.parts_read = 0

    def _classify(self, line: bytes) -> Optional[str]:
        """Return the delimiter kind of line, or None for a content line."""
        if not line.startswith(self._dash_boundary):
            return None
        stripped = line.rstrip(_TRAILING_SPACE)
        if stripped == self._dash_boundary:
            return _DELIMITER
        if stripped == self._close_delimiter:
            return _CLOSE
        return None

    def _skip_preamble(self) -> str:
        while True:
            line = self._stream.readline()
            if not line:
                raise BoundaryError(f"no boundary {self.boundary!r} found in body")
            kind = self._classify(line)
            if kind is not None:
                return kind

    def _read_header_block(self) -> Message:
        header_lines: List[bytes] = []
        while True:
            line = self._stream.readline()
            if not line:
                raise BoundaryError(
                    f"unexpected end of stream in part header (boundary {self.boundary!r})"
                )
            if line in _BLANK_LINES:
                break
            if self._classify(line) is not None:
                raise BoundaryError(
                    f"delimiter inside unterminated part header (boundary {self.boundary!r})"
                )
            header_lines.append(line)
        return BytesHeaderParser().parsebytes(b"".join(header_lines))

    def next_part(self) -> Optional[Part]:
        """
        Advance to the next part.

        Returns:
            The next Part, or None once the closing delimiter has been consumed

        Raises:
            BoundaryError: If the stream is truncated or holds no delimiter
        """
        if self._finished:
            return None

        if self._current is None:
            kind = self._skip_preamble()
        else:
            self._current.drain()
            self._current = None
            kind = self._last_delimiter

        if kind == _CLOSE:
            self._finished = True
            return None

        headers = self._read_header_block()
        self.parts_read += 1
        self._current = Part(self, headers, self._stream.readline(), self.parts_read)
        return self._current

    def __iter__(self) -> Iterator[Part]:
        while True:
            part = self.next_part()
            if part is None:
                return
            yield part
