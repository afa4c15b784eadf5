"""
Traversal trace: human-readable lines showing nesting depth and boundaries.

For each multipart level the walker opens the level, lists every part's
headers, and closes the level. Indentation is 2 * (depth - 1) units of two
spaces.
"""

import sys
from email.message import Message
from typing import Optional, Protocol, TextIO


class TraceSink(Protocol):
    """Receiver for traversal diagnostics."""

    def open_level(self, depth: int, boundary: str) -> None:
        ...

    def part_headers(self, depth: int, headers: Message) -> None:
        ...

    def close_level(self, depth: int, boundary: str) -> None:
        ...


def indent(depth: int) -> str:
    return "  " * (2 * (depth - 1))


class PrintTraceSink:
    """Print trace lines to a text stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys sees the output
        return self._stream or sys.stdout

    def _emit(self, line: str) -> None:
        print(line, file=self.stream)

    def open_level(self, depth: int, boundary: str) -> None:
        self._emit(f"{indent(depth)} >>>>>>>>>>>>>  {boundary}")

    def part_headers(self, depth: int, headers: Message) -> None:
        prefix = indent(depth)
        for key in dict.fromkeys(headers.keys()):
            values = headers.get_all(key, [])
            self._emit(f"{prefix} Key: ({key}) - {len(values)} Value: ({values!r})")
        self._emit(f"{prefix} ------------")

    def close_level(self, depth: int, boundary: str) -> None:
        self._emit(f"{indent(depth)} <<<<<<<<<<<<<  {boundary}")


class NullTraceSink:
    """Discard all trace output."""

    def open_level(self, depth: int, boundary: str) -> None:
        pass

    def part_headers(self, depth: int, headers: Message) -> None:
        pass

    def close_level(self, depth: int, boundary: str) -> None:
        pass
