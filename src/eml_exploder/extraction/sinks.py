"""
Output sinks: where decoded leaf parts are written.

The walker only knows the OutputSink protocol. DirectorySink writes files to
disk, MemorySink keeps everything in a dict for tests and library callers.
"""

import os
from pathlib import Path
from typing import Dict, List, Protocol, Tuple, Union

import structlog

from ..errors import WriteError

logger = structlog.get_logger(__name__)


class OutputSink(Protocol):
    """Destination for decoded parts."""

    def write(self, filename: str, data: bytes) -> None:
        """Write data under filename, raising WriteError on failure."""
        ...


class DirectorySink:
    """
    Write each part as a file inside one directory.

    Declared filenames are reduced to their basename so a part cannot write
    outside root (e.g. '../../etc/passwd' becomes 'passwd').

    Args:
        root: Output directory, created on first write
        mode: Permission bits of written files
    """

    def __init__(self, root: Union[str, Path], mode: int = 0o644):
        self.root = Path(root)
        self.mode = mode

    def resolve(self, filename: str) -> Path:
        """
        Map a part filename to its destination path.

        Raises:
            WriteError: If nothing usable is left after sanitizing
        """
        name = os.path.basename(filename.replace("\\", "/"))
        if name in ("", ".", "..") or "\x00" in name:
            raise WriteError(f"unusable filename {filename!r}")
        return self.root / name

    def write(self, filename: str, data: bytes) -> None:
        path = self.resolve(filename)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
            os.chmod(path, self.mode)
        except (OSError, ValueError) as e:
            raise WriteError(f"Could not write file {path}: {e}") from e

        logger.debug("file_written", path=str(path), size_bytes=len(data))


class MemorySink:
    """Keep written parts in memory; later writes to a name replace earlier ones."""

    def __init__(self):
        self.files: Dict[str, bytes] = {}
        self.writes: List[Tuple[str, bytes]] = []

    def write(self, filename: str, data: bytes) -> None:
        if not filename:
            raise WriteError("empty filename")
        self.files[filename] = data
        self.writes.append((filename, data))
