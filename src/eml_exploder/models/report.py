"""
Traversal result models.

The walker never terminates the process; everything that happened during a
run is collected into an ExplodeReport that callers inspect.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class DecodedOutput(BaseModel):
    """A decoded leaf part and the name it is written under."""

    filename: str = Field(description="Resolved destination filename")
    data: bytes = Field(description="Decoded body bytes")
    encoding: str = Field(description="Content-Transfer-Encoding that was applied")
    depth: int = Field(description="Nesting depth of the enclosing multipart level")
    boundary: str = Field(description="Boundary of the enclosing multipart level")


class PartFailure(BaseModel):
    """A per-part or per-subtree error that was reported and skipped."""

    depth: int = Field(description="Nesting depth where the failure happened")
    boundary: str = Field(description="Boundary of the level being read")
    error_type: str = Field(description="Exception class name")
    message: str = Field(description="Error message")
    filename: Optional[str] = Field(None, description="Target filename, when resolved")


class ExplodeReport(BaseModel):
    """Outcome of one decomposition run."""

    written: List[str] = Field(
        default_factory=list, description="Filenames written, in traversal order"
    )
    failures: List[PartFailure] = Field(
        default_factory=list, description="Reported per-part failures"
    )
    leaf_count: int = Field(default=0, description="Leaf parts encountered")
    container_count: int = Field(
        default=0, description="Multipart levels entered, top level included"
    )

    @property
    def succeeded(self) -> int:
        return len(self.written)

    @property
    def failed(self) -> int:
        return len(self.failures)

    def failures_of(self, error_type: str) -> List[PartFailure]:
        """Return the failures whose exception class name is error_type."""
        return [f for f in self.failures if f.error_type == error_type]
