"""
Header summary model - the decoded top-level headers printed before traversal.
"""

from typing import Optional

from pydantic import BaseModel, Field


class HeaderSummary(BaseModel):
    """Top-level headers shown to the user (From/To/Subject RFC 2047-decoded)."""

    from_address: str = Field(default="", description="Decoded From header")
    to: str = Field(default="", description="Decoded To header")
    subject: str = Field(default="", description="Decoded Subject header")
    date: Optional[str] = Field(None, description="Raw Date header")
    content_type: Optional[str] = Field(None, description="Raw Content-Type header")
