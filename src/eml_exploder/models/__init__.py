# Data models for MIME decomposition

from .header_summary import HeaderSummary
from .report import DecodedOutput, ExplodeReport, PartFailure

__all__ = [
    "HeaderSummary",
    "DecodedOutput",
    "ExplodeReport",
    "PartFailure",
]
