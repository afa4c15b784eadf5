# Recursive decomposition of multipart messages

from .pipeline import build_walker, explode, explode_file, explode_message
from .sinks import DirectorySink, MemorySink, OutputSink
from .trace import NullTraceSink, PrintTraceSink, TraceSink
from .walker import PartWalker

__all__ = [
    "explode",
    "explode_file",
    "explode_message",
    "build_walker",
    "PartWalker",
    "OutputSink",
    "DirectorySink",
    "MemorySink",
    "TraceSink",
    "PrintTraceSink",
    "NullTraceSink",
]
