"""
Entry points that tie message reading, validation and the walker together.
"""

from pathlib import Path
from typing import BinaryIO, Optional, Union

import structlog

from ..config import Settings, settings as default_settings
from ..errors import BoundaryError, FatalInputError
from ..models.report import ExplodeReport
from ..parsing.message_reader import MailMessage, read_message, top_level_boundary
from .sinks import DirectorySink, OutputSink
from .trace import NullTraceSink, PrintTraceSink, TraceSink
from .walker import PartWalker

logger = structlog.get_logger(__name__)


def build_walker(sink: OutputSink, config: Settings, trace: Optional[TraceSink] = None) -> PartWalker:
    """Create a PartWalker configured from settings."""
    if trace is None:
        trace = PrintTraceSink() if config.trace else NullTraceSink()
    return PartWalker(
        sink,
        trace=trace,
        filename_policy=config.filename_policy,
        start_index=config.synthesized_index,
        unparsable_content_type=config.unparsable_content_type,
        max_depth=config.max_depth,
    )


def explode_message(
    message: MailMessage,
    sink: OutputSink,
    *,
    config: Optional[Settings] = None,
    trace: Optional[TraceSink] = None,
) -> ExplodeReport:
    """
    Decompose an already-read message.

    Args:
        message: Top-level headers and unread body
        sink: Destination for decoded leaves
        config: Settings (default: global settings)
        trace: Diagnostic trace receiver (default: stdout when config.trace)

    Returns:
        ExplodeReport describing what was written and what failed

    Raises:
        FatalInputError: If the message is not a multipart message with a boundary
    """
    config = config or default_settings
    boundary = top_level_boundary(message)

    walker = build_walker(sink, config, trace)
    try:
        walker.walk(message.body, boundary)
    except BoundaryError as e:
        logger.error("traversal_aborted", boundary=boundary, error=str(e))
        walker.record_failure(1, boundary, e)

    report = walker.report
    logger.info(
        "explode_completed",
        leaves=report.leaf_count,
        containers=report.container_count,
        written=report.succeeded,
        failures=report.failed,
    )
    return report


def explode(
    source: Union[bytes, BinaryIO],
    sink: OutputSink,
    *,
    config: Optional[Settings] = None,
    trace: Optional[TraceSink] = None,
) -> ExplodeReport:
    """
    Read a raw message and write every leaf part to sink.

    Args:
        source: Raw message bytes or binary stream
        sink: Destination for decoded leaves
        config: Settings (default: global settings)
        trace: Diagnostic trace receiver

    Returns:
        ExplodeReport

    Raises:
        FatalInputError: If the message is unreadable or not multipart
    """
    return explode_message(read_message(source), sink, config=config, trace=trace)


def explode_file(
    eml_path: Union[str, Path],
    output_dir: Optional[Union[str, Path]] = None,
    *,
    config: Optional[Settings] = None,
    trace: Optional[TraceSink] = None,
) -> ExplodeReport:
    """
    Decompose an .eml file into output_dir (default: config.output_dir).

    Raises:
        FatalInputError: If the file cannot be opened or is not multipart
    """
    config = config or default_settings
    sink = DirectorySink(output_dir or config.output_dir, mode=config.file_mode)

    try:
        f = open(eml_path, "rb")
    except OSError as e:
        raise FatalInputError(f"Cannot open {eml_path}: {e}") from e

    with f:
        return explode(f, sink, config=config, trace=trace)
