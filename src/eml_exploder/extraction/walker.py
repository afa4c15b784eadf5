"""
Recursive multipart walker.

Reads one multipart level with a BoundaryReader, classifies every part by
its Content-Type, recurses into nested multipart parts and decodes leaves
into the output sink. The walk is depth-first and left-to-right; a nested
container is fully consumed before its parent moves on.

Per-part failures (bad Content-Type, nested boundary problems, decode and
write errors) are logged and recorded in the report, and the walk continues
with the next sibling.
"""

from typing import Dict, Optional, Union

import structlog

from ..decoding.naming import FilenamePolicy, LevelNamer
from ..decoding.transfer_encoding import TransferEncoding, decode_body
from ..errors import BoundaryError, DecodeError, ExploderError, HeaderError, WriteError
from ..models.report import DecodedOutput, ExplodeReport, PartFailure
from ..parsing.boundary_reader import BoundaryReader, LineSource, Part
from ..parsing.media_type import is_multipart, parse_media_type
from .sinks import OutputSink
from .trace import NullTraceSink, TraceSink

logger = structlog.get_logger(__name__)

# Classifier behaviour for a Content-Type that is present but unparsable
ON_BAD_CONTENT_TYPE_LEAF = "leaf"
ON_BAD_CONTENT_TYPE_REJECT = "reject"


class PartWalker:
    """
    Depth-first decomposition of a multipart body into decoded leaves.

    Args:
        sink: Where decoded leaves are written
        trace: Diagnostic trace receiver (default: discard)
        filename_policy: Index policy for synthesized filenames
        start_index: Literal index / first counter value for synthesized names
        unparsable_content_type: "leaf" to treat the part as an untyped leaf,
            "reject" to report it and skip it
        max_depth: Deepest multipart level entered, 0 for no limit
    """

    def __init__(
        self,
        sink: OutputSink,
        trace: Optional[TraceSink] = None,
        filename_policy: Union[FilenamePolicy, str] = FilenamePolicy.LITERAL,
        start_index: int = 1,
        unparsable_content_type: str = ON_BAD_CONTENT_TYPE_LEAF,
        max_depth: int = 0,
    ):
        if unparsable_content_type not in (ON_BAD_CONTENT_TYPE_LEAF, ON_BAD_CONTENT_TYPE_REJECT):
            raise ValueError(f"unknown unparsable_content_type: {unparsable_content_type!r}")

        self.sink = sink
        self.trace = trace or NullTraceSink()
        self.filename_policy = FilenamePolicy(filename_policy)
        self.start_index = start_index
        self.unparsable_content_type = unparsable_content_type
        self.max_depth = max_depth
        self.report = ExplodeReport()

    def walk(self, stream: LineSource, boundary: str, depth: int = 1) -> None:
        """
        Decompose one multipart level and everything nested inside it.

        Args:
            stream: Body of the multipart container
            boundary: Boundary declared by the container
            depth: Nesting level, 1 for the top-level body

        Raises:
            BoundaryError: If this level cannot be read to its closing
                delimiter (empty boundary, no delimiter, truncated stream,
                depth limit exceeded)
        """
        if self.max_depth and depth > self.max_depth:
            raise BoundaryError(f"maximum nesting depth {self.max_depth} exceeded")

        reader = BoundaryReader(stream, boundary)
        namer = LevelNamer(boundary, self.filename_policy, self.start_index)
        self.report.container_count += 1

        self.trace.open_level(depth, boundary)
        try:
            for part in reader:
                self.trace.part_headers(depth, part.headers)
                self._visit(part, namer, depth)
        finally:
            self.trace.close_level(depth, boundary)

    def record_failure(
        self, depth: int, boundary: str, error: ExploderError, filename: Optional[str] = None
    ) -> None:
        """Add a reported failure to the run report."""
        self.report.failures.append(
            PartFailure(
                depth=depth,
                boundary=boundary,
                error_type=type(error).__name__,
                message=str(error),
                filename=filename,
            )
        )

    def _classify(self, part: Part, depth: int):
        """
        Parse the part's Content-Type.

        Returns:
            (media_type, params); media_type is None for a missing header or,
            under the "leaf" policy, an unparsable one

        Raises:
            HeaderError: Under the "reject" policy, for an unparsable header
        """
        content_type = part.headers.get("Content-Type")
        if content_type is None:
            return None, {}

        try:
            return parse_media_type(content_type)
        except HeaderError as e:
            if self.unparsable_content_type == ON_BAD_CONTENT_TYPE_REJECT:
                raise
            logger.warning(
                "content_type_unparsable",
                depth=depth,
                boundary=part.boundary,
                content_type=content_type,
                error=str(e),
            )
            return None, {}

    def _visit(self, part: Part, namer: LevelNamer, depth: int) -> None:
        try:
            media_type, params = self._classify(part, depth)
        except HeaderError as e:
            logger.error("part_rejected", depth=depth, boundary=part.boundary, error=str(e))
            self.record_failure(depth, part.boundary, e)
            return

        if media_type is not None and is_multipart(media_type):
            self._recurse(part, media_type, params, depth)
        else:
            self._decode_leaf(part, namer, media_type, depth)

    def _recurse(self, part: Part, media_type: str, params: Dict[str, str], depth: int) -> None:
        nested_boundary = params.get("boundary", "")
        try:
            if not nested_boundary:
                raise BoundaryError(f"{media_type} part without boundary parameter")
            self.walk(part, nested_boundary, depth + 1)
        except BoundaryError as e:
            logger.error(
                "subtree_failed",
                depth=depth + 1,
                boundary=nested_boundary or part.boundary,
                error=str(e),
            )
            self.record_failure(depth + 1, nested_boundary or part.boundary, e)

    def _decode_leaf(self, part: Part, namer: LevelNamer, media_type: Optional[str], depth: int) -> None:
        self.report.leaf_count += 1
        filename = namer.name_for(part, media_type)
        encoding = TransferEncoding.from_header(part.headers.get("Content-Transfer-Encoding"))

        raw = part.read()
        try:
            data = decode_body(raw, encoding)
        except DecodeError as e:
            logger.error(
                "part_decode_failed",
                filename=filename,
                encoding=encoding.value,
                depth=depth,
                error=str(e),
            )
            self.record_failure(depth, part.boundary, e, filename)
            return

        output = DecodedOutput(
            filename=filename,
            data=data,
            encoding=encoding.value,
            depth=depth,
            boundary=part.boundary,
        )
        try:
            self.sink.write(output.filename, output.data)
        except WriteError as e:
            logger.error("part_write_failed", filename=filename, depth=depth, error=str(e))
            self.record_failure(depth, part.boundary, e, filename)
            return

        self.report.written.append(output.filename)
        logger.info(
            "part_written",
            filename=output.filename,
            size_bytes=len(output.data),
            encoding=output.encoding,
            depth=depth,
        )
