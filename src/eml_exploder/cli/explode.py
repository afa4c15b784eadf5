"""
Command-line interface for MIME decomposition.

Prints the top-level header summary, traces the traversal on stdout and
writes one file per leaf part into the output directory.

Usage:
    # Single file into ./out
    python -m eml_exploder.cli.explode message.eml

    # Read from stdin into another directory
    cat message.eml | python -m eml_exploder.cli.explode - --output parts/

    # Unique synthesized filenames
    python -m eml_exploder.cli.explode message.eml --policy unique
"""

import argparse
import sys
from typing import List, Optional

import structlog

from eml_exploder.config import Settings
from eml_exploder.errors import FatalInputError
from eml_exploder.extraction.pipeline import explode_message
from eml_exploder.extraction.sinks import DirectorySink
from eml_exploder.extraction.trace import NullTraceSink, PrintTraceSink
from eml_exploder.logging_config import setup_logging
from eml_exploder.parsing.header_summary import format_summary, summarize_headers
from eml_exploder.parsing.message_reader import read_message
from eml_exploder.version import __version__


logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="eml-explode",
        description="Explode a multipart MIME message into one file per part",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Write parts of message.eml into ./out
  %(prog)s message.eml

  # Read stdin, write into parts/
  %(prog)s - --output parts/

  # Never let two unnamed parts overwrite each other
  %(prog)s message.eml --policy unique

Settings can also be given as EML_EXPLODER_* environment variables.
        """,
    )

    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Path to .eml file, or '-' for stdin (default: stdin)",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output directory (default: EML_EXPLODER_OUTPUT_DIR or 'out')",
    )

    parser.add_argument(
        "--policy",
        choices=["literal", "unique"],
        default=None,
        help="Synthesized filename policy (default: literal)",
    )

    parser.add_argument(
        "--on-bad-content-type",
        choices=["leaf", "reject"],
        default=None,
        help="Treat parts with an unparsable Content-Type as leaves or reject them",
    )

    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum multipart nesting depth, 0 for unlimited",
    )

    parser.add_argument(
        "--no-trace",
        action="store_true",
        help="Do not print the per-part traversal trace",
    )

    parser.add_argument(
        "--quiet-summary",
        action="store_true",
        help="Do not print the header summary",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Apply command-line overrides on top of environment settings."""
    overrides = {}
    if args.output is not None:
        overrides["output_dir"] = args.output
    if args.policy is not None:
        overrides["filename_policy"] = args.policy
    if args.on_bad_content_type is not None:
        overrides["unparsable_content_type"] = args.on_bad_content_type
    if args.max_depth is not None:
        overrides["max_depth"] = args.max_depth
    if args.no_trace:
        overrides["trace"] = False
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    return Settings(**overrides)


def run(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI and return the process exit status.

    Returns:
        0 when the top-level structure was valid (even if some parts failed),
        1 on a fatal input error
    """
    args = build_parser().parse_args(argv)
    config = settings_from_args(args)
    setup_logging(config)

    try:
        if args.input == "-":
            message = read_message(sys.stdin.buffer)
        else:
            try:
                with open(args.input, "rb") as f:
                    message = read_message(f.read())
            except OSError as e:
                raise FatalInputError(f"Cannot open {args.input}: {e}") from e

        if not args.quiet_summary:
            print(format_summary(summarize_headers(message.headers)), end="")

        trace = PrintTraceSink() if config.trace else NullTraceSink()
        sink = DirectorySink(config.output_dir, mode=config.file_mode)
        report = explode_message(message, sink, config=config, trace=trace)

    except FatalInputError as e:
        logger.error("explode_failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if report.failures:
        logger.warning("parts_skipped", count=report.failed)
    return 0


def main():
    """Main CLI entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
