"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- Test settings
- Sample messages
- In-memory and on-disk output sinks
"""

import io
import os

import pytest
import structlog

from eml_exploder.config import Settings
from eml_exploder.extraction.sinks import DirectorySink, MemorySink
from eml_exploder.extraction.trace import PrintTraceSink
from .fixtures.emails import SAMPLE_EMAILS


@pytest.fixture
def test_settings() -> Settings:
    """
    Settings with defaults made explicit and the trace turned off.

    Returns:
        Settings instance for tests
    """
    return Settings(
        output_dir="out",
        filename_policy="literal",
        unparsable_content_type="leaf",
        max_depth=0,
        log_level="WARNING",
        log_json=False,
        trace=False,
    )


@pytest.fixture
def memory_sink() -> MemorySink:
    """In-memory sink that records every write."""
    return MemorySink()


@pytest.fixture
def directory_sink(tmp_path) -> DirectorySink:
    """Directory sink writing under a temporary directory."""
    return DirectorySink(tmp_path / "out")


@pytest.fixture
def trace_buffer() -> io.StringIO:
    """Text buffer collecting trace lines."""
    return io.StringIO()


@pytest.fixture
def buffer_trace(trace_buffer) -> PrintTraceSink:
    """Trace sink printing into trace_buffer."""
    return PrintTraceSink(trace_buffer)


@pytest.fixture
def nested_eml() -> bytes:
    """
    Get the nested mixed/alternative message.

    Returns:
        bytes of multipart/mixed with a multipart/alternative part and an attachment
    """
    return SAMPLE_EMAILS["nested"]


@pytest.fixture
def tmp_eml_file(tmp_path) -> str:
    """
    Create temporary .eml file for file-based tests.

    Returns:
        Path to temporary .eml file holding the nested message
    """
    eml_path = tmp_path / "nested.eml"
    eml_path.write_bytes(SAMPLE_EMAILS["nested"])
    return str(eml_path)


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables after each test.

    This prevents test pollution from env var changes.
    """
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def reset_structlog():
    """
    Restore structlog defaults after each test.

    The CLI binds its logger output to the sys.stderr of the test that ran it,
    which pytest closes once that test is over.
    """
    yield
    structlog.reset_defaults()
