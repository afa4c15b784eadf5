"""
Application configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Extraction configuration from environment variables.

    Every field can be overridden with an ``EML_EXPLODER_``-prefixed
    environment variable (e.g. ``EML_EXPLODER_FILENAME_POLICY=unique``).
    """

    # Output
    output_dir: str = "out"
    file_mode: int = 0o644

    # Filename synthesis
    # "literal": every synthesized name in one multipart level uses synthesized_index
    # "unique": synthesized_index is the first value of a per-level counter
    filename_policy: Literal["literal", "unique"] = "literal"
    synthesized_index: int = 1

    # Classifier behaviour for a Content-Type that cannot be parsed
    unparsable_content_type: Literal["leaf", "reject"] = "leaf"

    # Nesting limit, 0 disables the check
    max_depth: int = 0

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Diagnostics
    trace: bool = True

    model_config = {
        "env_prefix": "EML_EXPLODER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()
