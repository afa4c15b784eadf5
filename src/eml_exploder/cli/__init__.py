"""
CLI module for MIME decomposition.
"""

from eml_exploder.cli.explode import main as explode_main

__all__ = ["explode_main"]
