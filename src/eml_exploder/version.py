"""
Version constants for eml_exploder.
"""

__version__ = "1.0.0"
