"""Command-line interface module for Mini DOM Parser.

This module provides the ``mini-dom`` tool for parsing, validating and
dumping markup files.
"""

from .main import main

__all__ = ["main"]
