"""
CLI module for multipart part extraction.

Provides command-line tools for listing, filtering and saving message parts.
"""

from eml_multipart.cli.extract import main as extract_main

__all__ = ["extract_main"]
