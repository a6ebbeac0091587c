"""
Version constants for the multipart extraction library.
"""

__version__ = "1.0.0"

# Component version (update when the walking/classification rules change)
PARSER_VERSION = "multipart-walker-1.0.0"
