"""
Exception hierarchy for multipart extraction.

Every structural failure is raised to the caller; nothing here is recovered
locally. Errors raised while collecting carry whatever was already gathered:

- ``parts``: parts matched and materialized before the failure
- ``partial_content``: bytes drained from the failing part before the failure
"""

from typing import List, Optional


class MultipartError(Exception):
    """Base class for all multipart extraction errors."""

    def __init__(
        self,
        message: str = "",
        *,
        parts: Optional[List] = None,
        partial_content: Optional[bytes] = None,
    ):
        super().__init__(message)
        self.parts = parts if parts is not None else []
        self.partial_content = partial_content


class NotAnEmailError(MultipartError):
    """The stream does not start with a valid RFC 5322 header block."""


class MissingContentTypeError(MultipartError):
    """The message has no Content-Type header."""


class ParseError(MultipartError, ValueError):
    """A media type or parameter string is malformed."""


class NotMultipartError(MultipartError):
    """The top-level media type is not multipart/*."""

    def __init__(self, media_type: str, **kwargs):
        super().__init__(f"Not multipart: {media_type}", **kwargs)
        self.media_type = media_type


class TruncatedMultipartError(MultipartError):
    """The stream ended before the terminal boundary delimiter."""


class MalformedMultipartError(MultipartError):
    """Unexpected content between parts or a broken part header line."""


class StreamReadError(MultipartError, OSError):
    """The underlying stream failed or was closed while reading."""
