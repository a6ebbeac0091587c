"""
Envelope reader: splits the message header block from the body and checks
that the message is multipart.
"""

import io
from email.message import Message
from typing import BinaryIO, Tuple, Union

from ..config import settings
from ..errors import (
    MissingContentTypeError,
    NotAnEmailError,
    NotMultipartError,
    StreamReadError,
)
from ..logging_config import get_logger
from ..models.media_type import MediaType
from .headers import HeaderBlockError, read_header_block, unfold
from .media_type import is_multipart, parse_media_type
from .walker import MultipartReader

logger = get_logger(__name__)

MessageSource = Union[bytes, bytearray, BinaryIO]


def as_stream(source: MessageSource) -> BinaryIO:
    """Wrap raw bytes in a stream; streams pass through unchanged."""
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(bytes(source))
    return source


def read_message(source: MessageSource) -> Tuple[Message, BinaryIO]:
    """
    Read the message header block.

    Args:
        source: Raw message bytes or a binary stream

    Returns:
        Tuple of (headers, body_stream); body_stream continues right after
        the blank line separating headers from body

    Raises:
        NotAnEmailError: If no valid header block is found
        StreamReadError: If the underlying read fails
    """
    stream = as_stream(source)

    def readline() -> bytes:
        if getattr(stream, "closed", False):
            raise StreamReadError("underlying stream is closed")
        try:
            # At most one byte past the cap
            return stream.readline(settings.max_header_bytes + 1)
        except OSError as e:
            raise StreamReadError(f"read failed: {e}") from e

    try:
        headers, _ = read_header_block(readline, settings.max_header_bytes)
    except HeaderBlockError as e:
        raise NotAnEmailError(f"Failed to parse message headers: {e}") from e

    if not headers.keys():
        raise NotAnEmailError("Failed to parse message headers: no header block")

    return headers, stream


def get_message_type(headers: Message) -> MediaType:
    """
    Resolve the Content-Type of a message.

    Raises:
        MissingContentTypeError: If the header is absent
        ParseError: If the header is malformed
    """
    content_type = headers.get("Content-Type")
    if content_type is None:
        raise MissingContentTypeError("Message has no Content-Type header")
    return parse_media_type(unfold(str(content_type)))


def open_multipart(source: MessageSource) -> Tuple[str, BinaryIO]:
    """
    Read the envelope and return the boundary plus the body stream.

    An absent boundary parameter is returned as "" and not repaired.

    Raises:
        NotAnEmailError, MissingContentTypeError, ParseError, NotMultipartError
    """
    headers, body = read_message(source)
    media_type = get_message_type(headers)

    if not is_multipart(media_type.value):
        raise NotMultipartError(media_type.value)

    boundary = media_type.get("boundary")
    if not boundary:
        logger.warning("multipart_boundary_missing", media_type=media_type.value)

    logger.debug("multipart_opened", media_type=media_type.value, boundary=boundary)
    return boundary, body


def open_multipart_reader(source: MessageSource) -> MultipartReader:
    """
    Open a multipart message for part-by-part reading.

    Args:
        source: Raw message bytes or a binary stream

    Returns:
        MultipartReader positioned at the start of the body

    Raises:
        NotAnEmailError: If the stream does not contain an email
        MissingContentTypeError: If the message has no Content-Type
        ParseError: If the Content-Type is malformed
        NotMultipartError: If the message is not multipart/*
    """
    boundary, body = open_multipart(source)
    return MultipartReader(body, boundary)
