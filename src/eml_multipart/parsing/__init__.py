# Envelope reading, media type parsing and multipart walking

from .envelope import (
    get_message_type,
    open_multipart,
    open_multipart_reader,
    read_message,
)
from .media_type import is_multipart, parse_media_type
from .walker import MultipartReader, PartBody

__all__ = [
    "parse_media_type",
    "is_multipart",
    "read_message",
    "get_message_type",
    "open_multipart",
    "open_multipart_reader",
    "MultipartReader",
    "PartBody",
]
