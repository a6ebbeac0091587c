# Data models for multipart extraction

from .media_type import MediaType
from .part import Part, RawPart

__all__ = [
    "MediaType",
    "Part",
    "RawPart",
]
