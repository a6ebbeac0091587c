"""
Part models - body parts as yielded by the walker and as returned to callers.

A ``RawPart`` only lives while the walker sits on it: its body is a single-pass
stream bound to the walker position. A ``Part`` is a ``RawPart``'s headers plus
the fully drained body, and owns its content.
"""

import io
from email.message import Message
from typing import Optional

from pydantic import BaseModel, Field


class RawPart:
    """One body part during the walk: header view plus a lazy body stream."""

    __slots__ = ("headers", "body", "index")

    def __init__(self, headers: Message, body: io.RawIOBase, index: int):
        self.headers = headers
        self.body = body
        self.index = index

    def __repr__(self) -> str:
        return f"RawPart(index={self.index}, content_type={self.headers.get('Content-Type')!r})"


class Part(BaseModel):
    """
    A matched body part with its materialized content.

    Type and disposition are recomputed from the headers on access.
    """

    index: int = Field(description="Zero-based position of the part in the message")
    headers: Message = Field(description="Part headers (case-insensitive, first match wins)")
    content: bytes = Field(description="Raw body bytes between the delimiters")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @classmethod
    def from_raw(cls, raw: RawPart, content: bytes) -> "Part":
        return cls(index=raw.index, headers=raw.headers, content=content)

    @property
    def content_type(self) -> str:
        from ..classification.predicates import get_part_type

        return get_part_type(self)

    @property
    def disposition(self) -> str:
        from ..classification.predicates import get_part_disposition

        return get_part_disposition(self)

    @property
    def filename(self) -> Optional[str]:
        """Filename from the disposition, falling back to the Content-Type name."""
        from ..classification.predicates import resolve_header

        disposition = resolve_header(self.headers, "Content-Disposition")
        if disposition is not None and disposition.get("filename"):
            return disposition.get("filename")
        content_type = resolve_header(self.headers, "Content-Type")
        if content_type is not None and content_type.get("name"):
            return content_type.get("name")
        return None

    @property
    def size(self) -> int:
        return len(self.content)
