"""
Part classification predicates.

Every predicate takes a part (``RawPart`` or ``Part``), looks only at its
headers and never touches the body. A missing or unparsable header resolves
to the empty string, so predicates return False instead of raising.
"""

from email.message import Message
from typing import Callable, Optional

from ..errors import ParseError
from ..models.media_type import MediaType
from ..parsing.headers import unfold
from ..parsing.media_type import parse_media_type

# Filter over a part's headers; True keeps the part.
PartPredicate = Callable[[object], bool]


def resolve_header(headers: Message, name: str) -> Optional[MediaType]:
    """Parse the first ``name`` header, or None when absent or malformed."""
    value = headers.get(name)
    if value is None:
        return None
    try:
        return parse_media_type(unfold(str(value)))
    except ParseError:
        return None


def get_part_type(part) -> str:
    """
    Return the Content-Type media type of a part.

    If the header is not set or cannot be parsed, an empty string is returned.
    """
    media_type = resolve_header(part.headers, "Content-Type")
    return media_type.value if media_type is not None else ""


def get_part_disposition(part) -> str:
    """
    Return the Content-Disposition token of a part.

    If the header is not set or cannot be parsed, an empty string is returned.
    """
    disposition = resolve_header(part.headers, "Content-Disposition")
    return disposition.value if disposition is not None else ""


def is_any_part(part) -> bool:
    return True


def is_text_part(part) -> bool:
    """True for text/* media types."""
    return get_part_type(part).startswith("text/")


def is_plain_text_part(part) -> bool:
    """True for text/plain media types."""
    return get_part_type(part).startswith("text/plain")


def is_html_part(part) -> bool:
    """True for text/html media types."""
    return get_part_type(part).startswith("text/html")


def is_attachment(part) -> bool:
    """True if the part disposition starts with attachment."""
    return get_part_disposition(part).startswith("attachment")


def is_inline_text_part(part) -> bool:
    """True for text parts that are not attachments."""
    return is_text_part(part) and not is_attachment(part)
