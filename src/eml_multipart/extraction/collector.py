"""
Part collection: walk a message, keep the parts a predicate accepts and
materialize only those.
"""

from typing import List

from ..classification.predicates import (
    PartPredicate,
    is_any_part,
    is_attachment,
    is_html_part,
    is_inline_text_part,
    is_plain_text_part,
    is_text_part,
)
from ..errors import MultipartError
from ..logging_config import get_logger
from ..models.part import Part
from ..parsing.envelope import MessageSource, open_multipart_reader
from ..parsing.walker import MultipartReader
from .content import materialize

logger = get_logger(__name__)


def find_parts(reader: MultipartReader, predicate: PartPredicate) -> List[Part]:
    """
    Return the parts for which predicate returns True, in message order.

    Rejected parts are skipped without being buffered.

    Raises:
        MultipartError: On the first walker or read failure; parts collected
            before it are attached as ``parts``
    """
    parts: List[Part] = []
    try:
        for raw in reader:
            if predicate(raw):
                parts.append(Part.from_raw(raw, materialize(raw)))
    except MultipartError as e:
        e.parts = parts
        logger.warning(
            "parts_collection_failed",
            error=str(e),
            error_type=type(e).__name__,
            collected=len(parts),
        )
        raise

    logger.debug(
        "parts_collected",
        walked=reader.parts_read,
        matched=len(parts),
        predicate=getattr(predicate, "__name__", repr(predicate)),
    )
    return parts


def get_parts(source: MessageSource, predicate: PartPredicate) -> List[Part]:
    """Open a multipart message and collect the parts predicate accepts."""
    reader = open_multipart_reader(source)
    return find_parts(reader, predicate)


def get_all_parts(source: MessageSource) -> List[Part]:
    """Return every part."""
    return get_parts(source, is_any_part)


def get_text_parts(source: MessageSource) -> List[Part]:
    """Return the text/* parts."""
    return get_parts(source, is_text_part)


def get_plain_text_parts(source: MessageSource) -> List[Part]:
    """Return the text/plain parts."""
    return get_parts(source, is_plain_text_part)


def get_html_parts(source: MessageSource) -> List[Part]:
    """Return the text/html parts."""
    return get_parts(source, is_html_part)


def get_attachments(source: MessageSource) -> List[Part]:
    """Return the parts with an attachment disposition."""
    return get_parts(source, is_attachment)


def get_inline_text(source: MessageSource) -> str:
    """Return the non-attachment text parts combined into one string."""
    return combine_parts(get_parts(source, is_inline_text_part))


def combine_parts(parts: List[Part]) -> str:
    """
    Concatenate part contents, each preceded by a newline.

    The first part is preceded by a newline too, so non-empty output starts
    with a blank line. Content is read as UTF-8 with invalid bytes replaced.
    """
    return "".join("\n" + part.content.decode("utf-8", errors="replace") for part in parts)
