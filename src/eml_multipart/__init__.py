"""
Extract and classify the body parts of MIME multipart email messages.

Quick use::

    from eml_multipart import get_attachments, get_inline_text

    with open("message.eml", "rb") as f:
        text = get_inline_text(f)
"""

from .classification import (
    PartPredicate,
    get_part_disposition,
    get_part_type,
    is_any_part,
    is_attachment,
    is_html_part,
    is_inline_text_part,
    is_plain_text_part,
    is_text_part,
)
from .errors import (
    MalformedMultipartError,
    MissingContentTypeError,
    MultipartError,
    NotAnEmailError,
    NotMultipartError,
    ParseError,
    StreamReadError,
    TruncatedMultipartError,
)
from .extraction import (
    combine_parts,
    find_parts,
    get_all_parts,
    get_attachments,
    get_html_parts,
    get_inline_text,
    get_parts,
    get_plain_text_parts,
    get_text_parts,
    materialize,
)
from .models import MediaType, Part, RawPart
from .parsing import (
    MultipartReader,
    get_message_type,
    is_multipart,
    open_multipart,
    open_multipart_reader,
    parse_media_type,
)
from .version import __version__

__all__ = [
    "__version__",
    # Models
    "MediaType",
    "Part",
    "RawPart",
    # Errors
    "MultipartError",
    "NotAnEmailError",
    "MissingContentTypeError",
    "ParseError",
    "NotMultipartError",
    "TruncatedMultipartError",
    "MalformedMultipartError",
    "StreamReadError",
    # Parsing
    "parse_media_type",
    "is_multipart",
    "get_message_type",
    "open_multipart",
    "open_multipart_reader",
    "MultipartReader",
    # Classification
    "PartPredicate",
    "get_part_type",
    "get_part_disposition",
    "is_any_part",
    "is_text_part",
    "is_plain_text_part",
    "is_html_part",
    "is_attachment",
    "is_inline_text_part",
    # Extraction
    "materialize",
    "find_parts",
    "get_parts",
    "get_all_parts",
    "get_text_parts",
    "get_plain_text_parts",
    "get_html_parts",
    "get_attachments",
    "get_inline_text",
    "combine_parts",
]
