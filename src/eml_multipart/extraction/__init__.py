# Content materialization and part collection

from .collector import (
    combine_parts,
    find_parts,
    get_all_parts,
    get_attachments,
    get_html_parts,
    get_inline_text,
    get_parts,
    get_plain_text_parts,
    get_text_parts,
)
from .content import materialize

__all__ = [
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
