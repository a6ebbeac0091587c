# Part classification predicates

from .predicates import (
    PartPredicate,
    get_part_disposition,
    get_part_type,
    is_any_part,
    is_attachment,
    is_html_part,
    is_inline_text_part,
    is_plain_text_part,
    is_text_part,
    resolve_header,
)

__all__ = [
    "PartPredicate",
    "get_part_type",
    "get_part_disposition",
    "resolve_header",
    "is_any_part",
    "is_text_part",
    "is_plain_text_part",
    "is_html_part",
    "is_attachment",
    "is_inline_text_part",
]
