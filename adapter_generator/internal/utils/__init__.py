"""Утилиты для генератора"""

from .field_utils import (
    canonical_type_name,
    go_title,
    parse_struct_tag,
    pascal_case,
    pick_tag,
    qualified_type_name,
    sanitize_identifier,
)

__all__ = [
    "canonical_type_name",
    "go_title",
    "parse_struct_tag",
    "pascal_case",
    "pick_tag",
    "qualified_type_name",
    "sanitize_identifier",
]
