"""Application services: placeholder tokenizing and resolution."""

from app.application.services.placeholder_resolver import (
    LiteralSegment,
    PlaceholderSegment,
    extract_placeholder_keys,
    find_unresolved_keys,
    format_placeholder_value,
    resolve_placeholders,
    system_placeholder_values,
    tokenize,
)

__all__ = [
    "LiteralSegment",
    "PlaceholderSegment",
    "extract_placeholder_keys",
    "find_unresolved_keys",
    "format_placeholder_value",
    "resolve_placeholders",
    "system_placeholder_values",
    "tokenize",
]
