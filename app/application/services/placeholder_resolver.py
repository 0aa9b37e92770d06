"""Placeholder resolution for template bodies.

A body is tokenized once into literal and placeholder segments, then each
placeholder is substituted in a second pass:

    "Dear {{name}}, {{current_year}}" ->
        [Literal("Dear "), Placeholder("name"), Literal(", "), Placeholder("current_year")]

Value precedence per key: system placeholder (current_date, current_time,
current_year) > entity attribute (when non-empty) > caller data > "".
Keys start with a letter or underscore (any script, so Turkish keys such as
``{{şirket_adı}}`` work) followed by letters, digits, ``_``, ``.`` or ``-``.
Keys a template declares are matched exactly as written even when they
fall outside that shape. A backslash directly before a token
(``\\{{key}}``) keeps it as literal text.
Substituted values are never re-scanned for tokens.

Everything here is pure: no I/O, deterministic for a given ``now``.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from functools import lru_cache
from typing import Any

from app.core.constants import (
    DATE_FORMAT,
    DATETIME_FORMAT,
    LIST_VALUE_SEPARATOR,
    SYSTEM_PLACEHOLDER_CURRENT_DATE,
    SYSTEM_PLACEHOLDER_CURRENT_TIME,
    SYSTEM_PLACEHOLDER_CURRENT_YEAR,
    SYSTEM_PLACEHOLDER_KEYS,
    TIME_FORMAT,
    YEAR_FORMAT,
)

_KEY_PATTERN = r"[^\W\d][\w.\-]*"


@lru_cache(maxsize=256)
def _token_re(declared: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = [re.escape(key) for key in sorted(declared, key=len, reverse=True)]
    alternatives.append(_KEY_PATTERN)
    return re.compile(r"(\\)?\{\{(" + "|".join(alternatives) + r")\}\}")


def _declared(declared_keys: Iterable[str] | None) -> tuple[str, ...]:
    return tuple(sorted({key for key in declared_keys or () if key}))


@dataclass(frozen=True)
class LiteralSegment:
    """Text copied to the output unchanged."""

    text: str


@dataclass(frozen=True)
class PlaceholderSegment:
    """A ``{{key}}`` token to substitute."""

    key: str


Segment = LiteralSegment | PlaceholderSegment


def tokenize(body: str, declared_keys: Iterable[str] | None = None) -> list[Segment]:
    """Split body into literal and placeholder segments in one pass.

    declared_keys are recognized verbatim as well as any well-formed key.

    Adjacent literal text (including escaped tokens) is merged into a single
    LiteralSegment. An empty body yields an empty list.
    """
    segments: list[Segment] = []
    pending: list[str] = []
    pos = 0
    for match in _token_re(_declared(declared_keys)).finditer(body):
        pending.append(body[pos : match.start()])
        if match.group(1):
            pending.append(match.group(0)[1:])
        else:
            if any(pending):
                segments.append(LiteralSegment("".join(pending)))
            pending = []
            segments.append(PlaceholderSegment(match.group(2)))
        pos = match.end()
    pending.append(body[pos:])
    if any(pending):
        segments.append(LiteralSegment("".join(pending)))
    return segments


def extract_placeholder_keys(
    body: str, declared_keys: Iterable[str] | None = None
) -> list[str]:
    """Return placeholder keys used in body, in first-seen order, without duplicates."""
    seen: dict[str, None] = {}
    for segment in tokenize(body, declared_keys):
        if isinstance(segment, PlaceholderSegment):
            seen.setdefault(segment.key, None)
    return list(seen)


def format_placeholder_value(value: Any) -> str:
    """Render an attribute or caller value as placeholder text.

    None renders empty; booleans as true/false; datetimes and dates in the
    dd.mm.yyyy convention; sequences joined with ", ".
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.strftime(DATETIME_FORMAT)
    if isinstance(value, date):
        return value.strftime(DATE_FORMAT)
    if isinstance(value, (list, tuple, set, frozenset)):
        items = (format_placeholder_value(v) for v in value)
        return LIST_VALUE_SEPARATOR.join(item for item in items if item)
    return str(value)


def system_placeholder_values(now: datetime) -> dict[str, str]:
    """Return the system placeholder map derived from now."""
    return {
        SYSTEM_PLACEHOLDER_CURRENT_DATE: now.strftime(DATE_FORMAT),
        SYSTEM_PLACEHOLDER_CURRENT_TIME: now.strftime(TIME_FORMAT),
        SYSTEM_PLACEHOLDER_CURRENT_YEAR: now.strftime(YEAR_FORMAT),
    }


def _user_value(
    key: str,
    entity_attributes: Mapping[str, Any],
    caller_data: Mapping[str, Any],
) -> str:
    if key in entity_attributes:
        value = format_placeholder_value(entity_attributes[key])
        if value:
            return value
    if key in caller_data:
        return format_placeholder_value(caller_data[key])
    return ""


def resolve_placeholders(
    body: str,
    entity_attributes: Mapping[str, Any] | None,
    caller_data: Mapping[str, Any] | None,
    now: datetime,
    *,
    keep_unresolved: bool = False,
    declared_keys: Iterable[str] | None = None,
) -> str:
    """Substitute every placeholder in body and return the rendered text.

    Args:
        body: Template body.
        entity_attributes: Attribute map of the target business record (authoritative).
        caller_data: Caller-supplied values; only fill keys the entity leaves empty.
        now: Generation time, already in the display time zone.
        keep_unresolved: Leave the {{key}} token in place instead of rendering
            an empty string (template previews).
        declared_keys: Keys the template declares; matched verbatim even
            when they contain spaces or other characters a key may not.

    Returns:
        Rendered body. Keys with no value anywhere render as empty strings.
    """
    attributes = entity_attributes or {}
    data = caller_data or {}
    system = system_placeholder_values(now)
    parts: list[str] = []
    for segment in tokenize(body, declared_keys):
        if isinstance(segment, LiteralSegment):
            parts.append(segment.text)
        elif segment.key in system:
            parts.append(system[segment.key])
        else:
            value = _user_value(segment.key, attributes, data)
            if not value and keep_unresolved:
                value = "{{" + segment.key + "}}"
            parts.append(value)
    return "".join(parts)


def find_unresolved_keys(
    body: str,
    entity_attributes: Mapping[str, Any] | None,
    caller_data: Mapping[str, Any] | None,
    declared_keys: Iterable[str] | None = None,
) -> list[str]:
    """Return non-system keys in body that would render as empty text."""
    attributes = entity_attributes or {}
    data = caller_data or {}
    return [
        key
        for key in extract_placeholder_keys(body, declared_keys)
        if key not in SYSTEM_PLACEHOLDER_KEYS and not _user_value(key, attributes, data)
    ]
