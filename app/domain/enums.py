"""Domain enumerations for the CRM document engine.

Enums represent fixed sets of domain values (document status, business
entity type).
"""

from enum import Enum

from app.domain.exceptions import ValidationException


class DocumentStatus(str, Enum):
    """Document lifecycle status.

    DRAFT -> ACTIVE -> ARCHIVED; DRAFT may also go straight to ARCHIVED.
    ARCHIVED is terminal.
    """

    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings."""
        return [status.value for status in cls]

    def can_transition_to(self, target: "DocumentStatus") -> bool:
        """Return whether the lifecycle allows moving from this status to target."""
        return target in _ALLOWED_TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        return not _ALLOWED_TRANSITIONS[self]


_ALLOWED_TRANSITIONS: dict[DocumentStatus, frozenset[DocumentStatus]] = {
    DocumentStatus.DRAFT: frozenset({DocumentStatus.ACTIVE, DocumentStatus.ARCHIVED}),
    DocumentStatus.ACTIVE: frozenset({DocumentStatus.ARCHIVED}),
    DocumentStatus.ARCHIVED: frozenset(),
}


class EntityType(str, Enum):
    """Business records a document can be generated for."""

    COMPANY = "COMPANY"
    BRAND = "BRAND"
    BRANCH = "BRANCH"
    PERSON = "PERSON"

    @classmethod
    def values(cls) -> list[str]:
        return [entity_type.value for entity_type in cls]

    @classmethod
    def parse(cls, value: "str | EntityType") -> "EntityType":
        """Return the EntityType for value (case-insensitive).

        Raises:
            ValidationException: If value is not a supported entity type.
        """
        if isinstance(value, cls):
            return value
        normalized = value.strip().upper() if isinstance(value, str) else ""
        try:
            return cls(normalized)
        except ValueError:
            raise ValidationException(
                f"Unsupported entity type {value!r}; expected one of {', '.join(cls.values())}",
                field="entity_type",
            ) from None

    @property
    def resource_name(self) -> str:
        """Lower-case name used in not-found errors (e.g. 'company')."""
        return self.value.lower()
