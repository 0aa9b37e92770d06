"""Shared enumerations for the CRM document engine.

Cross-cutting enums used by application and infrastructure (e.g. audit,
actor type). Domain-specific enums (document status, entity type) live
in app.domain.enums.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class ActorType(_ValuesMixin, str, Enum):
    """Actor type for audit tracking (who performed the action)."""

    USER = "user"
    SYSTEM = "system"
    EXTERNAL = "external"


class AuditAction(_ValuesMixin, str, Enum):
    """Activity actions recorded by the audit sink."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    ARCHIVE = "ARCHIVE"
    ACTIVATE = "ACTIVATE"
    CREATE_VERSION = "CREATE_VERSION"


class AuditEntityType(_ValuesMixin, str, Enum):
    """Kinds of records the engine writes activity rows about."""

    DOCUMENT = "DOCUMENT"
    TEMPLATE = "TEMPLATE"
