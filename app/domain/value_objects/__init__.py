"""Domain value objects."""

from app.domain.value_objects.core import EntityRef, LogicalIdentity

__all__ = ["EntityRef", "LogicalIdentity"]
