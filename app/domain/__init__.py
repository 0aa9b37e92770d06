"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure. Used by application and
infrastructure layers.
"""

from app.domain.enums import DocumentStatus, EntityType
from app.domain.exceptions import (
    ConcurrencyConflictException,
    CrmException,
    DocumentIdentityConflictException,
    InvalidStatusTransitionException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    TemplateInUseException,
    ValidationException,
)
from app.domain.value_objects import EntityRef, LogicalIdentity

__all__ = [
    # Enums
    "DocumentStatus",
    "EntityType",
    # Exceptions
    "ConcurrencyConflictException",
    "CrmException",
    "DocumentIdentityConflictException",
    "InvalidStatusTransitionException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "TemplateInUseException",
    "ValidationException",
    # Value objects
    "EntityRef",
    "LogicalIdentity",
]
