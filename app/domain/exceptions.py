"""Domain exceptions for the CRM document engine.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. The enclosing
request handler maps them to transport responses (404, 400, 409, ...)
using error_code.
"""

from typing import Any


class CrmException(Exception):
    """Base exception for all document engine errors.

    All custom exceptions inherit from this class so callers can handle
    engine failures uniformly and map them using message, error_code,
    and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(CrmException):
    """Raised when input validation fails (e.g. unsupported entity type)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(CrmException):
    """Raised when a referenced template, document, or business entity does not exist."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'template', 'document', 'company').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class TemplateInUseException(CrmException):
    """Raised when deleting templates that documents still reference."""

    def __init__(self, template_ids: list[str], document_count: int) -> None:
        if len(template_ids) == 1:
            message = (
                f"Cannot delete template. It is being used by {document_count} document(s)"
            )
        else:
            message = (
                f"Cannot delete templates that are being used by documents "
                f"({document_count} document(s) reference them)"
            )
        super().__init__(
            message,
            "TEMPLATE_IN_USE",
            {"template_ids": list(template_ids), "document_count": document_count},
        )


class ConcurrencyConflictException(CrmException):
    """Raised when a compare-and-swap write kept losing to concurrent requests; safe to retry."""

    def __init__(self, resource_type: str, resource_id: str, attempts: int) -> None:
        super().__init__(
            f"{resource_type} {resource_id} was modified concurrently; retry.",
            "CONCURRENCY_CONFLICT",
            {
                "resource_type": resource_type,
                "resource_id": resource_id,
                "attempts": attempts,
            },
        )


class DocumentIdentityConflictException(CrmException):
    """Raised when a new version chain would reuse an existing (name, entity) identity."""

    def __init__(self, name: str, entity_type: str, entity_id: str) -> None:
        super().__init__(
            f"A document named '{name}' already exists for {entity_type} {entity_id}; "
            "create a new version of it instead.",
            "DOCUMENT_IDENTITY_CONFLICT",
            {"name": name, "entity_type": entity_type, "entity_id": entity_id},
        )


class InvalidStatusTransitionException(CrmException):
    """Raised when a document status change is not allowed by the lifecycle."""

    def __init__(self, document_id: str, current: str, target: str) -> None:
        super().__init__(
            f"Cannot move document {document_id} from {current} to {target}",
            "INVALID_STATUS_TRANSITION",
            {"document_id": document_id, "current": current, "target": target},
        )


class SqlNotConfiguredException(CrmException):
    """Raised when a session is requested but no database engine could be created."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
