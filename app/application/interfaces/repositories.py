"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain types only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.document import (
        DocumentCreate,
        DocumentResult,
        DocumentSummary,
    )
    from app.application.dtos.template import TemplateResult
    from app.domain.enums import DocumentStatus, EntityType
    from app.domain.value_objects import LogicalIdentity


# Template store interface
class ITemplateRepository(Protocol):
    """Protocol for template persistence consumed by the document engine."""

    async def get_by_id(self, template_id: str) -> TemplateResult | None:
        """Return template by ID, or None."""

    async def increment_usage(self, template_id: str) -> int:
        """Atomically add 1 to usage_count; return the new count. Safe under concurrent calls."""

    async def revise(
        self,
        template_id: str,
        content: str,
        placeholders: dict[str, Any] | None,
    ) -> TemplateResult | None:
        """Replace body (and placeholders when given) and atomically bump version; None if missing."""

    async def delete(self, template_id: str) -> bool:
        """Delete template; return False if it did not exist."""

    async def delete_many(self, template_ids: list[str]) -> int:
        """Delete templates by id; return number of rows removed."""


# Document store interface
class IDocumentRepository(Protocol):
    """Protocol for document persistence and per-identity version counters."""

    async def create_document(self, document: DocumentCreate) -> DocumentResult:
        """Insert a new document row; return read-model."""

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        """Return document by ID, or None."""

    async def get_by_logical_identity(
        self, identity: LogicalIdentity
    ) -> list[DocumentResult]:
        """Return every version sharing identity, ordered by version descending (head first)."""

    async def count_by_template_id(self, template_id: str) -> int:
        """Return number of documents referencing template_id."""

    async def count_by_template_ids(self, template_ids: list[str]) -> int:
        """Return number of documents referencing any of template_ids."""

    async def list_recent_by_template(
        self, template_id: str, limit: int
    ) -> list[DocumentSummary]:
        """Return the newest documents generated from template_id."""

    async def get_max_version(self, identity: LogicalIdentity) -> int | None:
        """Return the highest stored version for identity, or None when the chain is empty."""

    async def get_version_counter(self, identity: LogicalIdentity) -> int | None:
        """Return last assigned version for identity, or None if no counter exists."""

    async def init_version_counter(
        self, identity: LogicalIdentity, last_version: int
    ) -> bool:
        """Create the identity's counter at last_version; False if it already exists."""

    async def compare_and_set_version_counter(
        self, identity: LogicalIdentity, expected: int, new: int
    ) -> bool:
        """Set counter to new only if it still equals expected; True when this call won."""

    async def update_status_if_current(
        self,
        document_id: str,
        expected: DocumentStatus,
        target: DocumentStatus,
    ) -> DocumentResult | None:
        """Move status expected -> target only if unchanged since read; None when another request won."""


# Entity data provider interface
class IEntityDataProvider(Protocol):
    """Protocol for flattening a business record into placeholder attributes."""

    async def get_attributes(
        self, entity_type: EntityType, entity_id: str
    ) -> dict[str, Any] | None:
        """Return attribute map for (entity_type, entity_id), or None if the id does not resolve."""
