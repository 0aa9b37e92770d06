"""DTOs for document use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.domain.enums import DocumentStatus, EntityType
from app.domain.value_objects import LogicalIdentity


@dataclass(frozen=True)
class DocumentCreate:
    """Input for inserting a document row (write-model). Use case builds this; repo persists and returns DocumentResult."""

    id: str
    name: str
    document_type: str | None
    document_date: datetime | None
    entity_type: EntityType
    entity_id: str
    template_id: str | None
    content: str
    metadata: dict[str, Any] | None
    status: DocumentStatus
    version: int
    created_by: str | None


@dataclass(frozen=True)
class DocumentResult:
    """Document read-model (result of get_by_id, get_by_logical_identity, create_document)."""

    id: str
    name: str
    document_type: str | None
    document_date: datetime | None
    entity_type: EntityType
    entity_id: str
    template_id: str | None
    content: str
    metadata: dict[str, Any] | None
    status: DocumentStatus
    version: int
    created_by: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def logical_identity(self) -> LogicalIdentity:
        return LogicalIdentity(self.name, self.entity_type, self.entity_id)


@dataclass(frozen=True)
class DocumentSummary:
    """Minimal document fields for template usage statistics."""

    id: str
    name: str
    entity_type: EntityType
    created_at: datetime | None
