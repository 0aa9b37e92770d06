"""DTOs for template use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.application.dtos.document import DocumentSummary


@dataclass(frozen=True)
class TemplateResult:
    """Template read-model.

    placeholders maps declared keys to metadata; it informs previews and
    reporting but never restricts which keys a body may use.
    """

    id: str
    name: str
    template_type: str | None
    category: str | None
    content: str
    placeholders: dict[str, Any]
    usage_count: int
    version: int
    is_active: bool
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class TemplatePreview:
    """Rendered preview of a template with sample data (nothing persisted)."""

    original: str
    preview: str
    placeholders: dict[str, Any]
    unresolved_keys: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TemplateUsageStatistics:
    """Usage counter plus the documents that actually reference the template."""

    template_name: str
    usage_count: int
    documents_created: int
    recent_documents: list[DocumentSummary]
