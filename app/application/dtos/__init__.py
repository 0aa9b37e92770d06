"""Application DTOs: read/write models passed between use cases and repositories."""

from app.application.dtos.document import (
    DocumentCreate,
    DocumentResult,
    DocumentSummary,
)
from app.application.dtos.template import (
    TemplatePreview,
    TemplateResult,
    TemplateUsageStatistics,
)

__all__ = [
    "DocumentCreate",
    "DocumentResult",
    "DocumentSummary",
    "TemplatePreview",
    "TemplateResult",
    "TemplateUsageStatistics",
]
