"""Application use cases: one entry point per workflow."""

from app.application.use_cases.documents import (
    DocumentLifecycleService,
    DocumentVersioningService,
)
from app.application.use_cases.templates import TemplateService

__all__ = [
    "DocumentLifecycleService",
    "DocumentVersioningService",
    "TemplateService",
]
