"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, entity data, audit).
"""

from app.application.interfaces import (
    IAuditService,
    IDocumentRepository,
    IEntityDataProvider,
    ITemplateRepository,
)
from app.application.use_cases import (
    DocumentLifecycleService,
    DocumentVersioningService,
    TemplateService,
)

__all__ = [
    "DocumentLifecycleService",
    "DocumentVersioningService",
    "IAuditService",
    "IDocumentRepository",
    "IEntityDataProvider",
    "ITemplateRepository",
    "TemplateService",
]
