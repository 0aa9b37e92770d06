"""Application ports: repository and service Protocols."""

from app.application.interfaces.repositories import (
    IDocumentRepository,
    IEntityDataProvider,
    ITemplateRepository,
)
from app.application.interfaces.services import IAuditService

__all__ = [
    "IAuditService",
    "IDocumentRepository",
    "IEntityDataProvider",
    "ITemplateRepository",
]
