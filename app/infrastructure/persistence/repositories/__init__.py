"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.document_repo import DocumentRepository
from app.infrastructure.persistence.repositories.entity_data_provider import (
    EntityDataProvider,
)
from app.infrastructure.persistence.repositories.template_repo import TemplateRepository

__all__ = [
    "BaseRepository",
    "DocumentRepository",
    "EntityDataProvider",
    "TemplateRepository",
]
