"""Composition root: build engine services bound to one session.

All repositories and the audit service share the session, so everything a
service does inside ``transactional_session()`` commits or rolls back as one
unit.

Usage:
    async with transactional_session() as session:
        services = build_document_services(session)
        doc = await services.versioning.generate_from_template(...)
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.use_cases.documents import (
    DocumentLifecycleService,
    DocumentVersioningService,
)
from app.application.use_cases.templates import TemplateService
from app.core.config import Settings, get_settings
from app.infrastructure.persistence.repositories import (
    DocumentRepository,
    EntityDataProvider,
    TemplateRepository,
)
from app.infrastructure.services import ActivityAuditService


@dataclass(frozen=True)
class DocumentServices:
    """Services sharing one session (one unit of work)."""

    versioning: DocumentVersioningService
    lifecycle: DocumentLifecycleService
    templates: TemplateService


def build_document_services(
    session: AsyncSession,
    settings: Settings | None = None,
    *,
    enable_audit: bool = True,
) -> DocumentServices:
    """Wire SQL repositories and the activity audit sink into the services."""
    settings = settings or get_settings()
    template_repo = TemplateRepository(session)
    document_repo = DocumentRepository(session)
    audit = ActivityAuditService(session) if enable_audit else None
    return DocumentServices(
        versioning=DocumentVersioningService(
            template_repo,
            document_repo,
            EntityDataProvider(session),
            audit,
            placeholder_timezone=settings.placeholder_timezone,
            max_version_retries=settings.version_assignment_max_retries,
            max_name_attempts=settings.document_name_max_attempts,
        ),
        lifecycle=DocumentLifecycleService(document_repo, audit),
        templates=TemplateService(
            template_repo,
            document_repo,
            audit,
            placeholder_timezone=settings.placeholder_timezone,
            recent_documents_limit=settings.recent_documents_limit,
        ),
    )
