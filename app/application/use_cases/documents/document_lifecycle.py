"""Document status changes: DRAFT -> ACTIVE -> ARCHIVED."""

from __future__ import annotations

from app.application.dtos.document import DocumentResult
from app.application.interfaces.repositories import IDocumentRepository
from app.application.interfaces.services import IAuditService
from app.domain.enums import DocumentStatus
from app.domain.exceptions import (
    ConcurrencyConflictException,
    InvalidStatusTransitionException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.context import resolve_actor_id
from app.shared.enums import AuditAction, AuditEntityType
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import traced

logger = get_logger(__name__)

_AUDIT_ACTIONS = {
    DocumentStatus.ACTIVE: AuditAction.ACTIVATE,
    DocumentStatus.ARCHIVED: AuditAction.ARCHIVE,
    DocumentStatus.DRAFT: AuditAction.UPDATE,
}


class DocumentLifecycleService:
    """Moves a single document version through its status lifecycle.

    Each write is conditional on the status that was read, so two requests
    racing on the same document cannot both succeed.
    """

    def __init__(
        self,
        document_repo: IDocumentRepository,
        audit_service: IAuditService | None = None,
    ) -> None:
        self.document_repo = document_repo
        self.audit_service = audit_service

    async def activate(
        self, document_id: str, actor_id: str | None = None
    ) -> DocumentResult:
        return await self.change_status(document_id, DocumentStatus.ACTIVE, actor_id)

    async def archive(
        self, document_id: str, actor_id: str | None = None
    ) -> DocumentResult:
        return await self.change_status(
            document_id, DocumentStatus.ARCHIVED, actor_id
        )

    @traced("documents.change_status")
    async def change_status(
        self,
        document_id: str,
        target_status: DocumentStatus | str,
        actor_id: str | None = None,
    ) -> DocumentResult:
        """Move document to target_status.

        Requesting the current status returns the document unchanged.

        Raises:
            ResourceNotFoundException: Document does not exist.
            InvalidStatusTransitionException: Lifecycle forbids the move.
            ConcurrencyConflictException: Status changed after it was read.
        """
        try:
            target = (
                target_status
                if isinstance(target_status, DocumentStatus)
                else DocumentStatus(str(target_status).strip().upper())
            )
        except ValueError:
            raise ValidationException(
                f"Unsupported status {target_status!r}; expected one of "
                f"{', '.join(DocumentStatus.values())}",
                field="status",
            ) from None
        document = await self.document_repo.get_by_id(document_id)
        if not document:
            raise ResourceNotFoundException("document", document_id)
        if document.status == target:
            return document
        if not document.status.can_transition_to(target):
            raise InvalidStatusTransitionException(
                document_id, document.status.value, target.value
            )

        updated = await self.document_repo.update_status_if_current(
            document_id, document.status, target
        )
        if updated is None:
            raise ConcurrencyConflictException("document", document_id, 1)

        actor = resolve_actor_id(actor_id)
        logger.info(
            "Document %s moved from %s to %s",
            document_id,
            document.status.value,
            target.value,
        )
        if self.audit_service is not None:
            try:
                await self.audit_service.record(
                    AuditEntityType.DOCUMENT,
                    document_id,
                    _AUDIT_ACTIONS[target],
                    f'Document "{document.name}" v{document.version} '
                    f"status changed to {target.value}",
                    actor,
                )
            except Exception as e:
                logger.warning(
                    "Failed to record status change for document %s: %s",
                    document_id,
                    str(e),
                    exc_info=True,
                )
        return updated
