"""Template operations: guarded deletion, preview, usage statistics and revision."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from app.application.dtos.template import (
    TemplatePreview,
    TemplateResult,
    TemplateUsageStatistics,
)
from app.application.interfaces.repositories import (
    IDocumentRepository,
    ITemplateRepository,
)
from app.application.interfaces.services import IAuditService
from app.application.services.placeholder_resolver import (
    find_unresolved_keys,
    resolve_placeholders,
)
from app.core.constants import DEFAULT_RECENT_DOCUMENTS_LIMIT
from app.domain.exceptions import (
    ResourceNotFoundException,
    TemplateInUseException,
    ValidationException,
)
from app.shared.context import resolve_actor_id
from app.shared.enums import AuditAction, AuditEntityType
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import traced
from app.shared.utils.datetime import to_zone, utc_now

logger = get_logger(__name__)


class TemplateService:
    """Template administration that must respect the documents built from it."""

    def __init__(
        self,
        template_repo: ITemplateRepository,
        document_repo: IDocumentRepository,
        audit_service: IAuditService | None = None,
        *,
        clock: Callable[[], datetime] = utc_now,
        placeholder_timezone: str = "UTC",
        recent_documents_limit: int = DEFAULT_RECENT_DOCUMENTS_LIMIT,
    ) -> None:
        self.template_repo = template_repo
        self.document_repo = document_repo
        self.audit_service = audit_service
        self._clock = clock
        self._placeholder_timezone = placeholder_timezone
        self._recent_documents_limit = recent_documents_limit

    async def _get_or_raise(self, template_id: str) -> TemplateResult:
        template = await self.template_repo.get_by_id(template_id)
        if not template:
            raise ResourceNotFoundException("template", template_id)
        return template

    @traced("templates.delete")
    async def delete_template(
        self, template_id: str, actor_id: str | None = None
    ) -> None:
        """Delete a template no document references.

        Raises:
            ResourceNotFoundException: Template does not exist.
            TemplateInUseException: At least one document references it.
        """
        template = await self._get_or_raise(template_id)
        in_use = await self.document_repo.count_by_template_id(template_id)
        if in_use > 0:
            raise TemplateInUseException([template_id], in_use)
        if not await self.template_repo.delete(template_id):
            raise ResourceNotFoundException("template", template_id)
        logger.info("Deleted template %s (%s)", template_id, template.name)
        await self._record_activity(
            template_id,
            AuditAction.DELETE,
            f'Template "{template.name}" deleted',
            actor_id,
        )

    @traced("templates.bulk_delete")
    async def bulk_delete_templates(
        self, template_ids: list[str], actor_id: str | None = None
    ) -> int:
        """Delete several templates at once; all or none.

        Returns:
            Number of templates removed (ids that did not exist are ignored).

        Raises:
            ValidationException: template_ids is empty.
            TemplateInUseException: Any of them is referenced by a document.
        """
        ids = list(dict.fromkeys(template_ids))
        if not ids:
            raise ValidationException(
                "At least one template id is required", field="template_ids"
            )
        in_use = await self.document_repo.count_by_template_ids(ids)
        if in_use > 0:
            raise TemplateInUseException(ids, in_use)
        deleted = await self.template_repo.delete_many(ids)
        logger.info("Bulk deleted %d of %d templates", deleted, len(ids))
        for template_id in ids:
            await self._record_activity(
                template_id, AuditAction.DELETE, "Template deleted (bulk)", actor_id
            )
        return deleted

    @traced("templates.preview")
    async def preview_template(
        self, template_id: str, sample_data: Mapping[str, Any] | None = None
    ) -> TemplatePreview:
        """Render the template with sample values; nothing is stored or counted.

        System placeholders are filled; keys absent from sample_data stay as
        their {{key}} token so the preview shows what is still missing.
        """
        template = await self._get_or_raise(template_id)
        now = to_zone(self._clock(), self._placeholder_timezone)
        data = dict(sample_data or {})
        declared = dict(template.placeholders or {})
        return TemplatePreview(
            original=template.content,
            preview=resolve_placeholders(
                template.content,
                None,
                data,
                now,
                keep_unresolved=True,
                declared_keys=declared,
            ),
            placeholders=declared,
            unresolved_keys=find_unresolved_keys(
                template.content, None, data, declared_keys=declared
            ),
        )

    @traced("templates.usage_statistics")
    async def get_usage_statistics(
        self, template_id: str, recent_limit: int | None = None
    ) -> TemplateUsageStatistics:
        """Return the usage counter, the referencing document count and the newest documents."""
        template = await self._get_or_raise(template_id)
        limit = recent_limit if recent_limit is not None else self._recent_documents_limit
        documents_created = await self.document_repo.count_by_template_id(template_id)
        recent = await self.document_repo.list_recent_by_template(template_id, limit)
        return TemplateUsageStatistics(
            template_name=template.name,
            usage_count=template.usage_count,
            documents_created=documents_created,
            recent_documents=recent,
        )

    @traced("templates.revise")
    async def revise_template(
        self,
        template_id: str,
        content: str,
        placeholders: dict[str, Any] | None = None,
        actor_id: str | None = None,
    ) -> TemplateResult:
        """Replace the template body and bump its version.

        Documents already generated keep their rendered content.
        """
        revised = await self.template_repo.revise(template_id, content, placeholders)
        if revised is None:
            raise ResourceNotFoundException("template", template_id)
        logger.info("Template %s revised to version %d", template_id, revised.version)
        await self._record_activity(
            template_id,
            AuditAction.UPDATE,
            f'Template "{revised.name}" updated to version {revised.version}',
            actor_id,
        )
        return revised

    async def _record_activity(
        self,
        template_id: str,
        action: AuditAction,
        description: str,
        actor_id: str | None,
    ) -> None:
        if self.audit_service is None:
            return
        actor = resolve_actor_id(actor_id)
        try:
            await self.audit_service.record(
                AuditEntityType.TEMPLATE, template_id, action, description, actor
            )
        except Exception as e:
            logger.warning(
                "Failed to record %s activity for template %s: %s",
                action.value,
                template_id,
                str(e),
                exc_info=True,
            )
