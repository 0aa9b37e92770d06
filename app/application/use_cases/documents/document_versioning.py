"""Document generation and versioning: template merge, version chains, history."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from app.application.dtos.document import DocumentCreate, DocumentResult
from app.application.dtos.template import TemplateResult
from app.application.interfaces.repositories import (
    IDocumentRepository,
    IEntityDataProvider,
    ITemplateRepository,
)
from app.application.interfaces.services import IAuditService
from app.application.services.placeholder_resolver import (
    find_unresolved_keys,
    resolve_placeholders,
)
from app.core.constants import (
    DATE_FORMAT,
    DEFAULT_DOCUMENT_NAME_MAX_ATTEMPTS,
    DEFAULT_VERSION_ASSIGNMENT_MAX_RETRIES,
    DOCUMENT_NAME_KEY,
)
from app.domain.enums import DocumentStatus, EntityType
from app.domain.exceptions import (
    ConcurrencyConflictException,
    DocumentIdentityConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects import EntityRef, LogicalIdentity
from app.shared.context import resolve_actor_id
from app.shared.enums import AuditAction, AuditEntityType
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced
from app.shared.utils.datetime import ensure_utc, to_zone, utc_now
from app.shared.utils.generators import generate_cuid

logger = get_logger(__name__)


def _parse_entity(entity_type: str | EntityType, entity_id: str) -> EntityRef:
    """Build EntityRef; unsupported type or blank id raise ValidationException."""
    parsed = EntityType.parse(entity_type)
    if not entity_id or not str(entity_id).strip():
        raise ValidationException("Entity id is required", field="entity_id")
    return EntityRef(parsed, str(entity_id))


def _identity(name: str, entity: EntityRef) -> LogicalIdentity:
    try:
        return LogicalIdentity(name, entity.entity_type, entity.entity_id)
    except ValueError as e:
        raise ValidationException(str(e), field="name") from e


class DocumentVersioningService:
    """Generates documents from templates and maintains their version chains.

    A chain is every document sharing (name, entity_type, entity_id). Version
    numbers are handed out by a per-chain counter advanced with
    compare-and-swap, so concurrent create_version calls never collide.

    Writes go through the injected repositories, which share the caller's
    session: the caller owns the transaction (transactional_session), so the
    document insert and the template usage increment commit or roll back
    together.

    Templates are assumed not to be deleted while a generation is in flight;
    deletion is an admin action guarded by TemplateService and by the
    document.template_id foreign key.
    """

    def __init__(
        self,
        template_repo: ITemplateRepository,
        document_repo: IDocumentRepository,
        entity_provider: IEntityDataProvider,
        audit_service: IAuditService | None = None,
        *,
        clock: Callable[[], datetime] = utc_now,
        placeholder_timezone: str = "UTC",
        max_version_retries: int = DEFAULT_VERSION_ASSIGNMENT_MAX_RETRIES,
        max_name_attempts: int = DEFAULT_DOCUMENT_NAME_MAX_ATTEMPTS,
    ) -> None:
        self.template_repo = template_repo
        self.document_repo = document_repo
        self.entity_provider = entity_provider
        self.audit_service = audit_service
        self._clock = clock
        self._placeholder_timezone = placeholder_timezone
        self._max_version_retries = max_version_retries
        self._max_name_attempts = max_name_attempts

    def _now(self) -> datetime:
        return to_zone(self._clock(), self._placeholder_timezone)

    @traced("documents.generate_from_template")
    async def generate_from_template(
        self,
        template_id: str,
        entity_type: str | EntityType,
        entity_id: str,
        caller_data: Mapping[str, Any] | None = None,
        actor_id: str | None = None,
    ) -> DocumentResult:
        """Render template for an entity and store it as version 1 of a new chain.

        The template's is_active flag is not checked; any existing template
        may be used.

        Args:
            template_id: Template to render.
            entity_type: COMPANY, BRAND, BRANCH or PERSON (case-insensitive).
            entity_id: Business record id.
            caller_data: Values for keys the entity leaves empty; stored as
                document metadata. caller_data["name"] names the document.
            actor_id: Acting user; defaults to the request context actor.

        Returns:
            The created document (status ACTIVE, version 1).

        Raises:
            ResourceNotFoundException: Template or entity does not exist.
            ValidationException: Unsupported entity type.
            DocumentIdentityConflictException: caller_data["name"] already
                names a chain for this entity. Earlier releases stored a
                second chain under the same name; it is rejected now because
                two chains sharing one identity would interleave versions.
        """
        template = await self.template_repo.get_by_id(template_id)
        if not template:
            raise ResourceNotFoundException("template", template_id)

        entity = _parse_entity(entity_type, entity_id)
        attributes = await self.entity_provider.get_attributes(
            entity.entity_type, entity.entity_id
        )
        if attributes is None:
            raise ResourceNotFoundException(
                entity.entity_type.resource_name, entity.entity_id
            )

        data = dict(caller_data or {})
        now = self._now()
        declared = template.placeholders or {}
        content = resolve_placeholders(
            template.content, attributes, data, now, declared_keys=declared
        )
        unresolved = find_unresolved_keys(
            template.content, attributes, data, declared_keys=declared
        )
        if unresolved:
            logger.debug(
                "Template %s rendered with empty placeholders for %s %s: %s",
                template.id,
                entity.entity_type.value,
                entity.entity_id,
                ", ".join(unresolved),
            )

        identity = await self._claim_new_identity(template, entity, data, now)
        actor = resolve_actor_id(actor_id)
        document = await self.document_repo.create_document(
            DocumentCreate(
                id=generate_cuid(),
                name=identity.name,
                document_type=template.template_type,
                document_date=ensure_utc(now),
                entity_type=entity.entity_type,
                entity_id=entity.entity_id,
                template_id=template.id,
                content=content,
                metadata=data,
                status=DocumentStatus.ACTIVE,
                version=1,
                created_by=actor,
            )
        )
        # Counted only once the document row exists in this transaction.
        usage_count = await self.template_repo.increment_usage(template.id)
        add_span_attributes(document_id=document.id, usage_count=usage_count)
        logger.info(
            "Generated document %s from template %s for %s %s (usage_count=%d)",
            document.id,
            template.id,
            entity.entity_type.value,
            entity.entity_id,
            usage_count,
        )
        await self._record_activity(
            document.id,
            AuditAction.CREATE,
            f'Document "{document.name}" created from template "{template.name}"',
            actor,
        )
        return document

    @traced("documents.create_version")
    async def create_version(
        self, document_id: str, actor_id: str | None = None
    ) -> DocumentResult:
        """Copy a document into the next version of its chain, as a DRAFT.

        The new version number is the chain's last assigned version + 1
        (source.version + 1 when the source is the head).

        Raises:
            ResourceNotFoundException: Source document does not exist.
            ConcurrencyConflictException: Version assignment kept losing races.
        """
        source = await self.document_repo.get_by_id(document_id)
        if not source:
            raise ResourceNotFoundException("document", document_id)

        identity = source.logical_identity
        version = await self._reserve_next_version(identity)
        actor = resolve_actor_id(actor_id)
        document = await self.document_repo.create_document(
            DocumentCreate(
                id=generate_cuid(),
                name=source.name,
                document_type=source.document_type,
                document_date=source.document_date,
                entity_type=source.entity_type,
                entity_id=source.entity_id,
                template_id=source.template_id,
                content=source.content,
                metadata=dict(source.metadata) if source.metadata is not None else None,
                status=DocumentStatus.DRAFT,
                version=version,
                created_by=actor,
            )
        )
        logger.info(
            "Created version %d of %s as document %s", version, identity, document.id
        )
        await self._record_activity(
            document.id,
            AuditAction.CREATE_VERSION,
            f'New version {version} created for document "{source.name}"',
            actor,
        )
        return document

    @traced("documents.get_versions")
    async def get_versions(self, document_id: str) -> list[DocumentResult]:
        """Return every version in the document's chain, head (highest version) first.

        Raises:
            ResourceNotFoundException: Document does not exist.
        """
        document = await self.document_repo.get_by_id(document_id)
        if not document:
            raise ResourceNotFoundException("document", document_id)
        return await self.document_repo.get_by_logical_identity(
            document.logical_identity
        )

    async def _claim_new_identity(
        self,
        template: TemplateResult,
        entity: EntityRef,
        data: Mapping[str, Any],
        now: datetime,
    ) -> LogicalIdentity:
        """Reserve an unused (name, entity) chain at version 1.

        An explicit caller name must be free. A generated default name
        ("<template> - dd.mm.yyyy") gets " (2)", " (3)", ... appended until free.
        """
        explicit = data.get(DOCUMENT_NAME_KEY)
        if explicit is not None and str(explicit).strip():
            identity = _identity(str(explicit).strip(), entity)
            if not await self._try_claim(identity):
                raise DocumentIdentityConflictException(
                    identity.name, entity.entity_type.value, entity.entity_id
                )
            return identity

        base_name = f"{template.name} - {now.strftime(DATE_FORMAT)}"
        for attempt in range(1, self._max_name_attempts + 1):
            name = base_name if attempt == 1 else f"{base_name} ({attempt})"
            identity = _identity(name, entity)
            if await self._try_claim(identity):
                return identity
        raise DocumentIdentityConflictException(
            base_name, entity.entity_type.value, entity.entity_id
        )

    async def _try_claim(self, identity: LogicalIdentity) -> bool:
        if await self.document_repo.get_max_version(identity) is not None:
            return False
        return await self.document_repo.init_version_counter(identity, 1)

    async def _reserve_next_version(self, identity: LogicalIdentity) -> int:
        """Advance the chain's counter by one with compare-and-swap; return the claimed version."""
        for attempt in range(1, self._max_version_retries + 1):
            current = await self.document_repo.get_version_counter(identity)
            if current is None:
                # Chain predates counters: seed from the stored maximum.
                seeded = (await self.document_repo.get_max_version(identity) or 0) + 1
                if await self.document_repo.init_version_counter(identity, seeded):
                    return seeded
            elif await self.document_repo.compare_and_set_version_counter(
                identity, current, current + 1
            ):
                return current + 1
            logger.debug(
                "Version assignment for %s lost a race (attempt %d/%d)",
                identity,
                attempt,
                self._max_version_retries,
            )
        raise ConcurrencyConflictException(
            "document_chain", str(identity), self._max_version_retries
        )

    async def _record_activity(
        self,
        document_id: str,
        action: AuditAction,
        description: str,
        actor_id: str | None,
    ) -> None:
        """Record an activity row; failures are logged and never propagate."""
        if self.audit_service is None:
            return
        try:
            await self.audit_service.record(
                AuditEntityType.DOCUMENT, document_id, action, description, actor_id
            )
        except Exception as e:
            logger.warning(
                "Failed to record %s activity for document %s: %s",
                action.value,
                document_id,
                str(e),
                exc_info=True,
            )
