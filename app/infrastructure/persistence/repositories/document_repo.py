"""Document repository. Returns application DTOs; owns per-chain version counters."""

from __future__ import annotations

from sqlalchemy import and_, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.document import (
    DocumentCreate,
    DocumentResult,
    DocumentSummary,
)
from app.domain.enums import DocumentStatus, EntityType
from app.domain.value_objects import LogicalIdentity
from app.infrastructure.persistence.models.document import Document
from app.infrastructure.persistence.models.document_version_counter import (
    DocumentVersionCounter,
)
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils import ensure_utc, utc_now


def _create_to_document(d: DocumentCreate) -> Document:
    """Map DocumentCreate (write-model) to ORM Document for persistence."""
    return Document(
        id=d.id,
        name=d.name,
        document_type=d.document_type,
        document_date=d.document_date,
        entity_type=d.entity_type.value,
        entity_id=d.entity_id,
        template_id=d.template_id,
        content=d.content,
        metadata_=d.metadata,
        status=d.status.value,
        version=d.version,
        created_by=d.created_by,
    )


def _document_to_result(d: Document) -> DocumentResult:
    """Map ORM Document to application DocumentResult."""
    return DocumentResult(
        id=d.id,
        name=d.name,
        document_type=d.document_type,
        document_date=ensure_utc(d.document_date),
        entity_type=EntityType(d.entity_type),
        entity_id=d.entity_id,
        template_id=d.template_id,
        content=d.content,
        metadata=getattr(d, "metadata_", None),
        status=DocumentStatus(d.status),
        version=d.version,
        created_by=d.created_by,
        created_at=ensure_utc(d.created_at),
        updated_at=ensure_utc(d.updated_at),
    )


def _identity_clause(model, identity: LogicalIdentity):
    return and_(
        model.name == identity.name,
        model.entity_type == identity.entity_type.value,
        model.entity_id == identity.entity_id,
    )


class DocumentRepository(BaseRepository[Document]):
    """Document repository. create_document() accepts DocumentCreate (write-model); returns DocumentResult (read-model)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Document)

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        row = await self._get_orm_by_id(document_id)
        return _document_to_result(row) if row else None

    async def create_document(self, document: DocumentCreate) -> DocumentResult:
        """Create document from write-model DTO; return read-model."""
        created = await self._create(_create_to_document(document))
        return _document_to_result(created)

    async def get_by_logical_identity(
        self, identity: LogicalIdentity
    ) -> list[DocumentResult]:
        result = await self.db.execute(
            select(Document)
            .where(_identity_clause(Document, identity))
            .order_by(Document.version.desc())
        )
        return [_document_to_result(row) for row in result.scalars().all()]

    async def count_by_template_id(self, template_id: str) -> int:
        result = await self.db.execute(
            select(func.count(Document.id)).where(Document.template_id == template_id)
        )
        return result.scalar() or 0

    async def count_by_template_ids(self, template_ids: list[str]) -> int:
        if not template_ids:
            return 0
        result = await self.db.execute(
            select(func.count(Document.id)).where(
                Document.template_id.in_(template_ids)
            )
        )
        return result.scalar() or 0

    async def list_recent_by_template(
        self, template_id: str, limit: int
    ) -> list[DocumentSummary]:
        result = await self.db.execute(
            select(
                Document.id, Document.name, Document.entity_type, Document.created_at
            )
            .where(Document.template_id == template_id)
            .order_by(Document.created_at.desc(), Document.id.desc())
            .limit(limit)
        )
        return [
            DocumentSummary(
                id=row.id,
                name=row.name,
                entity_type=EntityType(row.entity_type),
                created_at=ensure_utc(row.created_at),
            )
            for row in result.all()
        ]

    async def get_max_version(self, identity: LogicalIdentity) -> int | None:
        result = await self.db.execute(
            select(func.max(Document.version)).where(
                _identity_clause(Document, identity)
            )
        )
        return result.scalar()

    async def get_version_counter(self, identity: LogicalIdentity) -> int | None:
        result = await self.db.execute(
            select(DocumentVersionCounter.last_version).where(
                _identity_clause(DocumentVersionCounter, identity)
            )
        )
        return result.scalar_one_or_none()

    async def init_version_counter(
        self, identity: LogicalIdentity, last_version: int
    ) -> bool:
        """INSERT ... ON CONFLICT DO NOTHING; True only for the request that created the row."""
        insert = (
            sqlite_insert
            if self.db.get_bind().dialect.name == "sqlite"
            else pg_insert
        )
        stmt = (
            insert(DocumentVersionCounter)
            .values(
                name=identity.name,
                entity_type=identity.entity_type.value,
                entity_id=identity.entity_id,
                last_version=last_version,
            )
            .on_conflict_do_nothing(index_elements=["name", "entity_type", "entity_id"])
        )
        result = await self.db.execute(stmt)
        return result.rowcount == 1

    async def compare_and_set_version_counter(
        self, identity: LogicalIdentity, expected: int, new: int
    ) -> bool:
        """Set last_version=new only if it is still expected (optimistic lock).

        Returns True if exactly one row was updated; False if another request won the race.
        """
        stmt = (
            update(DocumentVersionCounter)
            .where(
                _identity_clause(DocumentVersionCounter, identity),
                DocumentVersionCounter.last_version == expected,
            )
            .values(last_version=new)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount == 1

    async def update_status_if_current(
        self,
        document_id: str,
        expected: DocumentStatus,
        target: DocumentStatus,
    ) -> DocumentResult | None:
        """Set status=target only if it is still expected; None if another request won the race."""
        stmt = (
            update(Document)
            .where(Document.id == document_id, Document.status == expected.value)
            .values(status=target.value, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        if result.rowcount != 1:
            return None
        return await self.get_by_id(document_id)
