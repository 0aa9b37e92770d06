"""Template repository. Returns application DTOs; counters change via single-statement SQL."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.template import TemplateResult
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.models.template import Template
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils import ensure_utc


def _template_to_result(t: Template) -> TemplateResult:
    """Map ORM Template to application TemplateResult."""
    return TemplateResult(
        id=t.id,
        name=t.name,
        template_type=t.template_type,
        category=t.category,
        content=t.content,
        placeholders=dict(t.placeholders or {}),
        usage_count=t.usage_count,
        version=t.version,
        is_active=t.is_active,
        created_by=t.created_by,
        created_at=ensure_utc(t.created_at),
        updated_at=ensure_utc(t.updated_at),
    )


class TemplateRepository(BaseRepository[Template]):
    """Template persistence. usage_count and version are never read-modify-written in Python."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Template)

    async def get_by_id(self, template_id: str) -> TemplateResult | None:
        row = await self._get_orm_by_id(template_id)
        return _template_to_result(row) if row else None

    async def create_template(
        self,
        name: str,
        content: str,
        *,
        template_type: str | None = None,
        category: str | None = None,
        description: str | None = None,
        placeholders: dict[str, Any] | None = None,
        is_active: bool = True,
        created_by: str | None = None,
    ) -> TemplateResult:
        """Insert a template at version 1 with usage_count 0."""
        orm = Template(
            name=name,
            content=content,
            template_type=template_type,
            category=category,
            description=description,
            placeholders=placeholders or {},
            usage_count=0,
            version=1,
            is_active=is_active,
            created_by=created_by,
        )
        created = await self._create(orm)
        return _template_to_result(created)

    async def increment_usage(self, template_id: str) -> int:
        """UPDATE template SET usage_count = usage_count + 1; return the new count.

        The row lock taken by the UPDATE serializes concurrent increments, so
        K successful generations add exactly K.
        """
        stmt = (
            update(Template)
            .where(Template.id == template_id)
            .values(usage_count=Template.usage_count + 1)
            .returning(Template.usage_count)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        count = result.scalar_one_or_none()
        if count is None:
            raise ResourceNotFoundException("template", template_id)
        return count

    async def revise(
        self,
        template_id: str,
        content: str,
        placeholders: dict[str, Any] | None,
    ) -> TemplateResult | None:
        """Replace content (and placeholders when given) and add 1 to version atomically."""
        values: dict[str, Any] = {
            "content": content,
            "version": Template.version + 1,
        }
        if placeholders is not None:
            values["placeholders"] = placeholders
        stmt = (
            update(Template)
            .where(Template.id == template_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        if result.rowcount != 1:
            return None
        return await self.get_by_id(template_id)

    async def delete(self, template_id: str) -> bool:
        result = await self.db.execute(
            delete(Template)
            .where(Template.id == template_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def delete_many(self, template_ids: list[str]) -> int:
        if not template_ids:
            return 0
        result = await self.db.execute(
            delete(Template)
            .where(Template.id.in_(template_ids))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
