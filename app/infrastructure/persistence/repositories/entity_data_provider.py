"""Entity data provider: flattens a business record into placeholder attributes.

Every mapped column is exposed under its column name and its camelCase form
(company_name and companyName). Each record also gets short aliases for its
own display name and its parents' names:

    COMPANY  company
    BRAND    brand, company, company_name
    BRANCH   branch, brand, brand_name, company, company_name
    PERSON   full_name, branch, branch_name (when assigned to a branch)
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import inspect as sa_inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.enums import EntityType
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.business_entities import (
    Branch,
    Brand,
    Company,
    Person,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_MODELS: dict[EntityType, type[Base]] = {
    EntityType.COMPANY: Company,
    EntityType.BRAND: Brand,
    EntityType.BRANCH: Branch,
    EntityType.PERSON: Person,
}

# Bookkeeping columns never offered as placeholders.
_EXCLUDED_COLUMNS = frozenset({"created_by", "updated_at"})


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _flatten(obj: Base) -> dict[str, Any]:
    attributes: dict[str, Any] = {}
    for attr in sa_inspect(obj).mapper.column_attrs:
        if attr.key in _EXCLUDED_COLUMNS:
            continue
        value = getattr(obj, attr.key)
        attributes[attr.key] = value
        attributes.setdefault(_camel(attr.key), value)
    return attributes


class EntityDataProvider:
    """SQL-backed IEntityDataProvider. Read-only."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_attributes(
        self, entity_type: EntityType, entity_id: str
    ) -> dict[str, Any] | None:
        """Return attribute map for the record, or None if entity_id does not resolve."""
        model = _MODELS[entity_type]
        row = await self.db.get(model, entity_id)
        if row is None:
            return None
        attributes = _flatten(row)

        if isinstance(row, Company):
            attributes["company"] = row.company_name
        elif isinstance(row, Brand):
            attributes["brand"] = row.brand_name
            await self._add_company(attributes, row.company_id)
        elif isinstance(row, Branch):
            attributes["branch"] = row.branch_name
            company_id = await self._add_brand(attributes, row.brand_id)
            if company_id:
                await self._add_company(attributes, company_id)
        elif isinstance(row, Person):
            attributes["full_name"] = f"{row.first_name} {row.last_name}".strip()
            attributes["fullName"] = attributes["full_name"]
            if row.branch_id:
                await self._add_branch(attributes, row.branch_id)

        logger.debug(
            "Resolved %d attributes for %s %s",
            len(attributes),
            entity_type.value,
            entity_id,
        )
        return attributes

    async def _add_company(self, attributes: dict[str, Any], company_id: str) -> None:
        result = await self.db.execute(
            select(Company.company_name).where(Company.id == company_id)
        )
        name = result.scalar_one_or_none()
        if name is not None:
            attributes["company"] = name
            attributes["company_name"] = name
            attributes["companyName"] = name

    async def _add_brand(self, attributes: dict[str, Any], brand_id: str) -> str | None:
        """Add the parent brand's name; return its company_id."""
        result = await self.db.execute(
            select(Brand.brand_name, Brand.company_id).where(Brand.id == brand_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        attributes["brand"] = row.brand_name
        attributes["brand_name"] = row.brand_name
        attributes["brandName"] = row.brand_name
        return row.company_id

    async def _add_branch(self, attributes: dict[str, Any], branch_id: str) -> None:
        result = await self.db.execute(
            select(Branch.branch_name).where(Branch.id == branch_id)
        )
        name = result.scalar_one_or_none()
        if name is not None:
            attributes["branch"] = name
            attributes["branch_name"] = name
            attributes["branchName"] = name
