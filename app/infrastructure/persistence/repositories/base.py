"""Base repository: shared lookups and inserts for ORM-backed repositories."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with ORM get and create.

    Subclasses map ORM rows to application DTOs; nothing above the
    repository sees ORM instances. Repositories never commit: the session's
    owner (transactional_session) does.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get_orm_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single ORM record by primary key, or None.

        Reloads attributes already in the identity map so values changed by
        bulk UPDATE statements in this session are visible.
        """
        model: Any = self.model
        result = await self.db.execute(
            select(self.model)
            .where(model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _create(self, obj: ModelType) -> ModelType:
        """Insert obj, flush, and reload server-generated columns."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj
