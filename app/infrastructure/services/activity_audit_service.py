"""Activity audit service: appends activity rows (implements IAuditService)."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.models.activity import Activity
from app.shared.context import get_current_actor_type
from app.shared.enums import AuditAction, AuditEntityType
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class ActivityAuditService:
    """Writes one Activity row per recorded action, inside a savepoint.

    A failed insert rolls back only the savepoint, so the caller's document
    or template write survives it.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def record(
        self,
        entity_type: AuditEntityType,
        entity_id: str,
        action: AuditAction,
        description: str,
        actor_id: str | None,
    ) -> None:
        async with self.db.begin_nested():
            self.db.add(
                Activity(
                    entity_type=entity_type.value,
                    entity_id=entity_id,
                    action=action.value,
                    description=description,
                    performed_by=actor_id,
                    actor_type=get_current_actor_type().value,
                )
            )
        logger.debug(
            "Recorded activity %s.%s (entity_id: %s)",
            entity_type.value,
            action.value,
            entity_id,
        )
