"""Activity ORM model. Append-only record of document and template actions."""

from datetime import datetime
from typing import Any

from sqlalchemy import Connection, DateTime, Index, String, Text, event
from sqlalchemy.orm import Mapped, Mapper, mapped_column
from sqlalchemy.sql import func

from app.infrastructure.persistence.database import Base
from app.shared.utils.generators import generate_cuid


class Activity(Base):
    """Who did what, when, to which document or template. No update/delete."""

    __tablename__ = "activity"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    entity_type: Mapped[str] = mapped_column(String(16), nullable=False)
    entity_id: Mapped[str] = mapped_column(String, nullable=False)
    action: Mapped[str] = mapped_column(String(32), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    performed_by: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    actor_type: Mapped[str] = mapped_column(String(16), nullable=False, default="system")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (Index("ix_activity_entity", "entity_type", "entity_id"),)


@event.listens_for(Activity, "before_update")
def _prevent_activity_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: Activity
) -> None:
    """Activity entries are append-only; updates are forbidden."""
    raise ValueError("Activity entries are immutable and cannot be updated.")


@event.listens_for(Activity, "before_delete")
def _prevent_activity_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: Activity
) -> None:
    raise ValueError("Activity entries cannot be deleted.")
