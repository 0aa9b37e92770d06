"""Per-chain version counter. One row per (name, entity_type, entity_id)."""

from sqlalchemy import Integer, PrimaryKeyConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import TimestampMixin


class DocumentVersionCounter(TimestampMixin, Base):
    """Last version number handed out for a chain; advanced by compare-and-swap only."""

    __tablename__ = "document_version_counter"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(16), nullable=False)
    entity_id: Mapped[str] = mapped_column(String, nullable=False)
    last_version: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (PrimaryKeyConstraint("name", "entity_type", "entity_id"),)
