"""Template ORM model. Reusable document bodies with {{key}} placeholders."""

from typing import Any

from sqlalchemy import JSON, Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import AuditedModel


class Template(AuditedModel, Base):
    """Template entity. Table: template.

    usage_count and version are only changed by single-statement SQL
    increments (see TemplateRepository).
    """

    __tablename__ = "template"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    template_type: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    category: Mapped[str | None] = mapped_column(String, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    placeholders: Mapped[dict[str, Any]] = mapped_column(
        JSON, nullable=False, default=dict
    )
    usage_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
