"""Business record ORM models read by the entity data provider.

Company -> Brand -> Branch form a hierarchy; Person optionally belongs to a
branch. Only the columns placeholders draw from are mapped.
"""

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import AuditedModel


class ContactMixin:
    """Location and contact columns shared by every business record."""

    @declared_attr
    def country(cls) -> Mapped[str | None]:
        return mapped_column(String, nullable=True)

    @declared_attr
    def city(cls) -> Mapped[str | None]:
        return mapped_column(String, nullable=True)

    @declared_attr
    def district(cls) -> Mapped[str | None]:
        return mapped_column(String, nullable=True)

    @declared_attr
    def address(cls) -> Mapped[str | None]:
        return mapped_column(Text, nullable=True)

    @declared_attr
    def phones(cls) -> Mapped[list[str] | None]:
        return mapped_column(JSON, nullable=True)

    @declared_attr
    def emails(cls) -> Mapped[list[str] | None]:
        return mapped_column(JSON, nullable=True)

    @declared_attr
    def status(cls) -> Mapped[str]:
        return mapped_column(String(16), nullable=False, default="ACTIVE")


class Company(AuditedModel, ContactMixin, Base):
    __tablename__ = "company"

    company_name: Mapped[str] = mapped_column(String, nullable=False, index=True)
    tax_number: Mapped[str | None] = mapped_column(String, nullable=True)
    tax_office: Mapped[str | None] = mapped_column(String, nullable=True)
    website: Mapped[str | None] = mapped_column(String, nullable=True)


class Brand(AuditedModel, ContactMixin, Base):
    __tablename__ = "brand"

    brand_name: Mapped[str] = mapped_column(String, nullable=False, index=True)
    company_id: Mapped[str] = mapped_column(
        String, ForeignKey("company.id", ondelete="CASCADE"), nullable=False, index=True
    )


class Branch(AuditedModel, ContactMixin, Base):
    __tablename__ = "branch"

    branch_name: Mapped[str] = mapped_column(String, nullable=False, index=True)
    brand_id: Mapped[str] = mapped_column(
        String, ForeignKey("brand.id", ondelete="CASCADE"), nullable=False, index=True
    )


class Person(AuditedModel, ContactMixin, Base):
    __tablename__ = "person"

    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    national_id: Mapped[str | None] = mapped_column(String, nullable=True)
    role: Mapped[str | None] = mapped_column(String, nullable=True)
    branch_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("branch.id", ondelete="SET NULL"), nullable=True, index=True
    )
