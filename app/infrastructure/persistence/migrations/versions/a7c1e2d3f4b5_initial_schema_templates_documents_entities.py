"""initial schema: templates, documents, version counters, business entities, activity

Revision ID: a7c1e2d3f4b5
Revises:
Create Date: 2026-10-19

Documents sharing (name, entity_type, entity_id) form a version chain; the
unique index on that tuple plus version keeps versions unique per chain, and
document_version_counter serializes version assignment.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "a7c1e2d3f4b5"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def _contact_columns() -> list[sa.Column]:
    return [
        sa.Column("country", sa.String(), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("district", sa.String(), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("phones", sa.JSON(), nullable=True),
        sa.Column("emails", sa.JSON(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="ACTIVE"),
        sa.Column("created_by", sa.String(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "template",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("template_type", sa.String(), nullable=True),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("placeholders", sa.JSON(), nullable=False),
        sa.Column("usage_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_by", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_template_name", "template", ["name"])
    op.create_index("ix_template_template_type", "template", ["template_type"])
    op.create_index("ix_template_created_by", "template", ["created_by"])

    op.create_table(
        "document",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("document_type", sa.String(), nullable=True),
        sa.Column("document_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("entity_type", sa.String(length=16), nullable=False),
        sa.Column("entity_id", sa.String(), nullable=False),
        sa.Column("template_id", sa.String(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("metadata", sa.JSON(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="DRAFT"),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_by", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["template_id"], ["template.id"], ondelete="RESTRICT"),
        sa.CheckConstraint(
            "status IN ('DRAFT', 'ACTIVE', 'ARCHIVED')", name="ck_document_status"
        ),
        sa.CheckConstraint("version >= 1", name="ck_document_version_positive"),
    )
    op.create_index("ix_document_entity", "document", ["entity_type", "entity_id"])
    op.create_index("ix_document_template_id", "document", ["template_id"])
    op.create_index("ix_document_document_type", "document", ["document_type"])
    op.create_index("ix_document_created_by", "document", ["created_by"])
    op.create_index(
        "ux_document_identity_version",
        "document",
        ["name", "entity_type", "entity_id", "version"],
        unique=True,
    )

    op.create_table(
        "document_version_counter",
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("entity_type", sa.String(length=16), nullable=False),
        sa.Column("entity_id", sa.String(), nullable=False),
        sa.Column("last_version", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("name", "entity_type", "entity_id"),
    )
    # Seed counters for chains that already exist.
    op.execute(
        """
        INSERT INTO document_version_counter (name, entity_type, entity_id, last_version)
        SELECT name, entity_type, entity_id, MAX(version)
        FROM document
        GROUP BY name, entity_type, entity_id
        """
    )

    op.create_table(
        "company",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("company_name", sa.String(), nullable=False),
        sa.Column("tax_number", sa.String(), nullable=True),
        sa.Column("tax_office", sa.String(), nullable=True),
        sa.Column("website", sa.String(), nullable=True),
        *_contact_columns(),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_company_company_name", "company", ["company_name"])

    op.create_table(
        "brand",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("brand_name", sa.String(), nullable=False),
        sa.Column("company_id", sa.String(), nullable=False),
        *_contact_columns(),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["company_id"], ["company.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_brand_brand_name", "brand", ["brand_name"])
    op.create_index("ix_brand_company_id", "brand", ["company_id"])

    op.create_table(
        "branch",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("branch_name", sa.String(), nullable=False),
        sa.Column("brand_id", sa.String(), nullable=False),
        *_contact_columns(),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["brand_id"], ["brand.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_branch_branch_name", "branch", ["branch_name"])
    op.create_index("ix_branch_brand_id", "branch", ["brand_id"])

    op.create_table(
        "person",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("national_id", sa.String(), nullable=True),
        sa.Column("role", sa.String(), nullable=True),
        sa.Column("branch_id", sa.String(), nullable=True),
        *_contact_columns(),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["branch_id"], ["branch.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_person_branch_id", "person", ["branch_id"])

    op.create_table(
        "activity",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("entity_type", sa.String(length=16), nullable=False),
        sa.Column("entity_id", sa.String(), nullable=False),
        sa.Column("action", sa.String(length=32), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("performed_by", sa.String(), nullable=True),
        sa.Column("actor_type", sa.String(length=16), nullable=False, server_default="system"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_activity_entity", "activity", ["entity_type", "entity_id"])
    op.create_index("ix_activity_performed_by", "activity", ["performed_by"])


def downgrade() -> None:
    op.drop_table("activity")
    op.drop_table("person")
    op.drop_table("branch")
    op.drop_table("brand")
    op.drop_table("company")
    op.drop_table("document_version_counter")
    op.drop_table("document")
    op.drop_table("template")
