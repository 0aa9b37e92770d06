"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.activity import Activity
from app.infrastructure.persistence.models.business_entities import (
    Branch,
    Brand,
    Company,
    ContactMixin,
    Person,
)
from app.infrastructure.persistence.models.document import Document
from app.infrastructure.persistence.models.document_version_counter import (
    DocumentVersionCounter,
)
from app.infrastructure.persistence.models.mixins import (
    AuditedModel,
    CreatedByMixin,
    CuidMixin,
    TimestampMixin,
)
from app.infrastructure.persistence.models.template import Template

__all__ = [
    "Activity",
    "AuditedModel",
    "Branch",
    "Brand",
    "Company",
    "ContactMixin",
    "CreatedByMixin",
    "CuidMixin",
    "Document",
    "DocumentVersionCounter",
    "Person",
    "Template",
    "TimestampMixin",
]
