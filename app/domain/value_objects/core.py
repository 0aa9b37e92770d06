"""Domain value objects for the CRM document engine.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass

from app.domain.enums import EntityType

_MAX_DOCUMENT_NAME_LENGTH = 255


@dataclass(frozen=True)
class EntityRef:
    """Reference to the business record a document is about: (entity_type, entity_id)."""

    entity_type: EntityType
    entity_id: str

    def __post_init__(self) -> None:
        if not self.entity_id:
            raise ValueError("Entity id must be a non-empty string")

    @classmethod
    def of(cls, entity_type: "str | EntityType", entity_id: str) -> "EntityRef":
        """Build from a raw type tag; raises ValidationException on unsupported types."""
        return cls(EntityType.parse(entity_type), entity_id)


@dataclass(frozen=True)
class LogicalIdentity:
    """Identity shared by every version of one document: (name, entity_type, entity_id).

    All Document rows with equal LogicalIdentity form a single version chain.
    """

    name: str
    entity_type: EntityType
    entity_id: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Document name must be a non-empty string")
        if len(self.name) > _MAX_DOCUMENT_NAME_LENGTH:
            raise ValueError(
                f"Document name must not exceed {_MAX_DOCUMENT_NAME_LENGTH} characters"
            )
        if not self.entity_id:
            raise ValueError("Entity id must be a non-empty string")

    @property
    def entity(self) -> EntityRef:
        return EntityRef(self.entity_type, self.entity_id)

    def with_name(self, name: str) -> "LogicalIdentity":
        """Return the identity of a sibling chain with another name for the same entity."""
        return LogicalIdentity(name, self.entity_type, self.entity_id)

    def __str__(self) -> str:
        return f"{self.name!r} @ {self.entity_type.value}:{self.entity_id}"
