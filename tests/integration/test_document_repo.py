"""Document repository integration tests: chains, version counters, conditional status writes."""

import pytest
from sqlalchemy.exc import IntegrityError

from app.application.dtos.document import DocumentCreate
from app.domain.enums import DocumentStatus, EntityType
from app.domain.value_objects import LogicalIdentity
from app.infrastructure.persistence.repositories.document_repo import DocumentRepository
from app.infrastructure.persistence.repositories.template_repo import TemplateRepository
from app.shared.utils import generate_cuid

IDENTITY = LogicalIdentity("Offer", EntityType.COMPANY, "c1")


def _doc(
    version: int,
    *,
    identity: LogicalIdentity = IDENTITY,
    template_id: str | None = None,
    status: DocumentStatus = DocumentStatus.ACTIVE,
) -> DocumentCreate:
    return DocumentCreate(
        id=generate_cuid(),
        name=identity.name,
        document_type="OFFER",
        document_date=None,
        entity_type=identity.entity_type,
        entity_id=identity.entity_id,
        template_id=template_id,
        content=f"body v{version}",
        metadata={"v": version},
        status=status,
        version=version,
        created_by=None,
    )


async def test_create_document_round_trips_fields(db_session) -> None:
    repo = DocumentRepository(db_session)
    created = await repo.create_document(_doc(1))

    found = await repo.get_by_id(created.id)

    assert found is not None
    assert found.entity_type is EntityType.COMPANY
    assert found.status is DocumentStatus.ACTIVE
    assert found.metadata == {"v": 1}
    assert found.logical_identity == IDENTITY
    assert found.created_at.tzinfo is not None


async def test_chain_is_ordered_head_first(db_session) -> None:
    repo = DocumentRepository(db_session)
    for version in (2, 1, 3):
        await repo.create_document(_doc(version))
    await repo.create_document(_doc(1, identity=IDENTITY.with_name("Other")))

    chain = await repo.get_by_logical_identity(IDENTITY)

    assert [d.version for d in chain] == [3, 2, 1]
    assert await repo.get_max_version(IDENTITY) == 3
    assert await repo.get_max_version(IDENTITY.with_name("Missing")) is None


async def test_duplicate_version_in_chain_rejected(db_session) -> None:
    repo = DocumentRepository(db_session)
    await repo.create_document(_doc(1))
    with pytest.raises(IntegrityError):
        await repo.create_document(_doc(1))


async def test_version_counter_init_and_compare_and_set(db_session) -> None:
    repo = DocumentRepository(db_session)
    assert await repo.get_version_counter(IDENTITY) is None

    assert await repo.init_version_counter(IDENTITY, 1) is True
    assert await repo.init_version_counter(IDENTITY, 7) is False
    assert await repo.get_version_counter(IDENTITY) == 1

    assert await repo.compare_and_set_version_counter(IDENTITY, 1, 2) is True
    assert await repo.compare_and_set_version_counter(IDENTITY, 1, 2) is False
    assert await repo.get_version_counter(IDENTITY) == 2


async def test_update_status_if_current(db_session) -> None:
    repo = DocumentRepository(db_session)
    draft = await repo.create_document(_doc(1, status=DocumentStatus.DRAFT))

    stale = await repo.update_status_if_current(
        draft.id, DocumentStatus.ACTIVE, DocumentStatus.ARCHIVED
    )
    assert stale is None

    updated = await repo.update_status_if_current(
        draft.id, DocumentStatus.DRAFT, DocumentStatus.ACTIVE
    )
    assert updated is not None
    assert updated.status is DocumentStatus.ACTIVE
    assert (await repo.get_by_id(draft.id)).status is DocumentStatus.ACTIVE


async def test_template_counts_and_recent(db_session) -> None:
    templates = TemplateRepository(db_session)
    repo = DocumentRepository(db_session)
    t1 = await templates.create_template("T1", "x")
    t2 = await templates.create_template("T2", "x")
    for version in (1, 2):
        await repo.create_document(_doc(version, template_id=t1.id))
    await repo.create_document(
        _doc(1, identity=IDENTITY.with_name("B"), template_id=t2.id)
    )

    assert await repo.count_by_template_id(t1.id) == 2
    assert await repo.count_by_template_ids([t1.id, t2.id]) == 3
    assert await repo.count_by_template_ids([]) == 0

    recent = await repo.list_recent_by_template(t1.id, 1)
    assert len(recent) == 1
    assert recent[0].name == "Offer"
    assert recent[0].entity_type is EntityType.COMPANY


async def test_referenced_template_cannot_be_deleted(db_session) -> None:
    templates = TemplateRepository(db_session)
    template = await templates.create_template("T1", "x")
    await DocumentRepository(db_session).create_document(
        _doc(1, template_id=template.id)
    )

    with pytest.raises(IntegrityError):
        await templates.delete(template.id)
