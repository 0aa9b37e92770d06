"""DocumentLifecycleService unit tests (status transitions)."""

from unittest.mock import AsyncMock

import pytest

from app.application.use_cases.documents import (
    DocumentLifecycleService,
    DocumentVersioningService,
)
from app.domain.enums import DocumentStatus, EntityType
from app.domain.exceptions import (
    ConcurrencyConflictException,
    InvalidStatusTransitionException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.enums import AuditAction
from tests.fakes import (
    FakeAuditService,
    FakeDocumentRepository,
    FakeEntityDataProvider,
    FakeTemplateRepository,
    make_template,
)


@pytest.fixture
def setup(fixed_clock):
    documents = FakeDocumentRepository()
    audit = FakeAuditService()
    versioning = DocumentVersioningService(
        FakeTemplateRepository(make_template()),
        documents,
        FakeEntityDataProvider({(EntityType.COMPANY, "c1"): {"company": "Acme"}}),
        None,
        clock=fixed_clock,
    )
    lifecycle = DocumentLifecycleService(documents, audit)
    return versioning, lifecycle, documents, audit


async def _draft(versioning: DocumentVersioningService):
    active = await versioning.generate_from_template("tpl1", "COMPANY", "c1")
    return await versioning.create_version(active.id)


async def test_activate_draft(setup) -> None:
    versioning, lifecycle, _, audit = setup
    draft = await _draft(versioning)

    activated = await lifecycle.activate(draft.id, actor_id="u1")

    assert activated.status == DocumentStatus.ACTIVE
    assert activated.version == draft.version
    assert audit.entries[-1][2] == AuditAction.ACTIVATE
    assert audit.entries[-1][4] == "u1"


async def test_archive_active(setup) -> None:
    versioning, lifecycle, _, audit = setup
    active = await versioning.generate_from_template("tpl1", "COMPANY", "c1")

    archived = await lifecycle.archive(active.id)

    assert archived.status == DocumentStatus.ARCHIVED
    assert audit.entries[-1][2] == AuditAction.ARCHIVE


async def test_archive_draft_directly(setup) -> None:
    versioning, lifecycle, _, _ = setup
    draft = await _draft(versioning)
    archived = await lifecycle.archive(draft.id)
    assert archived.status == DocumentStatus.ARCHIVED


async def test_archived_is_terminal(setup) -> None:
    versioning, lifecycle, _, _ = setup
    active = await versioning.generate_from_template("tpl1", "COMPANY", "c1")
    await lifecycle.archive(active.id)

    with pytest.raises(InvalidStatusTransitionException) as exc_info:
        await lifecycle.activate(active.id)

    assert exc_info.value.details == {
        "document_id": active.id,
        "current": "ARCHIVED",
        "target": "ACTIVE",
    }


async def test_active_cannot_return_to_draft(setup) -> None:
    versioning, lifecycle, _, _ = setup
    active = await versioning.generate_from_template("tpl1", "COMPANY", "c1")
    with pytest.raises(InvalidStatusTransitionException):
        await lifecycle.change_status(active.id, "draft")


async def test_same_status_is_noop(setup) -> None:
    versioning, lifecycle, _, audit = setup
    active = await versioning.generate_from_template("tpl1", "COMPANY", "c1")
    result = await lifecycle.activate(active.id)
    assert result == active
    assert audit.entries == []


async def test_unknown_status_rejected(setup) -> None:
    versioning, lifecycle, _, _ = setup
    active = await versioning.generate_from_template("tpl1", "COMPANY", "c1")
    with pytest.raises(ValidationException) as exc_info:
        await lifecycle.change_status(active.id, "PUBLISHED")
    assert exc_info.value.details == {"field": "status"}


async def test_missing_document(setup) -> None:
    _, lifecycle, _, _ = setup
    with pytest.raises(ResourceNotFoundException):
        await lifecycle.archive("nope")


async def test_lost_race_raises_conflict(setup) -> None:
    versioning, lifecycle, documents, _ = setup
    active = await versioning.generate_from_template("tpl1", "COMPANY", "c1")
    documents.update_status_if_current = AsyncMock(return_value=None)

    with pytest.raises(ConcurrencyConflictException):
        await lifecycle.archive(active.id)


async def test_audit_failure_is_swallowed(setup, caplog) -> None:
    versioning, _, documents, _ = setup
    lifecycle = DocumentLifecycleService(documents, FakeAuditService(fail=True))
    active = await versioning.generate_from_template("tpl1", "COMPANY", "c1")

    archived = await lifecycle.archive(active.id)

    assert archived.status == DocumentStatus.ARCHIVED
    assert "Failed to record status change" in caplog.text
