"""Template repository integration tests. SQLite per test; session is rolled back after each test."""

import pytest

from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.repositories.template_repo import TemplateRepository


async def test_create_template_and_get_by_id(db_session) -> None:
    repo = TemplateRepository(db_session)
    created = await repo.create_template(
        "Offer",
        "Offer for {{company}}",
        template_type="OFFER",
        placeholders={"company": {"label": "Company"}},
        created_by="u1",
    )
    assert created.id
    assert created.usage_count == 0
    assert created.version == 1
    assert created.is_active is True
    assert created.created_at is not None and created.created_at.tzinfo is not None

    found = await repo.get_by_id(created.id)
    assert found is not None
    assert found.placeholders == {"company": {"label": "Company"}}
    assert found.created_by == "u1"


async def test_get_by_id_not_found_returns_none(db_session) -> None:
    repo = TemplateRepository(db_session)
    assert await repo.get_by_id("nonexistent") is None


async def test_increment_usage_is_cumulative(db_session) -> None:
    repo = TemplateRepository(db_session)
    created = await repo.create_template("Offer", "x")

    counts = [await repo.increment_usage(created.id) for _ in range(3)]

    assert counts == [1, 2, 3]
    found = await repo.get_by_id(created.id)
    assert found.usage_count == 3


async def test_increment_usage_unknown_template(db_session) -> None:
    repo = TemplateRepository(db_session)
    with pytest.raises(ResourceNotFoundException):
        await repo.increment_usage("missing")


async def test_revise_keeps_placeholders_when_omitted(db_session) -> None:
    repo = TemplateRepository(db_session)
    created = await repo.create_template("Offer", "v1", placeholders={"a": {}})

    revised = await repo.revise(created.id, "v2", None)

    assert revised.content == "v2"
    assert revised.version == 2
    assert revised.placeholders == {"a": {}}
    assert await repo.revise("missing", "v2", None) is None


async def test_delete_and_delete_many(db_session) -> None:
    repo = TemplateRepository(db_session)
    ids = [(await repo.create_template(f"T{i}", "x")).id for i in range(3)]

    assert await repo.delete(ids[0]) is True
    assert await repo.delete(ids[0]) is False
    assert await repo.delete_many(ids[1:] + ["missing"]) == 2
    assert await repo.delete_many([]) == 0
    for template_id in ids:
        assert await repo.get_by_id(template_id) is None
