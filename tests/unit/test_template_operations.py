"""TemplateService unit tests: delete guard, preview, usage statistics, revision."""

import pytest

from app.application.use_cases.documents import DocumentVersioningService
from app.application.use_cases.templates import TemplateService
from app.domain.enums import EntityType
from app.domain.exceptions import (
    ResourceNotFoundException,
    TemplateInUseException,
    ValidationException,
)
from app.shared.enums import AuditAction, AuditEntityType
from tests.fakes import (
    FakeAuditService,
    FakeDocumentRepository,
    FakeEntityDataProvider,
    FakeTemplateRepository,
    make_template,
)


@pytest.fixture
def setup(fixed_clock):
    templates = FakeTemplateRepository(
        make_template("tpl1", name="Invoice"),
        make_template("tpl2", name="Offer", content="Offer for {{company}}"),
        make_template("tpl3", name="Unused", content="{{x}}"),
    )
    documents = FakeDocumentRepository()
    audit = FakeAuditService()
    versioning = DocumentVersioningService(
        templates,
        documents,
        FakeEntityDataProvider({(EntityType.COMPANY, "c1"): {"company": "Acme"}}),
        None,
        clock=fixed_clock,
    )
    service = TemplateService(templates, documents, audit, clock=fixed_clock)
    return service, versioning, templates, audit


class TestDeleteTemplate:
    async def test_delete_unused_template(self, setup) -> None:
        service, _, templates, audit = setup
        await service.delete_template("tpl3", actor_id="admin")
        assert "tpl3" not in templates.templates
        assert audit.entries == [
            (
                AuditEntityType.TEMPLATE,
                "tpl3",
                AuditAction.DELETE,
                'Template "Unused" deleted',
                "admin",
            )
        ]

    async def test_delete_in_use_template_rejected(self, setup) -> None:
        service, versioning, templates, audit = setup
        await versioning.generate_from_template("tpl1", "COMPANY", "c1")
        await versioning.generate_from_template("tpl1", "COMPANY", "c1")

        with pytest.raises(TemplateInUseException) as exc_info:
            await service.delete_template("tpl1")

        assert exc_info.value.message == (
            "Cannot delete template. It is being used by 2 document(s)"
        )
        assert exc_info.value.error_code == "TEMPLATE_IN_USE"
        assert "tpl1" in templates.templates
        assert audit.entries == []

    async def test_delete_missing_template(self, setup) -> None:
        service, _, _, _ = setup
        with pytest.raises(ResourceNotFoundException):
            await service.delete_template("nope")


class TestBulkDeleteTemplates:
    async def test_bulk_delete_unused(self, setup) -> None:
        service, _, templates, audit = setup
        deleted = await service.bulk_delete_templates(["tpl2", "tpl3", "tpl3"])
        assert deleted == 2
        assert set(templates.templates) == {"tpl1"}
        assert [e[1] for e in audit.entries] == ["tpl2", "tpl3"]

    async def test_bulk_delete_is_all_or_nothing(self, setup) -> None:
        service, versioning, templates, _ = setup
        await versioning.generate_from_template("tpl2", "COMPANY", "c1")

        with pytest.raises(TemplateInUseException) as exc_info:
            await service.bulk_delete_templates(["tpl2", "tpl3"])

        assert exc_info.value.message.startswith(
            "Cannot delete templates that are being used by documents"
        )
        assert set(templates.templates) == {"tpl1", "tpl2", "tpl3"}

    async def test_bulk_delete_requires_ids(self, setup) -> None:
        service, _, _, _ = setup
        with pytest.raises(ValidationException):
            await service.bulk_delete_templates([])


class TestPreviewTemplate:
    async def test_preview_fills_sample_and_system_values(self, setup) -> None:
        service, _, templates, _ = setup
        templates.templates["tpl1"] = make_template(
            content="{{company}} {{missing}} {{current_date}}"
        )

        preview = await service.preview_template("tpl1", {"company": "Sample Co"})

        assert preview.original == "{{company}} {{missing}} {{current_date}}"
        assert preview.preview == "Sample Co {{missing}} 15.03.2024"
        assert preview.placeholders == {"company": {"label": "Company"}}
        assert preview.unresolved_keys == ["missing"]

    async def test_preview_matches_declared_keys_verbatim(self, setup) -> None:
        service, _, templates, _ = setup
        templates.templates["tpl1"] = make_template(
            content="{{firma adı}} {{ünvan}}",
            placeholders={"firma adı": {}},
        )

        preview = await service.preview_template("tpl1", {"ünvan": "Müdür"})

        assert preview.preview == "{{firma adı}} Müdür"
        assert preview.unresolved_keys == ["firma adı"]

    async def test_preview_does_not_count_usage(self, setup) -> None:
        service, _, templates, _ = setup
        await service.preview_template("tpl1")
        assert templates.templates["tpl1"].usage_count == 0

    async def test_preview_missing_template(self, setup) -> None:
        service, _, _, _ = setup
        with pytest.raises(ResourceNotFoundException):
            await service.preview_template("nope")


class TestUsageStatistics:
    async def test_counts_and_recent_documents(self, setup) -> None:
        service, versioning, _, _ = setup
        created = [
            await versioning.generate_from_template(
                "tpl1", "COMPANY", "c1", {"name": f"Doc {i}"}
            )
            for i in range(3)
        ]
        await versioning.create_version(created[0].id)

        stats = await service.get_usage_statistics("tpl1", recent_limit=2)

        assert stats.template_name == "Invoice"
        assert stats.usage_count == 3
        assert stats.documents_created == 4
        assert len(stats.recent_documents) == 2
        assert stats.recent_documents[0].name == "Doc 0"
        assert stats.recent_documents[1].name == "Doc 2"

    async def test_unused_template(self, setup) -> None:
        service, _, _, _ = setup
        stats = await service.get_usage_statistics("tpl3")
        assert (stats.usage_count, stats.documents_created, stats.recent_documents) == (
            0,
            0,
            [],
        )


class TestReviseTemplate:
    async def test_revise_bumps_version(self, setup) -> None:
        service, versioning, _, audit = setup
        doc = await versioning.generate_from_template("tpl2", "COMPANY", "c1")

        revised = await service.revise_template(
            "tpl2", "New offer for {{company}}", {"company": {}}, actor_id="admin"
        )

        assert revised.version == 2
        assert revised.content == "New offer for {{company}}"
        assert revised.placeholders == {"company": {}}
        assert doc.content == "Offer for Acme"
        assert audit.entries[-1][2] == AuditAction.UPDATE

    async def test_revise_missing_template(self, setup) -> None:
        service, _, _, _ = setup
        with pytest.raises(ResourceNotFoundException):
            await service.revise_template("nope", "x")
