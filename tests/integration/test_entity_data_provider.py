"""Entity data provider integration tests: column flattening and hierarchy aliases."""

import pytest

from app.domain.enums import EntityType
from app.infrastructure.persistence.models import Branch, Brand, Company, Person
from app.infrastructure.persistence.repositories import EntityDataProvider


@pytest.fixture
async def hierarchy(db_session):
    company = Company(company_name="Acme Ltd", tax_number="123", city="Istanbul")
    db_session.add(company)
    await db_session.flush()
    brand = Brand(brand_name="AcmeGo", company_id=company.id)
    db_session.add(brand)
    await db_session.flush()
    branch = Branch(branch_name="Kadikoy", brand_id=brand.id, phones=["+90 216"])
    db_session.add(branch)
    await db_session.flush()
    person = Person(first_name="Ayse", last_name="Demir", role="Manager", branch_id=branch.id)
    loner = Person(first_name="Can", last_name="Yilmaz")
    db_session.add_all([person, loner])
    await db_session.flush()
    return company, brand, branch, person, loner


async def test_company_columns_and_aliases(db_session, hierarchy) -> None:
    company = hierarchy[0]
    attributes = await EntityDataProvider(db_session).get_attributes(
        EntityType.COMPANY, company.id
    )

    assert attributes["company"] == "Acme Ltd"
    assert attributes["company_name"] == "Acme Ltd"
    assert attributes["companyName"] == "Acme Ltd"
    assert attributes["taxNumber"] == "123"
    assert attributes["city"] == "Istanbul"
    assert "created_by" not in attributes
    assert "updated_at" not in attributes


async def test_branch_includes_brand_and_company(db_session, hierarchy) -> None:
    branch = hierarchy[2]
    attributes = await EntityDataProvider(db_session).get_attributes(
        EntityType.BRANCH, branch.id
    )

    assert attributes["branch"] == "Kadikoy"
    assert attributes["brand"] == "AcmeGo"
    assert attributes["brandName"] == "AcmeGo"
    assert attributes["company"] == "Acme Ltd"
    assert attributes["phones"] == ["+90 216"]


async def test_brand_includes_company(db_session, hierarchy) -> None:
    brand = hierarchy[1]
    attributes = await EntityDataProvider(db_session).get_attributes(
        EntityType.BRAND, brand.id
    )
    assert attributes["brand"] == "AcmeGo"
    assert attributes["company_name"] == "Acme Ltd"


async def test_person_full_name_and_branch(db_session, hierarchy) -> None:
    person, loner = hierarchy[3], hierarchy[4]
    provider = EntityDataProvider(db_session)

    attributes = await provider.get_attributes(EntityType.PERSON, person.id)
    assert attributes["full_name"] == "Ayse Demir"
    assert attributes["fullName"] == "Ayse Demir"
    assert attributes["firstName"] == "Ayse"
    assert attributes["branch_name"] == "Kadikoy"

    unassigned = await provider.get_attributes(EntityType.PERSON, loner.id)
    assert "branch" not in unassigned


async def test_unknown_record_returns_none(db_session) -> None:
    provider = EntityDataProvider(db_session)
    assert await provider.get_attributes(EntityType.BRAND, "missing") is None
