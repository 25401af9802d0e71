import uuid

import pytest
from pydantic import ValidationError as SchemaValidationError

from core.exceptions import NotFoundError
from schemas.company import CompanyCreate, CompanyUpdate, UnitCreate, UnitUpdate
from service.company import (
    create_company,
    create_unit,
    delete_company,
    delete_unit,
    get_company_with_units,
    list_companies_for_user,
    list_units,
    set_primary_unit,
    update_company,
    update_unit,
)

from conftest import primaries


@pytest.fixture
def company_request():
    return CompanyCreate(company_name="Harbour Hospitality Group", tax_id="GB123456")


async def add_unit(db, repos, company_id, name, **fields):
    return await create_unit(
        company_id,
        UnitCreate(unit_name=name, category="restaurant", **fields),
        db,
        repos.company,
        repos.unit,
        repos.registration,
    )


@pytest.mark.asyncio
async def test_create_and_list_companies(db, repos, actor, company_request):
    company = await create_company(company_request, actor, db, repos.company)

    assert company.owner_user_id == actor["user_id"]
    assert company.is_active

    companies = await list_companies_for_user(actor["user_id"], repos.company)
    assert [c.id for c in companies] == [company.id]
    assert await list_companies_for_user(uuid.uuid4(), repos.company) == []


@pytest.mark.asyncio
async def test_update_company_is_partial(db, repos, actor, company_request):
    company = await create_company(company_request, actor, db, repos.company)

    updated = await update_company(
        company.id, CompanyUpdate(legal_entity_type="Ltd", metadata={"region": "south"}), db, repos.company
    )

    assert updated.company_name == "Harbour Hospitality Group"
    assert updated.legal_entity_type == "Ltd"
    assert updated.extra_metadata == {"region": "south"}


@pytest.mark.asyncio
async def test_first_unit_becomes_primary(db, repos, actor, company_request):
    company = await create_company(company_request, actor, db, repos.company)

    first = await add_unit(db, repos, company.id, "Cafe")
    second = await add_unit(db, repos, company.id, "Bakery")

    assert first.is_primary
    assert not second.is_primary


@pytest.mark.asyncio
async def test_single_primary_unit(db, repos, actor, company_request):
    company = await create_company(company_request, actor, db, repos.company)
    await add_unit(db, repos, company.id, "Cafe")
    bakery = await add_unit(db, repos, company.id, "Bakery", is_primary=True)

    assert [unit.unit_name for unit in primaries(repos.unit.list_active(company.id))] == ["Bakery"]

    cafe = [unit for unit in repos.unit.list_active(company.id) if unit.unit_name == "Cafe"][0]
    await set_primary_unit(company.id, cafe.id, db, repos.company, repos.unit)
    assert [unit.unit_name for unit in primaries(repos.unit.list_active(company.id))] == ["Cafe"]

    await update_unit(company.id, bakery.id, UnitUpdate(is_primary=True), db, repos.company, repos.unit, repos.registration)
    assert [unit.unit_name for unit in primaries(repos.unit.list_active(company.id))] == ["Bakery"]


@pytest.mark.asyncio
async def test_unit_with_unknown_registration(db, repos, actor, company_request):
    company = await create_company(company_request, actor, db, repos.company)

    with pytest.raises(NotFoundError):
        await add_unit(db, repos, company.id, "Cafe", registration_id=uuid.uuid4())

    assert repos.unit.count(company_id=company.id) == 0


@pytest.mark.asyncio
async def test_unit_linked_to_registration(db, repos, actor, company_request, registration):
    company = await create_company(company_request, actor, db, repos.company)

    unit = await add_unit(db, repos, company.id, "Cafe", registration_id=registration.id)

    assert unit.registration_id == registration.id


@pytest.mark.asyncio
async def test_unit_for_unknown_company(db, repos):
    with pytest.raises(NotFoundError):
        await add_unit(db, repos, uuid.uuid4(), "Cafe")


@pytest.mark.asyncio
async def test_units_listed_primary_first(db, repos, actor, company_request):
    company = await create_company(company_request, actor, db, repos.company)
    await add_unit(db, repos, company.id, "Cafe")
    await add_unit(db, repos, company.id, "Bakery", is_primary=True)

    units = await list_units(company.id, repos.company, repos.unit)

    assert [unit.unit_name for unit in units] == ["Bakery", "Cafe"]


@pytest.mark.asyncio
async def test_delete_unit_and_company(db, repos, actor, company_request):
    company = await create_company(company_request, actor, db, repos.company)
    cafe = await add_unit(db, repos, company.id, "Cafe")
    await add_unit(db, repos, company.id, "Bakery")

    await delete_unit(company.id, cafe.id, db, repos.unit)
    with pytest.raises(NotFoundError):
        await delete_unit(company.id, cafe.id, db, repos.unit)

    fetched = await get_company_with_units(company.id, repos.company)
    assert [unit.unit_name for unit in fetched.units] == ["Bakery"]

    await delete_company(company.id, db, repos.company)
    assert repos.unit.count(company_id=company.id) == 0
    with pytest.raises(NotFoundError):
        await get_company_with_units(company.id, repos.company)


def test_updates_reject_null_for_required_fields():
    with pytest.raises(SchemaValidationError):
        CompanyUpdate(company_name=None)
    with pytest.raises(SchemaValidationError):
        UnitUpdate(unit_name=None)
    with pytest.raises(SchemaValidationError):
        UnitUpdate(is_active=None)

    # Omitted fields stay out of the update
    assert UnitUpdate(category="bakery").model_dump(exclude_unset=True) == {"category": "bakery"}
