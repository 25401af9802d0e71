"""
Company controller - companies and their business units.
"""
from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session

from database.postgres import get_db
from utils.auth import get_current_actor
from utils.dependencies import get_repository
from utils.response import success_response

from schemas.company import (
    CompanyCreate,
    CompanyResponse,
    CompanyUpdate,
    CompanyWithUnitsResponse,
    UnitCreate,
    UnitResponse,
    UnitUpdate,
)
from store.repositories import (
    BusinessUnitRepository,
    CompanyRepository,
    RegistrationRepository,
)
from service.company import (
    create_company,
    create_unit,
    delete_company,
    delete_unit,
    get_company_with_units,
    get_unit,
    list_companies_for_user,
    list_units,
    set_primary_unit,
    update_company,
    update_unit,
)


async def create_company_controller(
    request: CompanyCreate,
    current_actor: dict = Depends(get_current_actor),
    db: Session = Depends(get_db),
    company_repo: CompanyRepository = Depends(get_repository(CompanyRepository)),
):
    company = await create_company(request, current_actor, db, company_repo)
    return success_response(
        status_code=201,
        message="Company created successfully",
        data=CompanyResponse.model_validate(company).model_dump(),
    )


async def get_company_controller(
    company_id: UUID,
    company_repo: CompanyRepository = Depends(get_repository(CompanyRepository)),
):
    company = await get_company_with_units(company_id, company_repo)
    return success_response(
        status_code=200,
        message="Company retrieved successfully",
        data=CompanyWithUnitsResponse.model_validate(company).model_dump(),
    )


async def list_user_companies_controller(
    owner_user_id: UUID,
    company_repo: CompanyRepository = Depends(get_repository(CompanyRepository)),
):
    companies = await list_companies_for_user(owner_user_id, company_repo)
    return success_response(
        status_code=200,
        message="Companies retrieved successfully",
        data=[CompanyResponse.model_validate(company).model_dump() for company in companies],
    )


async def update_company_controller(
    company_id: UUID,
    request: CompanyUpdate,
    current_actor: dict = Depends(get_current_actor),
    db: Session = Depends(get_db),
    company_repo: CompanyRepository = Depends(get_repository(CompanyRepository)),
):
    company = await update_company(company_id, request, db, company_repo)
    return success_response(
        status_code=200,
        message="Company updated successfully",
        data=CompanyResponse.model_validate(company).model_dump(),
    )


async def delete_company_controller(
    company_id: UUID,
    current_actor: dict = Depends(get_current_actor),
    db: Session = Depends(get_db),
    company_repo: CompanyRepository = Depends(get_repository(CompanyRepository)),
):
    await delete_company(company_id, db, company_repo)
    return success_response(status_code=200, message="Company deleted successfully", data={})


async def create_unit_controller(
    company_id: UUID,
    request: UnitCreate,
    current_actor: dict = Depends(get_current_actor),
    db: Session = Depends(get_db),
    company_repo: CompanyRepository = Depends(get_repository(CompanyRepository)),
    unit_repo: BusinessUnitRepository = Depends(get_repository(BusinessUnitRepository)),
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
):
    unit = await create_unit(
        company_id=company_id,
        request=request,
        db=db,
        company_repo=company_repo,
        unit_repo=unit_repo,
        registration_repo=registration_repo,
    )
    return success_response(
        status_code=201,
        message="Business unit created successfully",
        data=UnitResponse.model_validate(unit).model_dump(),
    )


async def list_units_controller(
    company_id: UUID,
    company_repo: CompanyRepository = Depends(get_repository(CompanyRepository)),
    unit_repo: BusinessUnitRepository = Depends(get_repository(BusinessUnitRepository)),
):
    units = await list_units(company_id, company_repo, unit_repo)
    return success_response(
        status_code=200,
        message="Business units retrieved successfully",
        data=[UnitResponse.model_validate(unit).model_dump() for unit in units],
    )


async def get_unit_controller(
    company_id: UUID,
    unit_id: UUID,
    unit_repo: BusinessUnitRepository = Depends(get_repository(BusinessUnitRepository)),
):
    unit = await get_unit(company_id, unit_id, unit_repo)
    return success_response(
        status_code=200,
        message="Business unit retrieved successfully",
        data=UnitResponse.model_validate(unit).model_dump(),
    )


async def update_unit_controller(
    company_id: UUID,
    unit_id: UUID,
    request: UnitUpdate,
    current_actor: dict = Depends(get_current_actor),
    db: Session = Depends(get_db),
    company_repo: CompanyRepository = Depends(get_repository(CompanyRepository)),
    unit_repo: BusinessUnitRepository = Depends(get_repository(BusinessUnitRepository)),
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
):
    unit = await update_unit(
        company_id=company_id,
        unit_id=unit_id,
        request=request,
        db=db,
        company_repo=company_repo,
        unit_repo=unit_repo,
        registration_repo=registration_repo,
    )
    return success_response(
        status_code=200,
        message="Business unit updated successfully",
        data=UnitResponse.model_validate(unit).model_dump(),
    )


async def set_primary_unit_controller(
    company_id: UUID,
    unit_id: UUID,
    current_actor: dict = Depends(get_current_actor),
    db: Session = Depends(get_db),
    company_repo: CompanyRepository = Depends(get_repository(CompanyRepository)),
    unit_repo: BusinessUnitRepository = Depends(get_repository(BusinessUnitRepository)),
):
    unit = await set_primary_unit(company_id, unit_id, db, company_repo, unit_repo)
    return success_response(
        status_code=200,
        message="Primary business unit updated",
        data=UnitResponse.model_validate(unit).model_dump(),
    )


async def delete_unit_controller(
    company_id: UUID,
    unit_id: UUID,
    current_actor: dict = Depends(get_current_actor),
    db: Session = Depends(get_db),
    unit_repo: BusinessUnitRepository = Depends(get_repository(BusinessUnitRepository)),
):
    await delete_unit(company_id, unit_id, db, unit_repo)
    return success_response(status_code=200, message="Business unit deleted successfully", data={})
