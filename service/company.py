"""
Companies group business units under one owner. A company has at most one
primary unit; primary changes lock the company row and clear the siblings
before the target is flagged.
"""
from typing import Any, Dict, List
from uuid import UUID, uuid4
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, PersistenceError, ServiceError
from models.business import BusinessCompany, BusinessUnit
from schemas.company import CompanyCreate, CompanyUpdate, UnitCreate, UnitUpdate
from store.repositories import (
    BusinessUnitRepository,
    CompanyRepository,
    RegistrationRepository,
)

logger = logging.getLogger(__name__)


def _column_values(data: Dict[str, Any]) -> Dict[str, Any]:
    if "metadata" in data:
        data["extra_metadata"] = data.pop("metadata") or {}
    return data


def _get_company_or_404(company_id: UUID, company_repo: CompanyRepository) -> BusinessCompany:
    company = company_repo.get_by_id(company_id)
    if not company:
        raise NotFoundError(f"Company {company_id} not found")
    return company


def _lock_company(company_id: UUID, company_repo: CompanyRepository) -> BusinessCompany:
    company = company_repo.lock_by_id(company_id)
    if not company:
        raise NotFoundError(f"Company {company_id} not found")
    return company


def _get_unit_or_404(company_id: UUID, unit_id: UUID, unit_repo: BusinessUnitRepository) -> BusinessUnit:
    unit = unit_repo.get_for_company(company_id, unit_id)
    if not unit:
        raise NotFoundError(f"Unit {unit_id} not found for company {company_id}")
    return unit


def _ensure_registration_exists(registration_id: UUID, registration_repo: RegistrationRepository) -> None:
    if registration_id is not None and not registration_repo.exists(id=registration_id):
        raise NotFoundError(f"Registration {registration_id} not found")


async def create_company(
    request: CompanyCreate,
    current_actor: dict,
    db: Session,
    company_repo: CompanyRepository,
) -> BusinessCompany:
    try:
        company = company_repo.create({
            "owner_user_id": current_actor["user_id"],
            "is_active": True,
            **_column_values(request.model_dump()),
        })
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create company for user {current_actor['user_id']}: {str(e)}")
        raise PersistenceError()

    logger.info(f"Company {company.id} created by user {current_actor['user_id']}")
    return company


async def get_company_with_units(company_id: UUID, company_repo: CompanyRepository) -> BusinessCompany:
    company = company_repo.get_with_units(company_id)
    if not company:
        raise NotFoundError(f"Company {company_id} not found")
    return company


async def list_companies_for_user(owner_user_id: UUID, company_repo: CompanyRepository) -> List[BusinessCompany]:
    return company_repo.list_for_owner(owner_user_id)


async def update_company(
    company_id: UUID,
    request: CompanyUpdate,
    db: Session,
    company_repo: CompanyRepository,
) -> BusinessCompany:
    company = _get_company_or_404(company_id, company_repo)
    try:
        company_repo.update(company, _column_values(request.model_dump(exclude_unset=True)))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to update company {company_id}: {str(e)}")
        raise PersistenceError()

    logger.info(f"Company {company_id} updated")
    return company


async def delete_company(company_id: UUID, db: Session, company_repo: CompanyRepository) -> None:
    """Delete a company together with its units."""
    company = _get_company_or_404(company_id, company_repo)
    try:
        company_repo.delete(company)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to delete company {company_id}: {str(e)}")
        raise PersistenceError()

    logger.info(f"Company {company_id} deleted")


async def create_unit(
    company_id: UUID,
    request: UnitCreate,
    db: Session,
    company_repo: CompanyRepository,
    unit_repo: BusinessUnitRepository,
    registration_repo: RegistrationRepository,
) -> BusinessUnit:
    """The first unit of a company, or one flagged primary, becomes the primary unit."""
    try:
        _lock_company(company_id, company_repo)
        _ensure_registration_exists(request.registration_id, registration_repo)

        unit_id = uuid4()
        make_primary = request.is_primary or unit_repo.get_primary(company_id) is None
        if make_primary:
            unit_repo.clear_primary(company_id, keep_unit_id=unit_id)

        unit = BusinessUnit(
            id=unit_id,
            company_id=company_id,
            is_primary=make_primary,
            is_active=True,
            **_column_values(request.model_dump(exclude={"is_primary"})),
        )
        db.add(unit)
        db.commit()
    except ServiceError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create unit for company {company_id}: {str(e)}")
        raise PersistenceError()

    logger.info(f"Unit {unit.id} created for company {company_id} (primary={make_primary})")
    return unit


async def list_units(
    company_id: UUID,
    company_repo: CompanyRepository,
    unit_repo: BusinessUnitRepository,
) -> List[BusinessUnit]:
    _get_company_or_404(company_id, company_repo)
    return unit_repo.list_active(company_id)


async def get_unit(company_id: UUID, unit_id: UUID, unit_repo: BusinessUnitRepository) -> BusinessUnit:
    return _get_unit_or_404(company_id, unit_id, unit_repo)


async def update_unit(
    company_id: UUID,
    unit_id: UUID,
    request: UnitUpdate,
    db: Session,
    company_repo: CompanyRepository,
    unit_repo: BusinessUnitRepository,
    registration_repo: RegistrationRepository,
) -> BusinessUnit:
    data = _column_values(request.model_dump(exclude_unset=True))
    is_primary = data.pop("is_primary", None)

    try:
        _lock_company(company_id, company_repo)
        unit = _get_unit_or_404(company_id, unit_id, unit_repo)
        if "registration_id" in data:
            _ensure_registration_exists(data["registration_id"], registration_repo)

        if is_primary and not unit.is_primary:
            unit_repo.clear_primary(company_id, keep_unit_id=unit.id)
        if is_primary is not None:
            unit.is_primary = is_primary

        unit_repo.update(unit, data)
        db.commit()
    except ServiceError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to update unit {unit_id}: {str(e)}")
        raise PersistenceError()

    logger.info(f"Unit {unit_id} updated for company {company_id}")
    return unit


async def set_primary_unit(
    company_id: UUID,
    unit_id: UUID,
    db: Session,
    company_repo: CompanyRepository,
    unit_repo: BusinessUnitRepository,
) -> BusinessUnit:
    try:
        _lock_company(company_id, company_repo)
        unit = _get_unit_or_404(company_id, unit_id, unit_repo)
        if not unit.is_primary:
            unit_repo.clear_primary(company_id, keep_unit_id=unit.id)
            unit.is_primary = True
        db.commit()
    except ServiceError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to set primary unit {unit_id}: {str(e)}")
        raise PersistenceError()

    logger.info(f"Unit {unit_id} is now primary for company {company_id}")
    return unit


async def delete_unit(
    company_id: UUID,
    unit_id: UUID,
    db: Session,
    unit_repo: BusinessUnitRepository,
) -> None:
    unit = _get_unit_or_404(company_id, unit_id, unit_repo)
    try:
        unit_repo.delete(unit)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to delete unit {unit_id}: {str(e)}")
        raise PersistenceError()

    logger.info(f"Unit {unit_id} deleted from company {company_id}")
