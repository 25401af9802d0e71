"""
Repositories for companies and their business units.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from models.business import BusinessCompany, BusinessUnit
from store.repositories.base import BaseRepository


class CompanyRepository(BaseRepository[BusinessCompany]):
    """Repository for BusinessCompany model"""

    def __init__(self, db: Session):
        super().__init__(BusinessCompany, db)

    def get_with_units(self, company_id: UUID) -> Optional[BusinessCompany]:
        return (
            self.db.query(BusinessCompany)
            .options(selectinload(BusinessCompany.units))
            .filter(BusinessCompany.id == company_id)
            .first()
        )

    def list_for_owner(self, owner_user_id: UUID) -> List[BusinessCompany]:
        """Active companies of an owner, newest first"""
        return (
            self.db.query(BusinessCompany)
            .filter(
                BusinessCompany.owner_user_id == owner_user_id,
                BusinessCompany.is_active.is_(True),
            )
            .order_by(BusinessCompany.created_at.desc())
            .all()
        )


class BusinessUnitRepository(BaseRepository[BusinessUnit]):
    """Repository for BusinessUnit model"""

    def __init__(self, db: Session):
        super().__init__(BusinessUnit, db)

    def get_for_company(self, company_id: UUID, unit_id: UUID) -> Optional[BusinessUnit]:
        return (
            self.db.query(BusinessUnit)
            .filter(BusinessUnit.id == unit_id, BusinessUnit.company_id == company_id)
            .first()
        )

    def list_active(self, company_id: UUID) -> List[BusinessUnit]:
        """Active units, primary first"""
        return (
            self.db.query(BusinessUnit)
            .filter(BusinessUnit.company_id == company_id, BusinessUnit.is_active.is_(True))
            .order_by(BusinessUnit.is_primary.desc(), BusinessUnit.created_at.asc())
            .all()
        )

    def get_primary(self, company_id: UUID) -> Optional[BusinessUnit]:
        return self.find_one_by(company_id=company_id, is_primary=True)

    def clear_primary(self, company_id: UUID, keep_unit_id: Optional[UUID] = None) -> int:
        """Unset is_primary on every unit of the company except ``keep_unit_id``"""
        query = self.db.query(BusinessUnit).filter(
            BusinessUnit.company_id == company_id,
            BusinessUnit.is_primary.is_(True),
        )
        if keep_unit_id is not None:
            query = query.filter(BusinessUnit.id != keep_unit_id)
        return query.update({BusinessUnit.is_primary: False}, synchronize_session="fetch")
