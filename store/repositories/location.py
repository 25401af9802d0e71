"""
Location and location-admin repositories.
"""
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.location import BusinessLocation, LocationAdmin
from store.repositories.base import BaseRepository


class LocationRepository(BaseRepository[BusinessLocation]):
    """Repository for BusinessLocation model"""

    def __init__(self, db: Session):
        super().__init__(BusinessLocation, db)

    def get_for_registration(self, registration_id: UUID, location_id: UUID) -> Optional[BusinessLocation]:
        """Location scoped to its parent registration"""
        return (
            self.db.query(BusinessLocation)
            .filter(
                BusinessLocation.id == location_id,
                BusinessLocation.registration_id == registration_id,
            )
            .first()
        )

    def list_for_registration(self, registration_id: UUID) -> List[BusinessLocation]:
        """Primary location first, then creation order"""
        return (
            self.db.query(BusinessLocation)
            .filter(BusinessLocation.registration_id == registration_id)
            .order_by(BusinessLocation.is_primary.desc(), BusinessLocation.created_at.asc())
            .all()
        )

    def get_primary(self, registration_id: UUID) -> Optional[BusinessLocation]:
        return (
            self.db.query(BusinessLocation)
            .filter(
                BusinessLocation.registration_id == registration_id,
                BusinessLocation.is_primary.is_(True),
            )
            .first()
        )

    def count_for_registration(self, registration_id: UUID) -> int:
        return (
            self.db.query(func.count(BusinessLocation.id))
            .filter(BusinessLocation.registration_id == registration_id)
            .scalar()
        )

    def clear_primary(self, registration_id: UUID, keep_location_id: Optional[UUID] = None) -> int:
        """
        Unset is_primary on every location of the registration except
        ``keep_location_id``. Must run before the target is flagged so the
        partial unique index never sees two primaries.
        """
        query = self.db.query(BusinessLocation).filter(
            BusinessLocation.registration_id == registration_id,
            BusinessLocation.is_primary.is_(True),
        )
        if keep_location_id is not None:
            query = query.filter(BusinessLocation.id != keep_location_id)
        return query.update({BusinessLocation.is_primary: False}, synchronize_session="fetch")

    def get_earliest(self, registration_id: UUID) -> Optional[BusinessLocation]:
        return (
            self.db.query(BusinessLocation)
            .filter(BusinessLocation.registration_id == registration_id)
            .order_by(BusinessLocation.created_at.asc())
            .first()
        )

    def list_by_ids(self, registration_id: UUID, location_ids: Sequence[UUID]) -> List[BusinessLocation]:
        """Locations among ``location_ids`` that belong to the registration"""
        if not location_ids:
            return []
        return (
            self.db.query(BusinessLocation)
            .filter(
                BusinessLocation.registration_id == registration_id,
                BusinessLocation.id.in_(list(location_ids)),
            )
            .all()
        )

    def count_matching(self, registration_id: UUID, location_ids: Sequence[UUID]) -> int:
        if not location_ids:
            return 0
        return (
            self.db.query(func.count(BusinessLocation.id))
            .filter(
                BusinessLocation.registration_id == registration_id,
                BusinessLocation.id.in_(list(location_ids)),
            )
            .scalar()
        )

    def assign_business(self, registration_id: UUID, business_id: UUID) -> int:
        return (
            self.db.query(BusinessLocation)
            .filter(BusinessLocation.registration_id == registration_id)
            .update({BusinessLocation.business_id: business_id}, synchronize_session="fetch")
        )


class LocationAdminRepository(BaseRepository[LocationAdmin]):
    """Repository for LocationAdmin grants"""

    def __init__(self, db: Session):
        super().__init__(LocationAdmin, db)

    def get_grant(self, location_id: UUID, user_id: UUID) -> Optional[LocationAdmin]:
        """Grant row for the pair, active or not"""
        return self.find_one_by(location_id=location_id, user_id=user_id)

    def list_active(self, location_id: UUID) -> List[LocationAdmin]:
        return (
            self.db.query(LocationAdmin)
            .filter(LocationAdmin.location_id == location_id, LocationAdmin.is_active.is_(True))
            .order_by(LocationAdmin.granted_at.desc())
            .all()
        )
