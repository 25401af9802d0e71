"""
Business repository for approved business records.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from models.business import Business
from store.repositories.base import BaseRepository


class BusinessRepository(BaseRepository[Business]):
    """Repository for Business model"""

    def __init__(self, db: Session):
        super().__init__(Business, db)

    def get_by_registration_id(self, registration_id: UUID) -> Optional[Business]:
        """Get the business derived from a registration"""
        return self.find_one_by(registration_id=registration_id)

    def list_for_owner(self, owner_user_id: UUID) -> List[Business]:
        return (
            self.db.query(Business)
            .filter(Business.owner_user_id == owner_user_id)
            .order_by(Business.created_at.desc())
            .all()
        )
