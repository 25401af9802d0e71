"""
Repository for BusinessPromotion model.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from models.promotion import BusinessPromotion
from store.repositories.base import BaseRepository


class PromotionRepository(BaseRepository[BusinessPromotion]):

    def __init__(self, db: Session):
        super().__init__(BusinessPromotion, db)

    def get_for_registration(self, registration_id: UUID, promotion_id: UUID) -> Optional[BusinessPromotion]:
        return (
            self.db.query(BusinessPromotion)
            .options(selectinload(BusinessPromotion.locations))
            .filter(
                BusinessPromotion.id == promotion_id,
                BusinessPromotion.registration_id == registration_id,
            )
            .first()
        )

    def list_for_registration(self, registration_id: UUID) -> List[BusinessPromotion]:
        """Newest start date first"""
        return (
            self.db.query(BusinessPromotion)
            .options(selectinload(BusinessPromotion.locations))
            .filter(BusinessPromotion.registration_id == registration_id)
            .order_by(BusinessPromotion.starts_at.desc())
            .all()
        )
