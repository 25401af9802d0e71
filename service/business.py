from typing import List
from uuid import UUID
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, PersistenceError
from models.business import Business
from schemas.business import BusinessUpdate
from store.repositories import BusinessRepository

logger = logging.getLogger(__name__)


async def get_business(business_id: UUID, business_repo: BusinessRepository) -> Business:
    business = business_repo.get_by_id(business_id)
    if not business:
        raise NotFoundError(f"Business {business_id} not found")
    return business


async def list_businesses_for_user(owner_user_id: UUID, business_repo: BusinessRepository) -> List[Business]:
    return business_repo.list_for_owner(owner_user_id)


async def update_business(
    business_id: UUID,
    request: BusinessUpdate,
    db: Session,
    business_repo: BusinessRepository,
) -> Business:
    """Edit the profile of an approved business."""
    business = await get_business(business_id, business_repo)
    try:
        business_repo.update(business, request.model_dump(exclude_unset=True))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to update business {business_id}: {str(e)}")
        raise PersistenceError()

    logger.info(f"Business {business_id} updated")
    return business
