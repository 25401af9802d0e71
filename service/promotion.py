from typing import List, Optional
from uuid import UUID
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, PersistenceError, ServiceError
from models.audit import utcnow
from models.location import BusinessLocation
from models.promotion import BusinessPromotion
from schemas.promotion import PromotionBase, PromotionCreate, PromotionUpdate
from store.enums import PromotionScope, PromotionStatus
from store.repositories import (
    LocationRepository,
    PromotionRepository,
    RegistrationRepository,
)

logger = logging.getLogger(__name__)

PROMOTION_FIELDS = (
    "title",
    "subtitle",
    "description",
    "promotion_type",
    "scope",
    "image_url",
    "prize",
    "reward_points",
    "discount_percent",
    "max_claims",
    "per_user_limit",
    "requires_check_in",
    "requires_purchase",
    "terms",
    "starts_at",
    "ends_at",
)


def _resolve_locations(
    registration_id: UUID,
    request: PromotionBase,
    location_repo: LocationRepository,
) -> List[BusinessLocation]:
    """
    Locations a promotion binds to. Business-wide promotions bind to none.

    Every requested id must belong to the registration; the check runs before
    any association is written.
    """
    if request.scope == PromotionScope.BUSINESS:
        return []

    location_ids = request.unique_location_ids()
    if location_repo.count_matching(registration_id, location_ids) != len(location_ids):
        raise NotFoundError(
            "One or more locations do not exist or belong to another registration",
            details={"location_ids": [str(location_id) for location_id in location_ids]},
        )
    return location_repo.list_by_ids(registration_id, location_ids)


def _initial_status(request: PromotionCreate) -> PromotionStatus:
    # Derived once; reads never re-evaluate it against the clock
    if request.starts_at > utcnow():
        return PromotionStatus.SCHEDULED
    return PromotionStatus.ACTIVE


def _actor_id(current_actor: Optional[dict]) -> Optional[UUID]:
    return current_actor["user_id"] if current_actor else None


async def create_promotion(
    registration_id: UUID,
    request: PromotionCreate,
    current_actor: Optional[dict],
    db: Session,
    registration_repo: RegistrationRepository,
    location_repo: LocationRepository,
) -> BusinessPromotion:
    request.validate_business_rules()

    try:
        registration = registration_repo.get_by_id(registration_id)
        if not registration:
            raise NotFoundError(f"Registration {registration_id} not found")

        locations = _resolve_locations(registration_id, request, location_repo)

        promotion = BusinessPromotion(
            registration_id=registration_id,
            status=_initial_status(request),
            total_claims=0,
            extra_metadata=request.metadata or {},
            created_by=_actor_id(current_actor),
            updated_by=_actor_id(current_actor),
            **{field: getattr(request, field) for field in PROMOTION_FIELDS},
        )
        promotion.locations = locations
        db.add(promotion)
        registration.updated_at = utcnow()
        db.commit()
    except ServiceError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create promotion for registration {registration_id}: {str(e)}")
        raise PersistenceError()

    logger.info(
        f"Promotion {promotion.id} created for registration {registration_id} "
        f"({promotion.scope.value}, {promotion.status.value}, {len(locations)} location(s))"
    )
    return promotion


async def update_promotion(
    registration_id: UUID,
    promotion_id: UUID,
    request: PromotionUpdate,
    current_actor: Optional[dict],
    db: Session,
    registration_repo: RegistrationRepository,
    promotion_repo: PromotionRepository,
    location_repo: LocationRepository,
) -> BusinessPromotion:
    """
    Replace a promotion and its location set. The status is left alone unless
    the request carries one explicitly.
    """
    request.validate_business_rules()

    try:
        promotion = promotion_repo.get_for_registration(registration_id, promotion_id)
        if not promotion:
            raise NotFoundError(f"Promotion {promotion_id} not found for registration {registration_id}")

        locations = _resolve_locations(registration_id, request, location_repo)

        for field in PROMOTION_FIELDS:
            setattr(promotion, field, getattr(request, field))
        if request.status is not None:
            promotion.status = request.status
        promotion.published_at = request.published_at
        if request.metadata is not None:
            promotion.extra_metadata = request.metadata
        promotion.updated_by = _actor_id(current_actor)
        promotion.locations = locations

        registration = registration_repo.get_by_id(registration_id)
        registration.updated_at = utcnow()
        db.commit()
    except ServiceError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to update promotion {promotion_id}: {str(e)}")
        raise PersistenceError()

    logger.info(f"Promotion {promotion_id} updated ({len(locations)} location(s))")
    return promotion


async def get_promotion(
    registration_id: UUID,
    promotion_id: UUID,
    promotion_repo: PromotionRepository,
) -> BusinessPromotion:
    promotion = promotion_repo.get_for_registration(registration_id, promotion_id)
    if not promotion:
        raise NotFoundError(f"Promotion {promotion_id} not found for registration {registration_id}")
    return promotion


async def list_promotions(
    registration_id: UUID,
    registration_repo: RegistrationRepository,
    promotion_repo: PromotionRepository,
) -> List[BusinessPromotion]:
    if not registration_repo.exists(id=registration_id):
        raise NotFoundError(f"Registration {registration_id} not found")
    return promotion_repo.list_for_registration(registration_id)


async def delete_promotion(
    registration_id: UUID,
    promotion_id: UUID,
    db: Session,
    promotion_repo: PromotionRepository,
) -> None:
    promotion = promotion_repo.get_for_registration(registration_id, promotion_id)
    if not promotion:
        raise NotFoundError(f"Promotion {promotion_id} not found for registration {registration_id}")

    try:
        promotion_repo.delete(promotion)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to delete promotion {promotion_id}: {str(e)}")
        raise PersistenceError()

    logger.info(f"Promotion {promotion_id} deleted from registration {registration_id}")
