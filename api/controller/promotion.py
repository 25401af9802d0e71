"""
Promotion controller - promotions of a registration.
"""
from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session

from database.postgres import get_db
from utils.auth import get_current_actor
from utils.dependencies import get_repository
from utils.response import success_response

from schemas.promotion import PromotionCreate, PromotionResponse, PromotionUpdate
from store.repositories import (
    LocationRepository,
    PromotionRepository,
    RegistrationRepository,
)
from service.promotion import (
    create_promotion,
    delete_promotion,
    get_promotion,
    list_promotions,
    update_promotion,
)


async def create_promotion_controller(
    registration_id: UUID,
    request: PromotionCreate,
    current_actor: dict = Depends(get_current_actor),
    db: Session = Depends(get_db),
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
    location_repo: LocationRepository = Depends(get_repository(LocationRepository)),
):
    promotion = await create_promotion(
        registration_id=registration_id,
        request=request,
        current_actor=current_actor,
        db=db,
        registration_repo=registration_repo,
        location_repo=location_repo,
    )
    return success_response(
        status_code=201,
        message="Promotion created successfully",
        data=PromotionResponse.model_validate(promotion).model_dump(),
    )


async def list_promotions_controller(
    registration_id: UUID,
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
    promotion_repo: PromotionRepository = Depends(get_repository(PromotionRepository)),
):
    promotions = await list_promotions(registration_id, registration_repo, promotion_repo)
    return success_response(
        status_code=200,
        message="Promotions retrieved successfully",
        data=[PromotionResponse.model_validate(promotion).model_dump() for promotion in promotions],
    )


async def get_promotion_controller(
    registration_id: UUID,
    promotion_id: UUID,
    promotion_repo: PromotionRepository = Depends(get_repository(PromotionRepository)),
):
    promotion = await get_promotion(registration_id, promotion_id, promotion_repo)
    return success_response(
        status_code=200,
        message="Promotion retrieved successfully",
        data=PromotionResponse.model_validate(promotion).model_dump(),
    )


async def update_promotion_controller(
    registration_id: UUID,
    promotion_id: UUID,
    request: PromotionUpdate,
    current_actor: dict = Depends(get_current_actor),
    db: Session = Depends(get_db),
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
    promotion_repo: PromotionRepository = Depends(get_repository(PromotionRepository)),
    location_repo: LocationRepository = Depends(get_repository(LocationRepository)),
):
    promotion = await update_promotion(
        registration_id=registration_id,
        promotion_id=promotion_id,
        request=request,
        current_actor=current_actor,
        db=db,
        registration_repo=registration_repo,
        promotion_repo=promotion_repo,
        location_repo=location_repo,
    )
    return success_response(
        status_code=200,
        message="Promotion updated successfully",
        data=PromotionResponse.model_validate(promotion).model_dump(),
    )


async def delete_promotion_controller(
    registration_id: UUID,
    promotion_id: UUID,
    current_actor: dict = Depends(get_current_actor),
    db: Session = Depends(get_db),
    promotion_repo: PromotionRepository = Depends(get_repository(PromotionRepository)),
):
    await delete_promotion(registration_id, promotion_id, db, promotion_repo)
    return success_response(status_code=200, message="Promotion deleted successfully", data={})
