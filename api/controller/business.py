"""
Business controller - approved businesses derived from registrations.
"""
from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session

from database.postgres import get_db
from utils.auth import get_current_actor
from utils.dependencies import get_repository
from utils.response import success_response

from schemas.business import BusinessResponse, BusinessUpdate
from store.repositories import BusinessRepository
from service.business import get_business, list_businesses_for_user, update_business


async def get_business_controller(
    business_id: UUID,
    business_repo: BusinessRepository = Depends(get_repository(BusinessRepository)),
):
    business = await get_business(business_id, business_repo)
    return success_response(
        status_code=200,
        message="Business retrieved successfully",
        data=BusinessResponse.model_validate(business).model_dump(),
    )


async def list_user_businesses_controller(
    user_id: UUID,
    business_repo: BusinessRepository = Depends(get_repository(BusinessRepository)),
):
    businesses = await list_businesses_for_user(user_id, business_repo)
    return success_response(
        status_code=200,
        message="Businesses retrieved successfully",
        data=[BusinessResponse.model_validate(business).model_dump() for business in businesses],
    )


async def update_business_controller(
    business_id: UUID,
    request: BusinessUpdate,
    current_actor: dict = Depends(get_current_actor),
    db: Session = Depends(get_db),
    business_repo: BusinessRepository = Depends(get_repository(BusinessRepository)),
):
    business = await update_business(business_id, request, db, business_repo)
    return success_response(
        status_code=200,
        message="Business updated successfully",
        data=BusinessResponse.model_validate(business).model_dump(),
    )
