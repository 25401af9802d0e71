"""
Review controller - reviewer queue, history and actions.
"""
from typing import Optional
from uuid import UUID

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from database.postgres import get_db
from utils.auth import get_optional_actor
from utils.dependencies import get_repository
from utils.response import success_response

from schemas.registration import RegistrationResponse, RegistrationWithHistoryResponse
from schemas.review import ReviewActionRequest, ReviewEventResponse
from store.repositories import (
    BusinessRepository,
    LocationRepository,
    RegistrationRepository,
    ReviewEventRepository,
)
from service.review_workflow import (
    get_registration_with_history,
    get_review_stats,
    list_pending_reviews,
    list_review_events,
    submit_review,
)


async def list_pending_reviews_controller(
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
):
    registrations, total, limit, offset = await list_pending_reviews(
        registration_repo=registration_repo,
        limit=limit,
        offset=offset,
    )
    return success_response(
        status_code=200,
        message="Pending reviews retrieved successfully",
        data={
            "registrations": [
                RegistrationResponse.model_validate(registration).model_dump()
                for registration in registrations
            ],
            "total": total,
            "limit": limit,
            "offset": offset,
        },
    )


async def get_review_stats_controller(
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
):
    stats = await get_review_stats(registration_repo)
    return success_response(
        status_code=200,
        message="Review statistics retrieved successfully",
        data=stats.model_dump(),
    )


async def get_business_review_controller(
    registration_id: UUID,
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
    review_event_repo: ReviewEventRepository = Depends(get_repository(ReviewEventRepository)),
):
    registration, history = await get_registration_with_history(
        registration_id, registration_repo, review_event_repo
    )
    response = RegistrationWithHistoryResponse(
        registration=RegistrationResponse.model_validate(registration),
        history=[ReviewEventResponse.model_validate(event) for event in history],
    )
    return success_response(
        status_code=200,
        message="Registration review retrieved successfully",
        data=response.model_dump(),
    )


async def list_review_events_controller(
    registration_id: UUID,
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
    review_event_repo: ReviewEventRepository = Depends(get_repository(ReviewEventRepository)),
):
    events = await list_review_events(registration_id, registration_repo, review_event_repo)
    return success_response(
        status_code=200,
        message="Review history retrieved successfully",
        data=[ReviewEventResponse.model_validate(event).model_dump() for event in events],
    )


async def submit_review_action_controller(
    registration_id: UUID,
    request: ReviewActionRequest,
    current_actor: Optional[dict] = Depends(get_optional_actor),
    db: Session = Depends(get_db),
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
    review_event_repo: ReviewEventRepository = Depends(get_repository(ReviewEventRepository)),
    location_repo: LocationRepository = Depends(get_repository(LocationRepository)),
    business_repo: BusinessRepository = Depends(get_repository(BusinessRepository)),
):
    # The body wins; actor headers fill in a missing reviewer identity
    if current_actor:
        request = request.model_copy(update={
            "reviewer_id": request.reviewer_id or current_actor["user_id"],
            "reviewer_name": request.reviewer_name or current_actor["username"],
        })

    registration = await submit_review(
        registration_id=registration_id,
        request=request,
        db=db,
        registration_repo=registration_repo,
        review_event_repo=review_event_repo,
        location_repo=location_repo,
        business_repo=business_repo,
    )
    return success_response(
        status_code=200,
        message=f"Review action '{request.action.value}' applied",
        data=RegistrationResponse.model_validate(registration).model_dump(),
    )
