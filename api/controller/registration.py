"""
Registration controller - exposes registration endpoints with repository injection.
"""
from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session

from database.postgres import get_db
from utils.dependencies import get_repository
from utils.response import success_response

from schemas.registration import RegistrationCreate, RegistrationResponse
from store.repositories import RegistrationRepository
from service.registration import (
    get_latest_registration_for_user,
    get_registration,
    list_registrations_for_user,
    submit_registration,
)


async def submit_registration_controller(
    request: RegistrationCreate,
    db: Session = Depends(get_db),
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
):
    registration = await submit_registration(
        request=request,
        db=db,
        registration_repo=registration_repo,
    )
    return success_response(
        status_code=201,
        message="Registration submitted for review",
        data=RegistrationResponse.model_validate(registration).model_dump(),
    )


async def get_registration_controller(
    registration_id: UUID,
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
):
    registration = await get_registration(registration_id, registration_repo)
    return success_response(
        status_code=200,
        message="Registration retrieved successfully",
        data=RegistrationResponse.model_validate(registration).model_dump(),
    )


async def get_latest_registration_controller(
    user_id: UUID,
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
):
    registration = await get_latest_registration_for_user(user_id, registration_repo)
    return success_response(
        status_code=200,
        message="Latest registration retrieved successfully",
        data=RegistrationResponse.model_validate(registration).model_dump(),
    )


async def list_user_registrations_controller(
    user_id: UUID,
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
):
    registrations = await list_registrations_for_user(user_id, registration_repo)
    return success_response(
        status_code=200,
        message="Registrations retrieved successfully",
        data={
            "registrations": [
                RegistrationResponse.model_validate(registration).model_dump()
                for registration in registrations
            ],
            "total": len(registrations),
        },
    )
