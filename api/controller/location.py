"""
Location controller - locations of a registration and their administrators.
"""
from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session

from database.postgres import get_db
from utils.auth import get_current_actor
from utils.dependencies import get_repository
from utils.response import success_response

from schemas.location import (
    LocationAdminCreate,
    LocationAdminResponse,
    LocationCreate,
    LocationResponse,
    LocationUpdate,
)
from store.repositories import (
    LocationAdminRepository,
    LocationRepository,
    RegistrationRepository,
)
from service.location import (
    add_location_admin,
    create_location,
    delete_location,
    get_location,
    list_location_admins,
    list_locations,
    remove_location_admin,
    set_primary_location,
    update_location,
)


async def create_location_controller(
    registration_id: UUID,
    request: LocationCreate,
    current_actor: dict = Depends(get_current_actor),
    db: Session = Depends(get_db),
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
    location_repo: LocationRepository = Depends(get_repository(LocationRepository)),
):
    location = await create_location(
        registration_id=registration_id,
        request=request,
        db=db,
        registration_repo=registration_repo,
        location_repo=location_repo,
    )
    return success_response(
        status_code=201,
        message="Location created successfully",
        data=LocationResponse.model_validate(location).model_dump(),
    )


async def list_locations_controller(
    registration_id: UUID,
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
    location_repo: LocationRepository = Depends(get_repository(LocationRepository)),
):
    locations = await list_locations(registration_id, registration_repo, location_repo)
    return success_response(
        status_code=200,
        message="Locations retrieved successfully",
        data=[LocationResponse.model_validate(location).model_dump() for location in locations],
    )


async def get_location_controller(
    registration_id: UUID,
    location_id: UUID,
    location_repo: LocationRepository = Depends(get_repository(LocationRepository)),
):
    location = await get_location(registration_id, location_id, location_repo)
    return success_response(
        status_code=200,
        message="Location retrieved successfully",
        data=LocationResponse.model_validate(location).model_dump(),
    )


async def update_location_controller(
    registration_id: UUID,
    location_id: UUID,
    request: LocationUpdate,
    current_actor: dict = Depends(get_current_actor),
    db: Session = Depends(get_db),
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
    location_repo: LocationRepository = Depends(get_repository(LocationRepository)),
):
    location = await update_location(
        registration_id=registration_id,
        location_id=location_id,
        request=request,
        db=db,
        registration_repo=registration_repo,
        location_repo=location_repo,
    )
    return success_response(
        status_code=200,
        message="Location updated successfully",
        data=LocationResponse.model_validate(location).model_dump(),
    )


async def set_primary_location_controller(
    registration_id: UUID,
    location_id: UUID,
    current_actor: dict = Depends(get_current_actor),
    db: Session = Depends(get_db),
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
    location_repo: LocationRepository = Depends(get_repository(LocationRepository)),
):
    location = await set_primary_location(
        registration_id=registration_id,
        location_id=location_id,
        db=db,
        registration_repo=registration_repo,
        location_repo=location_repo,
    )
    return success_response(
        status_code=200,
        message="Primary location updated",
        data=LocationResponse.model_validate(location).model_dump(),
    )


async def delete_location_controller(
    registration_id: UUID,
    location_id: UUID,
    current_actor: dict = Depends(get_current_actor),
    db: Session = Depends(get_db),
    registration_repo: RegistrationRepository = Depends(get_repository(RegistrationRepository)),
    location_repo: LocationRepository = Depends(get_repository(LocationRepository)),
):
    await delete_location(
        registration_id=registration_id,
        location_id=location_id,
        db=db,
        registration_repo=registration_repo,
        location_repo=location_repo,
    )
    return success_response(status_code=200, message="Location deleted successfully", data={})


async def add_location_admin_controller(
    registration_id: UUID,
    location_id: UUID,
    request: LocationAdminCreate,
    current_actor: dict = Depends(get_current_actor),
    db: Session = Depends(get_db),
    location_repo: LocationRepository = Depends(get_repository(LocationRepository)),
    admin_repo: LocationAdminRepository = Depends(get_repository(LocationAdminRepository)),
):
    admin = await add_location_admin(
        registration_id=registration_id,
        location_id=location_id,
        request=request,
        current_actor=current_actor,
        db=db,
        location_repo=location_repo,
        admin_repo=admin_repo,
    )
    return success_response(
        status_code=201,
        message="Location admin added successfully",
        data=LocationAdminResponse.model_validate(admin).model_dump(),
    )


async def list_location_admins_controller(
    registration_id: UUID,
    location_id: UUID,
    location_repo: LocationRepository = Depends(get_repository(LocationRepository)),
    admin_repo: LocationAdminRepository = Depends(get_repository(LocationAdminRepository)),
):
    admins = await list_location_admins(registration_id, location_id, location_repo, admin_repo)
    return success_response(
        status_code=200,
        message="Location admins retrieved successfully",
        data=[LocationAdminResponse.model_validate(admin).model_dump() for admin in admins],
    )


async def remove_location_admin_controller(
    registration_id: UUID,
    location_id: UUID,
    user_id: UUID,
    current_actor: dict = Depends(get_current_actor),
    db: Session = Depends(get_db),
    location_repo: LocationRepository = Depends(get_repository(LocationRepository)),
    admin_repo: LocationAdminRepository = Depends(get_repository(LocationAdminRepository)),
):
    await remove_location_admin(
        registration_id=registration_id,
        location_id=location_id,
        user_id=user_id,
        db=db,
        location_repo=location_repo,
        admin_repo=admin_repo,
    )
    return success_response(status_code=200, message="Location admin removed", data={})
