from fastapi import APIRouter

from api.controller.registration import (
    get_latest_registration_controller,
    get_registration_controller,
    list_user_registrations_controller,
    submit_registration_controller,
)


registration_router = APIRouter(prefix="/registrations", tags=["Registrations"])

registration_router.add_api_route(
    "",
    endpoint=submit_registration_controller,
    methods=["POST"],
    status_code=201,
    summary="Submit a business registration for review",
)

registration_router.add_api_route(
    "/users/{user_id}/latest",
    endpoint=get_latest_registration_controller,
    methods=["GET"],
    summary="Get the latest registration submitted by a user",
)

registration_router.add_api_route(
    "/users/{user_id}",
    endpoint=list_user_registrations_controller,
    methods=["GET"],
    summary="List the registrations of a user",
)

registration_router.add_api_route(
    "/{registration_id}",
    endpoint=get_registration_controller,
    methods=["GET"],
    summary="Get a registration with its locations",
)
