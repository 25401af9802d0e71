from fastapi import APIRouter

from api.controller.location import (
    add_location_admin_controller,
    create_location_controller,
    delete_location_controller,
    get_location_controller,
    list_location_admins_controller,
    list_locations_controller,
    remove_location_admin_controller,
    set_primary_location_controller,
    update_location_controller,
)


location_router = APIRouter(prefix="/registrations/{registration_id}/locations", tags=["Locations"])

location_router.add_api_route(
    "",
    endpoint=create_location_controller,
    methods=["POST"],
    status_code=201,
    summary="Add a location to a registration",
)

location_router.add_api_route(
    "",
    endpoint=list_locations_controller,
    methods=["GET"],
    summary="List locations, primary first",
)

location_router.add_api_route(
    "/{location_id}",
    endpoint=get_location_controller,
    methods=["GET"],
    summary="Get a location",
)

location_router.add_api_route(
    "/{location_id}",
    endpoint=update_location_controller,
    methods=["PUT"],
    summary="Update a location",
)

location_router.add_api_route(
    "/{location_id}/primary",
    endpoint=set_primary_location_controller,
    methods=["POST"],
    summary="Make a location the primary one",
)

location_router.add_api_route(
    "/{location_id}",
    endpoint=delete_location_controller,
    methods=["DELETE"],
    summary="Delete a location",
)

location_router.add_api_route(
    "/{location_id}/admins",
    endpoint=add_location_admin_controller,
    methods=["POST"],
    status_code=201,
    summary="Grant a user a role on a location",
)

location_router.add_api_route(
    "/{location_id}/admins",
    endpoint=list_location_admins_controller,
    methods=["GET"],
    summary="List active location admins",
)

location_router.add_api_route(
    "/{location_id}/admins/{user_id}",
    endpoint=remove_location_admin_controller,
    methods=["DELETE"],
    summary="Revoke a location admin",
)
