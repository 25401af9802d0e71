from fastapi import APIRouter

from api.controller.business import (
    get_business_controller,
    list_user_businesses_controller,
    update_business_controller,
)


business_router = APIRouter(prefix="/businesses", tags=["Businesses"])

business_router.add_api_route(
    "/users/{user_id}",
    endpoint=list_user_businesses_controller,
    methods=["GET"],
    summary="List the approved businesses of a user",
)

business_router.add_api_route(
    "/{business_id}",
    endpoint=get_business_controller,
    methods=["GET"],
    summary="Get an approved business",
)

business_router.add_api_route(
    "/{business_id}",
    endpoint=update_business_controller,
    methods=["PUT"],
    summary="Update an approved business",
)
