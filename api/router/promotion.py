from fastapi import APIRouter

from api.controller.promotion import (
    create_promotion_controller,
    delete_promotion_controller,
    get_promotion_controller,
    list_promotions_controller,
    update_promotion_controller,
)


promotion_router = APIRouter(prefix="/registrations/{registration_id}/promotions", tags=["Promotions"])

promotion_router.add_api_route(
    "",
    endpoint=create_promotion_controller,
    methods=["POST"],
    status_code=201,
    summary="Create a promotion",
)

promotion_router.add_api_route(
    "",
    endpoint=list_promotions_controller,
    methods=["GET"],
    summary="List promotions, newest start date first",
)

promotion_router.add_api_route(
    "/{promotion_id}",
    endpoint=get_promotion_controller,
    methods=["GET"],
    summary="Get a promotion",
)

promotion_router.add_api_route(
    "/{promotion_id}",
    endpoint=update_promotion_controller,
    methods=["PUT"],
    summary="Replace a promotion and its locations",
)

promotion_router.add_api_route(
    "/{promotion_id}",
    endpoint=delete_promotion_controller,
    methods=["DELETE"],
    summary="Delete a promotion",
)
