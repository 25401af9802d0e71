from fastapi import APIRouter

from api.controller.company import (
    create_company_controller,
    create_unit_controller,
    delete_company_controller,
    delete_unit_controller,
    get_company_controller,
    get_unit_controller,
    list_units_controller,
    list_user_companies_controller,
    set_primary_unit_controller,
    update_company_controller,
    update_unit_controller,
)


company_router = APIRouter(prefix="/companies", tags=["Companies"])

company_router.add_api_route(
    "",
    endpoint=create_company_controller,
    methods=["POST"],
    status_code=201,
    summary="Create a company owned by the caller",
)

company_router.add_api_route(
    "/users/{owner_user_id}",
    endpoint=list_user_companies_controller,
    methods=["GET"],
    summary="List the active companies of an owner",
)

company_router.add_api_route(
    "/{company_id}",
    endpoint=get_company_controller,
    methods=["GET"],
    summary="Get a company with its units",
)

company_router.add_api_route(
    "/{company_id}",
    endpoint=update_company_controller,
    methods=["PUT"],
    summary="Update a company",
)

company_router.add_api_route(
    "/{company_id}",
    endpoint=delete_company_controller,
    methods=["DELETE"],
    summary="Delete a company and its units",
)

company_router.add_api_route(
    "/{company_id}/units",
    endpoint=create_unit_controller,
    methods=["POST"],
    status_code=201,
    summary="Add a business unit",
)

company_router.add_api_route(
    "/{company_id}/units",
    endpoint=list_units_controller,
    methods=["GET"],
    summary="List active units, primary first",
)

company_router.add_api_route(
    "/{company_id}/units/{unit_id}",
    endpoint=get_unit_controller,
    methods=["GET"],
    summary="Get a business unit",
)

company_router.add_api_route(
    "/{company_id}/units/{unit_id}",
    endpoint=update_unit_controller,
    methods=["PUT"],
    summary="Update a business unit",
)

company_router.add_api_route(
    "/{company_id}/units/{unit_id}/primary",
    endpoint=set_primary_unit_controller,
    methods=["POST"],
    summary="Make a unit the primary one",
)

company_router.add_api_route(
    "/{company_id}/units/{unit_id}",
    endpoint=delete_unit_controller,
    methods=["DELETE"],
    summary="Delete a business unit",
)
