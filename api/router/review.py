from fastapi import APIRouter

from api.controller.review import (
    get_business_review_controller,
    get_review_stats_controller,
    list_pending_reviews_controller,
    list_review_events_controller,
    submit_review_action_controller,
)


review_router = APIRouter(prefix="/reviews", tags=["Reviews"])

# Static paths first so they are not captured by /{registration_id}
review_router.add_api_route(
    "/pending",
    endpoint=list_pending_reviews_controller,
    methods=["GET"],
    summary="List registrations waiting for review",
)

review_router.add_api_route(
    "/stats",
    endpoint=get_review_stats_controller,
    methods=["GET"],
    summary="Review queue statistics",
)

review_router.add_api_route(
    "/{registration_id}",
    endpoint=get_business_review_controller,
    methods=["GET"],
    summary="Get a registration with its review history",
)

review_router.add_api_route(
    "/{registration_id}/events",
    endpoint=list_review_events_controller,
    methods=["GET"],
    summary="List review events, oldest first",
)

review_router.add_api_route(
    "/{registration_id}/action",
    endpoint=submit_review_action_controller,
    methods=["POST"],
    summary="Approve, reject, suspend, resume or comment on a registration",
)
