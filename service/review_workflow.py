"""
Registration review workflow.

Every status change of a registration goes through ``submit_review``, which
writes the review event and the new status in one transaction. Nothing else
in the code base assigns ``BusinessRegistrationRequest.status``.
"""
from datetime import timedelta
from typing import Dict, FrozenSet, List, Optional, Tuple
from uuid import UUID
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config.settings import settings
from core.exceptions import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    ServiceError,
    ValidationError,
)
from models.audit import utcnow
from models.registration import BusinessRegistrationRequest, ReviewEvent
from schemas.review import ReviewActionRequest, ReviewStatsResponse
from store.enums import ReviewAction, VerificationStatus
from store.repositories import (
    BusinessRepository,
    LocationRepository,
    RegistrationRepository,
    ReviewEventRepository,
)

logger = logging.getLogger(__name__)

ACTION_TARGET_STATUS: Dict[ReviewAction, VerificationStatus] = {
    ReviewAction.APPROVE: VerificationStatus.APPROVED,
    ReviewAction.REJECT: VerificationStatus.REJECTED,
    ReviewAction.REQUEST_MORE_INFO: VerificationStatus.UNDER_REVIEW,
    ReviewAction.SUSPEND: VerificationStatus.SUSPENDED,
    ReviewAction.RESUME: VerificationStatus.UNDER_REVIEW,
}

ALLOWED_TRANSITIONS: Dict[VerificationStatus, FrozenSet[VerificationStatus]] = {
    VerificationStatus.PENDING: frozenset({
        VerificationStatus.UNDER_REVIEW,
        VerificationStatus.APPROVED,
        VerificationStatus.REJECTED,
        VerificationStatus.SUSPENDED,
    }),
    VerificationStatus.UNDER_REVIEW: frozenset({
        VerificationStatus.APPROVED,
        VerificationStatus.REJECTED,
        VerificationStatus.SUSPENDED,
    }),
    VerificationStatus.APPROVED: frozenset({VerificationStatus.SUSPENDED}),
    VerificationStatus.SUSPENDED: frozenset({VerificationStatus.UNDER_REVIEW}),
    VerificationStatus.REJECTED: frozenset(),
}


def resolve_target_status(current: VerificationStatus, action: ReviewAction) -> VerificationStatus:
    """Status a registration ends up in after ``action``. Comments keep the current one."""
    if action == ReviewAction.COMMENT:
        return current
    return ACTION_TARGET_STATUS[action]


def is_transition_allowed(current: VerificationStatus, target: VerificationStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def resolve_reviewer(reviewer_id: Optional[UUID], reviewer_name: Optional[str]) -> Tuple[UUID, str]:
    """
    Validate the reviewer identity.

    A blank name is rejected unless ``REVIEWER_NAME_FALLBACK`` is configured,
    in which case the fallback name is recorded instead.
    """
    if reviewer_id is None:
        raise ValidationError("reviewer_id is required", field="reviewer_id")

    name = (reviewer_name or "").strip()
    if not name:
        if not settings.REVIEWER_NAME_FALLBACK:
            raise ValidationError("reviewer_name is required", field="reviewer_name")
        name = settings.REVIEWER_NAME_FALLBACK
    return reviewer_id, name


def _validate_review_request(request: ReviewActionRequest) -> Tuple[UUID, str, Optional[str]]:
    rejection_reason = request.rejection_reason.strip() if request.rejection_reason else None
    if request.action == ReviewAction.REJECT and not rejection_reason:
        raise ValidationError("rejection_reason is required to reject a registration", field="rejection_reason")

    reviewer_id, reviewer_name = resolve_reviewer(request.reviewer_id, request.reviewer_name)
    return reviewer_id, reviewer_name, rejection_reason


async def submit_review(
    registration_id: UUID,
    request: ReviewActionRequest,
    db: Session,
    registration_repo: RegistrationRepository,
    review_event_repo: ReviewEventRepository,
    location_repo: LocationRepository,
    business_repo: BusinessRepository,
) -> BusinessRegistrationRequest:
    """
    Apply a reviewer action to a registration.

    Input is validated before the registration row is touched. The row is
    then locked for the rest of the transaction, so concurrent reviews of the
    same registration are serialised and see each other's status.
    """
    reviewer_id, reviewer_name, rejection_reason = _validate_review_request(request)
    if not registration_repo.get_by_id(registration_id):
        raise NotFoundError(f"Registration {registration_id} not found")

    try:
        registration = registration_repo.lock_by_id(registration_id)
        if not registration:
            raise NotFoundError(f"Registration {registration_id} not found")

        current = registration.status
        target = resolve_target_status(current, request.action)

        if request.action == ReviewAction.APPROVE and current == VerificationStatus.APPROVED:
            db.rollback()
            logger.info(f"Registration {registration_id} already approved, nothing to do")
            return registration

        if request.action != ReviewAction.COMMENT and not is_transition_allowed(current, target):
            raise ConflictError(
                f"Cannot {request.action.value} a registration that is {current.value}",
                details={"current_status": current.value, "target_status": target.value},
            )

        now = utcnow()
        review_event_repo.record(
            registration_id=registration.id,
            action=request.action,
            reviewer_id=reviewer_id,
            reviewer_name=reviewer_name,
            notes=request.notes,
            rejection_reason=rejection_reason,
        )

        registration.status = target
        registration.rejection_reason = rejection_reason
        if request.notes is not None:
            registration.reviewer_notes = request.notes
        registration.reviewer_id = reviewer_id
        registration.reviewer_name = reviewer_name
        registration.updated_at = now

        if target == VerificationStatus.APPROVED and registration.business_id is None:
            business = business_repo.create({
                "registration_id": registration.id,
                "owner_user_id": registration.user_id,
                "business_name": registration.name,
                "category": registration.category,
                "tax_id": registration.tax_id,
                "description": registration.description,
                "website": registration.website,
                "is_active": True,
                "extra_metadata": {},
            })
            registration.business_id = business.id
            location_repo.assign_business(registration.id, business.id)
            logger.info(f"Business {business.id} created from registration {registration.id}")

        db.commit()
    except ServiceError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to record review for registration {registration_id}: {str(e)}")
        raise PersistenceError()

    logger.info(
        f"Registration {registration_id} reviewed by {reviewer_name}: "
        f"{request.action.value} ({current.value} -> {target.value})"
    )
    return registration


async def list_review_events(
    registration_id: UUID,
    registration_repo: RegistrationRepository,
    review_event_repo: ReviewEventRepository,
) -> List[ReviewEvent]:
    if not registration_repo.exists(id=registration_id):
        raise NotFoundError(f"Registration {registration_id} not found")
    return review_event_repo.list_for_registration(registration_id)


async def get_registration_with_history(
    registration_id: UUID,
    registration_repo: RegistrationRepository,
    review_event_repo: ReviewEventRepository,
) -> Tuple[BusinessRegistrationRequest, List[ReviewEvent]]:
    registration = registration_repo.get_with_locations(registration_id)
    if not registration:
        raise NotFoundError(f"Registration {registration_id} not found")
    return registration, review_event_repo.list_for_registration(registration_id)


def clamp_pagination(limit: Optional[int], offset: Optional[int]) -> Tuple[int, int]:
    if limit is None:
        limit = settings.PENDING_REVIEWS_DEFAULT_LIMIT
    limit = max(1, min(limit, settings.PENDING_REVIEWS_MAX_LIMIT))
    offset = max(0, offset or 0)
    return limit, offset


async def list_pending_reviews(
    registration_repo: RegistrationRepository,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> Tuple[List[BusinessRegistrationRequest], int, int, int]:
    """Registrations in the review queue, oldest submission first."""
    limit, offset = clamp_pagination(limit, offset)
    registrations = registration_repo.list_pending(limit=limit, offset=offset)
    return registrations, registration_repo.count_pending(), limit, offset


async def get_review_stats(registration_repo: RegistrationRepository) -> ReviewStatsResponse:
    by_status = registration_repo.count_by_status()
    since = utcnow() - timedelta(hours=24)
    return ReviewStatsResponse(
        pending=by_status.get(VerificationStatus.PENDING, 0),
        under_review=by_status.get(VerificationStatus.UNDER_REVIEW, 0),
        approved_today=registration_repo.count_updated_since(VerificationStatus.APPROVED, since),
        rejected_today=registration_repo.count_updated_since(VerificationStatus.REJECTED, since),
    )
