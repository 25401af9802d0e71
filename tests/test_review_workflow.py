import uuid

import pytest
from sqlalchemy.exc import SQLAlchemyError

from config.settings import settings
from core.exceptions import ConflictError, NotFoundError, PersistenceError, ValidationError
from schemas.review import ReviewActionRequest
from service.review_workflow import (
    get_review_stats,
    is_transition_allowed,
    list_pending_reviews,
    list_review_events,
    resolve_target_status,
    submit_review,
)
from store.enums import ReviewAction, VerificationStatus

from conftest import location_payload, primaries

REVIEWER_ID = uuid.uuid4()


def review(action: ReviewAction, **overrides) -> ReviewActionRequest:
    payload = {"action": action, "reviewer_id": REVIEWER_ID, "reviewer_name": "Jane Reviewer"}
    payload.update(overrides)
    return ReviewActionRequest(**payload)


async def apply(db, repos, registration_id, request):
    return await submit_review(
        registration_id=registration_id,
        request=request,
        db=db,
        registration_repo=repos.registration,
        review_event_repo=repos.review_event,
        location_repo=repos.location,
        business_repo=repos.business,
    )


@pytest.mark.parametrize(
    "current, action, expected",
    [
        (VerificationStatus.PENDING, ReviewAction.APPROVE, VerificationStatus.APPROVED),
        (VerificationStatus.PENDING, ReviewAction.REQUEST_MORE_INFO, VerificationStatus.UNDER_REVIEW),
        (VerificationStatus.SUSPENDED, ReviewAction.RESUME, VerificationStatus.UNDER_REVIEW),
        (VerificationStatus.REJECTED, ReviewAction.COMMENT, VerificationStatus.REJECTED),
    ],
)
def test_resolve_target_status(current, action, expected):
    assert resolve_target_status(current, action) == expected


def test_transition_table():
    assert is_transition_allowed(VerificationStatus.PENDING, VerificationStatus.APPROVED)
    assert is_transition_allowed(VerificationStatus.APPROVED, VerificationStatus.SUSPENDED)
    assert is_transition_allowed(VerificationStatus.SUSPENDED, VerificationStatus.UNDER_REVIEW)
    assert not is_transition_allowed(VerificationStatus.APPROVED, VerificationStatus.REJECTED)
    assert not is_transition_allowed(VerificationStatus.SUSPENDED, VerificationStatus.APPROVED)
    for target in VerificationStatus:
        assert not is_transition_allowed(VerificationStatus.REJECTED, target)


@pytest.mark.asyncio
async def test_approve_with_two_locations(db, repos, registration):
    updated = await apply(db, repos, registration.id, review(ReviewAction.APPROVE, notes="Documents verified"))

    assert updated.status == VerificationStatus.APPROVED
    assert updated.reviewer_notes == "Documents verified"
    assert updated.reviewer_name == "Jane Reviewer"

    events = repos.review_event.list_for_registration(registration.id)
    assert [event.action for event in events] == [ReviewAction.APPROVE]

    locations = repos.location.list_for_registration(registration.id)
    assert len(locations) == 2
    assert len(primaries(locations)) == 1


@pytest.mark.asyncio
async def test_first_approval_creates_business_once(db, repos, registration):
    await apply(db, repos, registration.id, review(ReviewAction.APPROVE))
    approved = repos.registration.get_by_id(registration.id)
    business = repos.business.get_by_registration_id(registration.id)

    assert business is not None
    assert approved.business_id == business.id
    assert business.business_name == registration.name
    assert business.owner_user_id == registration.user_id
    assert all(location.business_id == business.id for location in repos.location.list_for_registration(registration.id))

    # Second approve is a no-op
    again = await apply(db, repos, registration.id, review(ReviewAction.APPROVE))
    assert again.status == VerificationStatus.APPROVED
    assert repos.business.count(registration_id=registration.id) == 1
    assert repos.review_event.count_for_registration(registration.id) == 1


@pytest.mark.asyncio
async def test_suspend_then_resume_keeps_business(db, repos, registration):
    await apply(db, repos, registration.id, review(ReviewAction.APPROVE))
    business_id = repos.registration.get_by_id(registration.id).business_id

    await apply(db, repos, registration.id, review(ReviewAction.SUSPEND, notes="Complaint received"))
    resumed = await apply(db, repos, registration.id, review(ReviewAction.RESUME))

    assert resumed.status == VerificationStatus.UNDER_REVIEW
    assert resumed.business_id == business_id
    assert resumed.reviewer_notes == "Complaint received"


@pytest.mark.asyncio
async def test_reject_requires_reason(db, repos, registration):
    with pytest.raises(ValidationError):
        await apply(db, repos, registration.id, review(ReviewAction.REJECT, rejection_reason="   "))

    unchanged = repos.registration.get_by_id(registration.id)
    assert unchanged.status == VerificationStatus.PENDING
    assert repos.review_event.count_for_registration(registration.id) == 0


@pytest.mark.asyncio
async def test_reject_records_reason(db, repos, registration):
    rejected = await apply(
        db, repos, registration.id, review(ReviewAction.REJECT, rejection_reason="Licence expired")
    )

    assert rejected.status == VerificationStatus.REJECTED
    assert rejected.rejection_reason == "Licence expired"
    events = repos.review_event.list_for_registration(registration.id)
    assert events[0].rejection_reason == "Licence expired"
    assert repos.business.get_by_registration_id(registration.id) is None


@pytest.mark.asyncio
async def test_comment_keeps_status_and_appends_event(db, repos, registration):
    await apply(db, repos, registration.id, review(ReviewAction.REQUEST_MORE_INFO, notes="Need tax id"))
    commented = await apply(db, repos, registration.id, review(ReviewAction.COMMENT, notes="Called the owner"))

    assert commented.status == VerificationStatus.UNDER_REVIEW
    assert commented.reviewer_notes == "Called the owner"
    actions = [event.action for event in repos.review_event.list_for_registration(registration.id)]
    assert actions == [ReviewAction.REQUEST_MORE_INFO, ReviewAction.COMMENT]


@pytest.mark.asyncio
async def test_comment_allowed_on_rejected(db, repos, registration):
    await apply(db, repos, registration.id, review(ReviewAction.REJECT, rejection_reason="Duplicate"))
    commented = await apply(db, repos, registration.id, review(ReviewAction.COMMENT, notes="Owner appealed"))

    assert commented.status == VerificationStatus.REJECTED
    assert repos.review_event.count_for_registration(registration.id) == 2


@pytest.mark.asyncio
async def test_rejection_reason_cleared_by_later_action(db, repos, registration):
    await apply(db, repos, registration.id, review(ReviewAction.SUSPEND))
    await apply(db, repos, registration.id, review(ReviewAction.RESUME))
    approved = await apply(db, repos, registration.id, review(ReviewAction.APPROVE))

    assert approved.rejection_reason is None


@pytest.mark.asyncio
async def test_illegal_transition_is_conflict_without_side_effects(db, repos, registration):
    await apply(db, repos, registration.id, review(ReviewAction.REJECT, rejection_reason="Fraudulent documents"))

    with pytest.raises(ConflictError):
        await apply(db, repos, registration.id, review(ReviewAction.APPROVE))

    unchanged = repos.registration.get_by_id(registration.id)
    assert unchanged.status == VerificationStatus.REJECTED
    assert repos.review_event.count_for_registration(registration.id) == 1
    assert repos.business.get_by_registration_id(registration.id) is None


@pytest.mark.asyncio
async def test_unknown_registration_is_not_found(db, repos):
    with pytest.raises(NotFoundError):
        await apply(db, repos, uuid.uuid4(), review(ReviewAction.APPROVE))


@pytest.mark.asyncio
async def test_reviewer_identity_required(db, repos, registration):
    with pytest.raises(ValidationError):
        await apply(db, repos, registration.id, review(ReviewAction.APPROVE, reviewer_id=None))
    with pytest.raises(ValidationError):
        await apply(db, repos, registration.id, review(ReviewAction.APPROVE, reviewer_name=" "))

    assert repos.review_event.count_for_registration(registration.id) == 0


@pytest.mark.asyncio
async def test_reviewer_name_fallback(db, repos, registration, monkeypatch):
    monkeypatch.setattr(settings, "REVIEWER_NAME_FALLBACK", "Admin")

    updated = await apply(db, repos, registration.id, review(ReviewAction.APPROVE, reviewer_name=None))

    assert updated.reviewer_name == "Admin"
    assert repos.review_event.list_for_registration(registration.id)[0].reviewer_name == "Admin"


@pytest.mark.asyncio
async def test_review_events_oldest_first(db, repos, registration):
    await apply(db, repos, registration.id, review(ReviewAction.REQUEST_MORE_INFO))
    await apply(db, repos, registration.id, review(ReviewAction.COMMENT, notes="first note"))
    await apply(db, repos, registration.id, review(ReviewAction.APPROVE))

    events = await list_review_events(registration.id, repos.registration, repos.review_event)

    assert [event.action for event in events] == [
        ReviewAction.REQUEST_MORE_INFO,
        ReviewAction.COMMENT,
        ReviewAction.APPROVE,
    ]
    assert [event.created_at for event in events] == sorted(event.created_at for event in events)

    with pytest.raises(NotFoundError):
        await list_review_events(uuid.uuid4(), repos.registration, repos.review_event)


@pytest.mark.asyncio
async def test_pending_queue_and_stats(db, repos, make_registration):
    first = await make_registration(location_payload("Dock"))
    second = await make_registration(location_payload("Quay"))
    third = await make_registration(location_payload("Pier"))

    await apply(db, repos, second.id, review(ReviewAction.REQUEST_MORE_INFO))
    await apply(db, repos, third.id, review(ReviewAction.APPROVE))

    pending, total, limit, offset = await list_pending_reviews(repos.registration)
    assert [registration.id for registration in pending] == [first.id, second.id]
    assert total == 2
    assert (limit, offset) == (50, 0)

    _, _, limit, offset = await list_pending_reviews(repos.registration, limit=500, offset=-3)
    assert (limit, offset) == (100, 0)

    stats = await get_review_stats(repos.registration)
    assert stats.pending == 1
    assert stats.under_review == 1
    assert stats.approved_today == 1
    assert stats.rejected_today == 0


@pytest.mark.asyncio
async def test_database_failure_rolls_back_approval(db, repos, registration, monkeypatch):
    def fail(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(repos.location, "assign_business", fail)

    with pytest.raises(PersistenceError):
        await apply(db, repos, registration.id, review(ReviewAction.APPROVE))

    unchanged = repos.registration.get_by_id(registration.id)
    assert unchanged.status == VerificationStatus.PENDING
    assert unchanged.business_id is None
    assert repos.review_event.count_for_registration(registration.id) == 0
    assert repos.business.get_by_registration_id(registration.id) is None
