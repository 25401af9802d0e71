import uuid

import pytest
from pydantic import ValidationError as SchemaValidationError

from core.exceptions import NotFoundError
from schemas.registration import RegistrationCreate
from service.registration import (
    get_latest_registration_for_user,
    get_registration,
    list_registrations_for_user,
)
from store.enums import VerificationStatus

from conftest import location_payload, registration_payload


def test_registration_requires_documents():
    with pytest.raises(SchemaValidationError):
        RegistrationCreate(**registration_payload(document_urls=[]))
    with pytest.raises(SchemaValidationError):
        RegistrationCreate(**registration_payload(document_urls=["  "]))


def test_registration_field_bounds():
    with pytest.raises(SchemaValidationError):
        RegistrationCreate(**registration_payload(name="AB"))
    with pytest.raises(SchemaValidationError):
        RegistrationCreate(**registration_payload(owner_email="not-an-email"))
    with pytest.raises(SchemaValidationError):
        RegistrationCreate(**registration_payload(description="short"))
    with pytest.raises(SchemaValidationError):
        RegistrationCreate(**registration_payload(locations=[location_payload("X")]))


@pytest.mark.asyncio
async def test_submitted_registration_is_pending(repos, registration):
    stored = await get_registration(registration.id, repos.registration)

    assert stored.status == VerificationStatus.PENDING
    assert stored.business_id is None
    assert stored.reviewer_id is None
    assert stored.document_urls == ["https://files.example.com/licence.pdf"]
    assert [location.label for location in stored.locations] == ["North", "South"]


@pytest.mark.asyncio
async def test_get_unknown_registration(repos):
    with pytest.raises(NotFoundError):
        await get_registration(uuid.uuid4(), repos.registration)


@pytest.mark.asyncio
async def test_latest_and_list_for_user(repos, make_registration):
    user_id = str(uuid.uuid4())
    first = await make_registration(location_payload("Dock"), user_id=user_id)
    second = await make_registration(location_payload("Quay"), user_id=user_id, name="Blue Lantern Bakery")
    await make_registration(location_payload("Pier"))

    latest = await get_latest_registration_for_user(uuid.UUID(user_id), repos.registration)
    assert latest.id == second.id

    registrations = await list_registrations_for_user(uuid.UUID(user_id), repos.registration)
    assert [registration.id for registration in registrations] == [second.id, first.id]

    with pytest.raises(NotFoundError):
        await get_latest_registration_for_user(uuid.uuid4(), repos.registration)
    assert await list_registrations_for_user(uuid.uuid4(), repos.registration) == []
