import uuid

import pytest
from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import ConflictError, NotFoundError, PersistenceError, ValidationError
from schemas.location import LocationAdminCreate, LocationCreate, LocationUpdate
from schemas.promotion import PromotionCreate
from service.location import (
    add_location_admin,
    create_location,
    delete_location,
    list_location_admins,
    list_locations,
    remove_location_admin,
    set_primary_location,
    update_location,
)
from service.promotion import create_promotion
from store.enums import LocationAdminRole

from conftest import location_payload, primaries, promotion_payload


def ordered(repos, registration_id):
    return repos.location.list_for_registration(registration_id)


@pytest.mark.asyncio
async def test_submission_marks_first_location_primary(repos, registration):
    locations = ordered(repos, registration.id)

    assert [location.label for location in locations] == ["North", "South"]
    assert [location.is_primary for location in locations] == [True, False]


@pytest.mark.asyncio
async def test_submission_keeps_first_flagged_primary(repos, make_registration):
    registration = await make_registration(
        location_payload("East"),
        location_payload("West", is_primary=True),
        location_payload("Centre", is_primary=True),
    )

    assert [location.label for location in primaries(ordered(repos, registration.id))] == ["West"]


@pytest.mark.asyncio
async def test_submission_without_locations_derives_one(repos, make_registration):
    registration = await make_registration()
    locations = ordered(repos, registration.id)

    assert len(locations) == 1
    assert locations[0].label == registration.name
    assert locations[0].formatted_address == registration.address
    assert locations[0].is_primary


@pytest.mark.asyncio
async def test_create_primary_location_clears_previous(db, repos, registration):
    location = await create_location(
        registration.id,
        LocationCreate(**location_payload("Harbour", is_primary=True)),
        db,
        repos.registration,
        repos.location,
    )

    locations = ordered(repos, registration.id)
    assert len(locations) == 3
    assert primaries(locations) == [location]
    assert locations[0].id == location.id


@pytest.mark.asyncio
async def test_create_non_primary_location(db, repos, registration):
    location = await create_location(
        registration.id,
        LocationCreate(**location_payload("Harbour")),
        db,
        repos.registration,
        repos.location,
    )

    assert not location.is_primary
    assert [loc.label for loc in primaries(ordered(repos, registration.id))] == ["North"]


@pytest.mark.asyncio
async def test_create_location_unknown_registration(db, repos):
    with pytest.raises(NotFoundError):
        await create_location(
            uuid.uuid4(),
            LocationCreate(**location_payload("Nowhere")),
            db,
            repos.registration,
            repos.location,
        )


@pytest.mark.asyncio
async def test_update_sets_primary_and_fields(db, repos, registration):
    south = ordered(repos, registration.id)[1]

    updated = await update_location(
        registration.id,
        south.id,
        LocationUpdate(is_primary=True, phone="+44 23 9200 0000"),
        db,
        repos.registration,
        repos.location,
    )

    assert updated.is_primary
    assert updated.phone == "+44 23 9200 0000"
    assert updated.label == "South"
    assert [location.label for location in primaries(ordered(repos, registration.id))] == ["South"]


@pytest.mark.asyncio
async def test_update_cannot_unset_current_primary(db, repos, registration):
    north = ordered(repos, registration.id)[0]

    with pytest.raises(ConflictError):
        await update_location(
            registration.id, north.id, LocationUpdate(is_primary=False), db, repos.registration, repos.location
        )

    assert [location.label for location in primaries(ordered(repos, registration.id))] == ["North"]


@pytest.mark.asyncio
async def test_update_location_of_other_registration_is_not_found(db, repos, registration, make_registration):
    other = await make_registration(location_payload("Elsewhere"))
    foreign = ordered(repos, other.id)[0]

    with pytest.raises(NotFoundError):
        await update_location(
            registration.id, foreign.id, LocationUpdate(label="Hijack"), db, repos.registration, repos.location
        )


@pytest.mark.asyncio
async def test_set_primary_location(db, repos, registration):
    south = ordered(repos, registration.id)[1]

    await set_primary_location(registration.id, south.id, db, repos.registration, repos.location)
    # Setting it again changes nothing
    await set_primary_location(registration.id, south.id, db, repos.registration, repos.location)

    assert [location.label for location in primaries(ordered(repos, registration.id))] == ["South"]


@pytest.mark.asyncio
async def test_delete_last_location_rejected(db, repos, make_registration):
    registration = await make_registration(location_payload("Only"))
    only = ordered(repos, registration.id)[0]

    with pytest.raises(ValidationError, match="at least one location required"):
        await delete_location(registration.id, only.id, db, repos.registration, repos.location)

    assert len(ordered(repos, registration.id)) == 1


@pytest.mark.asyncio
async def test_delete_primary_promotes_earliest_remaining(db, repos, make_registration):
    registration = await make_registration(
        location_payload("First"),
        location_payload("Second"),
        location_payload("Third"),
    )
    first = ordered(repos, registration.id)[0]

    await delete_location(registration.id, first.id, db, repos.registration, repos.location)

    locations = ordered(repos, registration.id)
    assert [location.label for location in locations] == ["Second", "Third"]
    assert [location.label for location in primaries(locations)] == ["Second"]


@pytest.mark.asyncio
async def test_delete_location_removes_promotion_binding(db, repos, registration, actor):
    north, south = ordered(repos, registration.id)
    promotion = await create_promotion(
        registration.id,
        PromotionCreate(**promotion_payload(scope="location", location_ids=[north.id, south.id])),
        actor,
        db,
        repos.registration,
        repos.location,
    )

    await delete_location(registration.id, south.id, db, repos.registration, repos.location)

    db.expire_all()
    refreshed = repos.promotion.get_for_registration(registration.id, promotion.id)
    assert [location.id for location in refreshed.locations] == [north.id]


@pytest.mark.asyncio
async def test_list_locations_unknown_registration(repos):
    with pytest.raises(NotFoundError):
        await list_locations(uuid.uuid4(), repos.registration, repos.location)


@pytest.mark.asyncio
async def test_location_admin_lifecycle(db, repos, registration, actor):
    north = ordered(repos, registration.id)[0]
    user_id = uuid.uuid4()
    request = LocationAdminCreate(
        user_id=user_id,
        user_email="manager@bluelantern.example",
        user_username="floor.manager",
        role=LocationAdminRole.MANAGER,
    )

    admin = await add_location_admin(
        registration.id, north.id, request, actor, db, repos.location, repos.location_admin
    )
    assert admin.is_active
    assert admin.granted_by == actor["user_id"]
    assert admin.granted_by_username == actor["username"]

    await remove_location_admin(registration.id, north.id, user_id, db, repos.location, repos.location_admin)
    assert await list_location_admins(registration.id, north.id, repos.location, repos.location_admin) == []

    with pytest.raises(NotFoundError):
        await remove_location_admin(registration.id, north.id, user_id, db, repos.location, repos.location_admin)

    regranted = await add_location_admin(
        registration.id,
        north.id,
        request.model_copy(update={"role": LocationAdminRole.STAFF}),
        actor,
        db,
        repos.location,
        repos.location_admin,
    )
    assert regranted.id == admin.id
    assert regranted.is_active
    assert regranted.role == LocationAdminRole.STAFF
    assert repos.location_admin.count(location_id=north.id) == 1


@pytest.mark.asyncio
async def test_database_failure_keeps_deleted_primary(db, repos, registration, monkeypatch):
    north = ordered(repos, registration.id)[0]

    def fail(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(repos.location, "get_earliest", fail)

    with pytest.raises(PersistenceError):
        await delete_location(registration.id, north.id, db, repos.registration, repos.location)

    locations = ordered(repos, registration.id)
    assert [location.label for location in locations] == ["North", "South"]
    assert [location.label for location in primaries(locations)] == ["North"]
