"""
Shared test fixtures.

Services and the HTTP app run against an in-memory SQLite database built
from the ORM metadata. Every test gets fresh tables.
"""

import os
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

# Set environment variables BEFORE importing any app modules
os.environ.update({
    "POSTGRES_URI": "sqlite://",
    "LOG_LEVEL": "WARNING",
    "AUTO_CREATE_TABLES": "false",
})

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from database.postgres import Base, SessionLocal, configure_mappers, engine, get_db
from schemas.registration import RegistrationCreate
from store.repositories import (
    BusinessRepository,
    BusinessUnitRepository,
    CompanyRepository,
    LocationAdminRepository,
    LocationRepository,
    PromotionRepository,
    RegistrationRepository,
    ReviewEventRepository,
)
from service.registration import submit_registration

configure_mappers()


# ==== DATABASE FIXTURES ==== #


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def repos(db):
    return SimpleNamespace(
        registration=RegistrationRepository(db),
        review_event=ReviewEventRepository(db),
        location=LocationRepository(db),
        location_admin=LocationAdminRepository(db),
        promotion=PromotionRepository(db),
        company=CompanyRepository(db),
        unit=BusinessUnitRepository(db),
        business=BusinessRepository(db),
    )


# ==== APPLICATION FIXTURES ==== #


@pytest_asyncio.fixture
async def client(db):
    from main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ==== DATA FACTORIES ==== #


@pytest.fixture
def actor():
    return {"user_id": uuid.uuid4(), "username": "reviewer.jane"}


@pytest.fixture
def actor_headers(actor):
    return {"X-Actor-Id": str(actor["user_id"]), "X-Actor-Name": actor["username"]}


def registration_payload(**overrides) -> dict:
    payload = {
        "user_id": str(uuid.uuid4()),
        "name": "Blue Lantern Cafe",
        "category": "restaurant",
        "address": "12 Harbour Street, Portsmouth",
        "description": "Neighbourhood cafe serving breakfast and brunch",
        "document_urls": ["https://files.example.com/licence.pdf"],
        "owner_email": "owner@bluelantern.example",
        "owner_username": "bluelantern",
    }
    payload.update(overrides)
    return payload


def location_payload(label: str, is_primary: bool = False, **overrides) -> dict:
    payload = {
        "label": label,
        "formatted_address": f"{label} High Street, Portsmouth",
        "city": "Portsmouth",
        "country": "GB",
        "is_primary": is_primary,
    }
    payload.update(overrides)
    return payload


def promotion_payload(**overrides) -> dict:
    starts_at = datetime.now(timezone.utc) + timedelta(days=1)
    payload = {
        "title": "Weekend brunch deal",
        "promotion_type": "discount",
        "discount_percent": 20,
        "starts_at": starts_at,
        "ends_at": starts_at + timedelta(days=7),
    }
    payload.update(overrides)
    return payload


@pytest_asyncio.fixture
async def make_registration(db, repos):
    async def _make(*locations: dict, **overrides):
        payload = registration_payload(
            locations=list(locations),
            **overrides,
        )
        return await submit_registration(
            request=RegistrationCreate(**payload),
            db=db,
            registration_repo=repos.registration,
        )

    return _make


@pytest_asyncio.fixture
async def registration(make_registration):
    """Registration with two locations, the first one primary."""
    return await make_registration(location_payload("North"), location_payload("South"))


def primaries(locations):
    return [location for location in locations if location.is_primary]

