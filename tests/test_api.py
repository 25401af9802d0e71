import uuid

import pytest

from conftest import location_payload, registration_payload


async def submit(client, **overrides):
    response = await client.post("/api/v1/registrations", json=registration_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Process-Time" in response.headers


@pytest.mark.asyncio
async def test_submit_registration(client):
    data = await submit(client, locations=[location_payload("North"), location_payload("South", is_primary=True)])

    assert data["status"] == "pending"
    assert {location["label"]: location["is_primary"] for location in data["locations"]} == {
        "North": False,
        "South": True,
    }


@pytest.mark.asyncio
async def test_validation_error_envelope(client):
    response = await client.post("/api/v1/registrations", json=registration_payload(document_urls=[]))

    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "error"
    assert body["data"]["code"] == "VALIDATION_ERROR"
    assert "document_urls" in [error["field"] for error in body["data"]["errors"]]


@pytest.mark.asyncio
async def test_review_action_flow(client, actor_headers):
    registration = await submit(client)
    url = f"/api/v1/reviews/{registration['id']}/action"

    rejected = await client.post(url, json={"action": "reject"}, headers=actor_headers)
    assert rejected.status_code == 400
    assert rejected.json()["data"]["code"] == "VALIDATION_ERROR"

    approved = await client.post(url, json={"action": "approve", "notes": "All good"}, headers=actor_headers)
    assert approved.status_code == 200
    data = approved.json()["data"]
    assert data["status"] == "approved"
    assert data["reviewer_name"] == actor_headers["X-Actor-Name"]
    assert data["business_id"] is not None

    conflict = await client.post(url, json={"action": "resume"}, headers=actor_headers)
    assert conflict.status_code == 400
    assert conflict.json()["data"]["code"] == "CONFLICT"

    history = await client.get(f"/api/v1/reviews/{registration['id']}")
    assert history.status_code == 200
    assert [event["action"] for event in history.json()["data"]["history"]] == ["approve"]


@pytest.mark.asyncio
async def test_review_action_unknown_registration(client, actor_headers):
    response = await client.post(
        f"/api/v1/reviews/{uuid.uuid4()}/action", json={"action": "approve"}, headers=actor_headers
    )

    assert response.status_code == 404
    assert response.json()["data"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_pending_reviews_endpoint(client):
    first = await submit(client)
    second = await submit(client)

    response = await client.get("/api/v1/reviews/pending", params={"limit": 1})

    data = response.json()["data"]
    assert data["total"] == 2
    assert data["limit"] == 1
    assert [registration["id"] for registration in data["registrations"]] == [first["id"]]
    assert second["id"] != first["id"]


@pytest.mark.asyncio
async def test_location_endpoints_require_actor(client, actor_headers):
    registration = await submit(client)
    url = f"/api/v1/registrations/{registration['id']}/locations"

    missing = await client.post(url, json=location_payload("Harbour"))
    assert missing.status_code == 400

    created = await client.post(url, json=location_payload("Harbour", is_primary=True), headers=actor_headers)
    assert created.status_code == 201
    location_id = created.json()["data"]["id"]

    listed = await client.get(url)
    assert [location["id"] for location in listed.json()["data"] if location["is_primary"]] == [location_id]


@pytest.mark.asyncio
async def test_promotion_endpoints(client, actor_headers):
    registration = await submit(client, locations=[location_payload("North")])
    location_id = registration["locations"][0]["id"]
    url = f"/api/v1/registrations/{registration['id']}/promotions"
    payload = {
        "title": "Happy hour",
        "promotion_type": "discount",
        "scope": "location",
        "location_ids": [location_id],
        "discount_percent": 15,
        "starts_at": "2030-01-01T17:00:00Z",
        "ends_at": "2030-01-01T19:00:00Z",
    }

    created = await client.post(url, json=payload, headers=actor_headers)
    assert created.status_code == 201, created.text
    data = created.json()["data"]
    assert data["status"] == "scheduled"
    assert data["location_ids"] == [location_id]
    assert "locations" not in data

    invalid = await client.post(url, json={**payload, "discount_percent": 150}, headers=actor_headers)
    assert invalid.status_code == 400

    listed = await client.get(url)
    assert [promotion["id"] for promotion in listed.json()["data"]] == [data["id"]]


@pytest.mark.asyncio
async def test_business_profile_after_approval(client, actor_headers):
    registration = await submit(client)
    approved = await client.post(
        f"/api/v1/reviews/{registration['id']}/action", json={"action": "approve"}, headers=actor_headers
    )
    business_id = approved.json()["data"]["business_id"]

    updated = await client.put(
        f"/api/v1/businesses/{business_id}", json={"website": "https://bluelantern.example"}, headers=actor_headers
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["website"] == "https://bluelantern.example"

    owned = await client.get(f"/api/v1/businesses/users/{registration['user_id']}")
    assert [business["id"] for business in owned.json()["data"]] == [business_id]


@pytest.mark.asyncio
async def test_null_for_required_location_field_is_rejected(client, actor_headers):
    registration = await submit(client, locations=[location_payload("North")])
    location_id = registration["locations"][0]["id"]
    url = f"/api/v1/registrations/{registration['id']}/locations/{location_id}"

    response = await client.put(url, json={"label": None}, headers=actor_headers)

    assert response.status_code == 400
    assert response.json()["data"]["code"] == "VALIDATION_ERROR"
    assert "label" in [error["field"] for error in response.json()["data"]["errors"]]

    fetched = await client.get(url)
    assert fetched.json()["data"]["label"] == "North"


@pytest.mark.asyncio
async def test_null_for_required_business_field_is_rejected(client, actor_headers):
    registration = await submit(client)
    approved = await client.post(
        f"/api/v1/reviews/{registration['id']}/action", json={"action": "approve"}, headers=actor_headers
    )
    business_id = approved.json()["data"]["business_id"]

    response = await client.put(
        f"/api/v1/businesses/{business_id}", json={"business_name": None}, headers=actor_headers
    )

    assert response.status_code == 400
    assert response.json()["data"]["code"] == "VALIDATION_ERROR"

    fetched = await client.get(f"/api/v1/businesses/{business_id}")
    assert fetched.json()["data"]["business_name"] == registration["name"]
