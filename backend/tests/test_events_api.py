"""Event endpoints, response envelopes and error mapping."""

import uuid
from datetime import timedelta

import pytest
from conftest import future_date
from pydantic import ValidationError

from cycling_photos.domain.audit import utcnow
from cycling_photos.schemas.event import EventCreate

pytestmark = pytest.mark.anyio


async def _create(client, name="Gran Fondo Girona", days=30, location="Girona"):
	response = await client.post(
		"/api/v1/events",
		json={"name": name, "date": future_date(days).isoformat(), "location": location},
	)
	assert response.status_code == 201, response.text
	return response.json()["data"]["id"]


async def test_health(client):
	response = await client.get("/health")
	assert response.status_code == 200
	assert response.json() == {"status": "ok"}


async def test_create_event_envelope(client):
	response = await client.post(
		"/api/v1/events",
		json={"name": "Gran Fondo Girona", "date": future_date().isoformat()},
		headers={"X-Request-Id": "req-123"},
	)

	assert response.status_code == 201
	assert response.headers["X-Request-Id"] == "req-123"
	body = response.json()
	uuid.UUID(body["data"]["id"])
	assert body["meta"]["requestId"] == "req-123"
	assert body["meta"]["message"] == "Resource created successfully"
	assert body["meta"]["timestamp"].endswith("Z")


async def test_request_id_generated_when_missing(client):
	response = await client.get("/api/v1/events")
	request_id = response.headers["X-Request-Id"]
	assert request_id
	assert response.json()["meta"]["requestId"] == request_id


async def test_get_event_detail(client):
	event_id = await _create(client, location="Girona")

	response = await client.get(f"/api/v1/events/{event_id}")

	assert response.status_code == 200
	data = response.json()["data"]
	assert data["id"] == event_id
	assert data["name"] == "Gran Fondo Girona"
	assert data["location"] == "Girona"
	assert data["status"] == "draft"
	assert data["totalPhotos"] == 0
	assert data["processedPhotos"] == 0
	assert "createdAt" in data and "updatedAt" in data


async def test_list_events_newest_date_first(client):
	near = await _create(client, name="Near Race", days=5)
	far = await _create(client, name="Far Race", days=50)

	response = await client.get("/api/v1/events")

	assert [item["id"] for item in response.json()["data"]] == [far, near]


async def test_list_events_pagination(client):
	for i in range(3):
		await _create(client, name=f"Race {i}", days=10 + i)

	page_two = await client.get("/api/v1/events", params={"page": 2, "limit": 2})

	assert [item["name"] for item in page_two.json()["data"]] == ["Race 0"]


async def test_invalid_pagination_is_validation_error(client):
	response = await client.get("/api/v1/events", params={"limit": 0})
	assert response.status_code == 400
	error = response.json()["error"]
	assert error["code"] == "VALIDATION_FAILED"
	assert "limit" in error["fields"]


async def test_unknown_event_is_not_found(client):
	missing = uuid.uuid4()
	response = await client.get(f"/api/v1/events/{missing}")

	assert response.status_code == 404
	body = response.json()
	assert body["error"]["code"] == "NOT_FOUND"
	assert body["error"]["message"] == f"Event with id {missing} was not found"
	assert body["meta"]["path"] == f"/api/v1/events/{missing}"
	assert "stack" not in body["error"]


async def test_short_name_is_validation_error(client):
	response = await client.post(
		"/api/v1/events", json={"name": "ab", "date": future_date().isoformat()}
	)
	assert response.status_code == 400
	assert "name" in response.json()["error"]["fields"]


async def test_past_date_is_business_rule(client):
	past = (utcnow().date() - timedelta(days=1)).isoformat()
	response = await client.post("/api/v1/events", json={"name": "Old Race", "date": past})

	assert response.status_code == 422
	error = response.json()["error"]
	assert error["code"] == "BUSINESS_RULE"
	assert error["message"] == "Event date cannot be in the past"
	assert error["shouldThrow"] is False


async def test_update_event_partial(client):
	event_id = await _create(client, location="Girona")

	response = await client.patch(f"/api/v1/events/{event_id}", json={"name": "Renamed Race"})
	assert response.status_code == 200
	assert response.json()["data"]["id"] == event_id

	data = (await client.get(f"/api/v1/events/{event_id}")).json()["data"]
	assert data["name"] == "Renamed Race"
	assert data["location"] == "Girona"


async def test_update_event_clears_location_but_not_name(client):
	event_id = await _create(client, location="Girona")

	await client.patch(f"/api/v1/events/{event_id}", json={"name": None, "location": None})

	data = (await client.get(f"/api/v1/events/{event_id}")).json()["data"]
	assert data["name"] == "Gran Fondo Girona"
	assert data["location"] is None


async def test_update_unknown_event(client):
	response = await client.patch(f"/api/v1/events/{uuid.uuid4()}", json={"name": "Whatever"})
	assert response.status_code == 404


async def test_delete_event_hides_it(client):
	event_id = await _create(client)

	response = await client.delete(f"/api/v1/events/{event_id}")
	assert response.status_code == 200
	assert response.json()["meta"]["message"] == "Resource deleted successfully"

	assert (await client.get(f"/api/v1/events/{event_id}")).status_code == 404
	assert (await client.get("/api/v1/events")).json()["data"] == []
	assert (await client.delete(f"/api/v1/events/{event_id}")).status_code == 404


async def test_create_event_accepts_datetime_date(client):
	day = future_date(20)
	response = await client.post(
		"/api/v1/events",
		json={"name": "Morning Sportive", "date": f"{day.isoformat()}T08:00:00.000Z"},
	)

	assert response.status_code == 201, response.text
	event_id = response.json()["data"]["id"]
	data = (await client.get(f"/api/v1/events/{event_id}")).json()["data"]
	assert data["date"] == day.isoformat()


async def test_update_event_accepts_datetime_date(client):
	event_id = await _create(client)
	day = future_date(40)

	response = await client.patch(
		f"/api/v1/events/{event_id}", json={"date": f"{day.isoformat()}T18:30:00+00:00"}
	)

	assert response.status_code == 200, response.text
	data = (await client.get(f"/api/v1/events/{event_id}")).json()["data"]
	assert data["date"] == day.isoformat()


def test_datetime_date_uses_utc_day():
	day = future_date(10)
	payload = EventCreate(name="Late Start", date=f"{day.isoformat()}T23:30:00-05:00")
	assert payload.date == day + timedelta(days=1)


def test_invalid_datetime_date_is_rejected():
	with pytest.raises(ValidationError):
		EventCreate(name="Late Start", date="2030-01-01Tnoon")
