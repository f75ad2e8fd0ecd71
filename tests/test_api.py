import httpx
import pytest

from mockprep.api import deps
from mockprep.main import create_app


@pytest.fixture()
async def client(db_session):
    app = create_app()

    async def _session_override():
        yield db_session

    app.dependency_overrides[deps.get_db_session] = _session_override
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


def _as(user_id: str) -> dict:
    return {"X-User-Id": user_id, "X-User-Name": user_id.title()}


async def _schedule(client, user_id="alice", date="2025-06-01", time="09:00", **extra):
    payload = {"title": "System design", "date": date, "time": time}
    payload.update(extra)
    return await client.post("/interviews/schedule", json=payload, headers=_as(user_id))


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_request_id_is_echoed(client):
    response = await client.get("/slots/labels", headers={"X-Request-ID": "trace-42"})
    assert response.headers["X-Request-ID"] == "trace-42"
    assert response.json() == ["09:00", "11:00", "13:00", "15:00", "17:00"]


@pytest.mark.asyncio
async def test_schedule_then_slot_is_taken(client):
    response = await _schedule(client)
    assert response.status_code == 201
    interview_id = response.json()["interview_id"]

    slots = await client.get("/slots", params={"date": "2025-06-01"}, headers=_as("bob"))
    assert slots.status_code == 200
    assert {item["time"]: item["available"] for item in slots.json()}["09:00"] is False

    check = await client.get("/slots/availability", params={"date": "2025-06-01", "time": "09:00"})
    assert check.json() == {"date": "2025-06-01", "time": "09:00", "available": False}

    detail = await client.get(f"/interviews/{interview_id}", headers=_as("alice"))
    assert detail.status_code == 200
    body = detail.json()
    assert body["user_id"] == "alice"
    assert body["user_name"] == "Alice"
    assert body["date"] == "2025-06-01"
    assert body["finalized"] is True


@pytest.mark.asyncio
async def test_double_booking_returns_conflict(client):
    assert (await _schedule(client, user_id="alice")).status_code == 201

    response = await _schedule(client, user_id="bob")

    assert response.status_code == 409
    assert response.json() == {
        "detail": "This time slot is no longer available",
        "code": "slot_conflict",
        "details": {"date": "2025-06-01", "time": "09:00"},
    }


@pytest.mark.asyncio
async def test_time_outside_catalog_is_bad_request(client):
    response = await _schedule(client, time="10:00")

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_slot"


@pytest.mark.asyncio
async def test_unknown_label_on_availability_is_bad_request(client):
    response = await client.get("/slots/availability", params={"date": "2025-06-01", "time": "08:00"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_missing_interview_is_not_found(client):
    response = await client.get("/interviews/nope", headers=_as("alice"))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_drafts_are_private(client):
    created = await client.post(
        "/internal/interviews/generate",
        json={"user_id": "alice", "user_name": "Alice", "title": "Pitch", "questions": ["Why now?"]},
    )
    assert created.status_code == 201
    interview_id = created.json()["interview_id"]

    assert (await client.get(f"/interviews/{interview_id}", headers=_as("bob"))).status_code == 403
    assert (await client.get(f"/interviews/{interview_id}", headers=_as("alice"))).status_code == 200


@pytest.mark.asyncio
async def test_patch_and_finalize_flow(client):
    created = await client.post(
        "/internal/interviews/generate",
        json={"user_id": "alice", "user_name": "Alice", "title": "Pitch"},
    )
    interview_id = created.json()["interview_id"]

    patched = await client.patch(f"/interviews/{interview_id}", json={"title": "Pitch v2"}, headers=_as("alice"))
    assert patched.status_code == 204

    assert (await client.post(f"/interviews/{interview_id}/finalize", headers=_as("bob"))).status_code == 403
    finalized = await client.post(f"/interviews/{interview_id}/finalize", headers=_as("alice"))
    assert finalized.status_code == 204

    body = (await client.get(f"/interviews/{interview_id}", headers=_as("bob"))).json()
    assert body["title"] == "Pitch v2"
    assert body["finalized"] is True

    reopened = await client.patch(f"/interviews/{interview_id}", json={"finalized": False}, headers=_as("alice"))
    assert reopened.status_code == 400
    assert reopened.json()["details"] == {"field": "finalized"}


@pytest.mark.asyncio
async def test_history_and_latest(client):
    await _schedule(client, user_id="alice", time="09:00")
    await _schedule(client, user_id="bob", time="11:00")

    mine = await client.get("/interviews/me", headers=_as("alice"))
    assert [item["user_id"] for item in mine.json()] == ["alice"]

    latest = await client.get("/interviews/latest", params={"limit": 5}, headers=_as("alice"))
    assert [item["user_id"] for item in latest.json()] == ["bob"]

    too_many = await client.get("/interviews/latest", params={"limit": 101}, headers=_as("alice"))
    assert too_many.status_code == 422


@pytest.mark.asyncio
async def test_feedback_flow(client):
    interview_id = (await _schedule(client)).json()["interview_id"]

    assert (await client.get(f"/interviews/{interview_id}/feedback", headers=_as("alice"))).status_code == 404

    saved = await client.post(
        f"/internal/interviews/{interview_id}/feedback",
        json={
            "user_id": "alice",
            "total_score": 81,
            "category_scores": [{"name": "Clarity", "score": 85, "feedback": "Good pacing"}],
            "strengths": ["Structure"],
        },
    )
    assert saved.status_code == 201

    feedback = await client.get(f"/interviews/{interview_id}/feedback", headers=_as("alice"))
    assert feedback.status_code == 200
    assert feedback.json()["total_score"] == 81
    assert feedback.json()["category_scores"] == [{"name": "Clarity", "score": 85, "feedback": "Good pacing"}]


@pytest.mark.asyncio
async def test_feedback_for_missing_interview(client):
    response = await client.post(
        "/internal/interviews/missing/feedback",
        json={"user_id": "alice", "total_score": 50},
    )
    assert response.status_code == 404
    assert response.json()["code"] == "not_found"
