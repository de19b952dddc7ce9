"""
HTTP surface tests: routes delegate to the actions module, which is swapped out here.
"""
import pytest
from fastapi.testclient import TestClient

from wayfinder.app import create_app
from wayfinder.shared.errors import EmptyResultFailure, GenerationFailure, PlannerError, ValidationFailure
from wayfinder.features.itinerary.domain.models import ItineraryResult, UpdatedItinerary
from wayfinder.features.planner.app import actions
from wayfinder.features.recommendations.domain.models import DestinationSuggestion


@pytest.fixture
def client():
    return TestClient(create_app())


def _raising(err: PlannerError):
    async def _fail(*args, **kwargs):
        raise err
    return _fail


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_quiz_returns_camel_case(client, monkeypatch):
    seen = {}

    async def fake_run_quiz(answers):
        seen["answers"] = answers
        return [DestinationSuggestion(destination="Kyoto", description="Temples.", image_hint="temple", image_url="https://img/k.jpg")]

    monkeypatch.setattr(actions, "run_quiz", fake_run_quiz)
    r = client.post("/v1/quiz", json={
        "scenery": "Mountains", "pace": "Relaxed", "activity": "Culture",
        "companion": "Alone", "scope": "International",
    })
    assert r.status_code == 200
    body = r.json()
    assert body[0]["imageUrl"] == "https://img/k.jpg"
    assert body[0]["imageHint"] == "temple"
    assert body[0]["rating"] == "N/A"
    assert seen["answers"].location is None


def test_itinerary_route(client, monkeypatch, itinerary_payload):
    async def fake_get_itinerary(request):
        assert request.currency == "EUR"
        return ItineraryResult.model_validate(itinerary_payload)

    monkeypatch.setattr(actions, "get_itinerary", fake_get_itinerary)
    r = client.post("/v1/itineraries", json={"destination": "Bengaluru", "budget": 1500, "currency": "eur", "interests": "food"})
    assert r.status_code == 200
    body = r.json()
    assert body["totalPrice"] == 1200
    assert [p["name"] for p in body["places"]][0] == "Lalbagh Botanical Garden"


def test_update_route(client, monkeypatch):
    async def fake_update(request):
        return UpdatedItinerary(updated_itinerary="Day 1", total_price=20, total_time="1 day")

    monkeypatch.setattr(actions, "update_itinerary", fake_update)
    r = client.post("/v1/itineraries/update", json={"selectedPlaces": ["MTR"], "budget": 30, "availableTime": "1"})
    assert r.status_code == 200
    assert r.json() == {"updatedItinerary": "Day 1", "totalPrice": 20, "totalTime": "1 day"}


@pytest.mark.parametrize(
    "cause, status, kind",
    [
        (ValidationFailure("bad"), 422, "validation"),
        (EmptyResultFailure("none"), 404, "empty"),
        (GenerationFailure("down"), 502, "generation"),
    ],
)
def test_planner_errors_map_to_status(client, monkeypatch, cause, status, kind):
    err = PlannerError(f"Failed to get destination suggestions from AI. Details: {cause}", stage="destinations", cause=cause)
    monkeypatch.setattr(actions, "get_destinations", _raising(err))
    r = client.post("/v1/destinations", json={
        "destinations": "Japan", "budgetMin": 100, "budgetMax": 900, "duration": 5, "interests": ["food"],
    })
    assert r.status_code == status
    assert r.json() == {"detail": err.message, "stage": "destinations", "kind": kind}


def test_chain_failure_names_stage(client, monkeypatch):
    err = PlannerError("Failed to get quiz results from AI. Details: down", stage="quiz", cause=GenerationFailure("down"))
    monkeypatch.setattr(actions, "run_quiz_chain", _raising(err))
    r = client.post("/v1/quiz/destinations", json={
        "answers": {"scenery": "Beach", "pace": "Relaxed", "activity": "Swimming", "companion": "Family", "scope": "Domestic"},
        "budgetMin": 100, "budgetMax": 500, "duration": 3,
    })
    assert r.status_code == 502
    assert r.json()["stage"] == "quiz"


def test_invalid_body_rejected_by_framework(client, monkeypatch):
    async def never(*args, **kwargs):
        raise AssertionError("should not be called")

    monkeypatch.setattr(actions, "get_adjusted_itinerary", never)
    r = client.post("/v1/itineraries/adjust", json={"destination": "Paris", "budget": -1, "interests": "art"})
    assert r.status_code == 422
