"""
End-to-end smoke script for a running Wayfinder API:
- Health
- Quiz (single step) and quiz -> destinations chain
- Destination suggestions from preferences
- Itinerary generation, budget adjustment and selection update

Requires:
  pip install requests

Default base_url: http://127.0.0.1:8077
Not collected by pytest (see testpaths in pyproject.toml).
"""
import argparse
import json
import time
from typing import Any, Dict

import requests


def _pp(title: str, obj: Any):
    print(f"\n===== {title} =====")
    print(json.dumps(obj, indent=2, ensure_ascii=False))


def _post(base_url: str, path: str, payload: Dict[str, Any], timeout: int = 240) -> requests.Response:
    url = f"{base_url.rstrip('/')}{path}"
    return requests.post(url, json=payload, timeout=timeout)


def _get(base_url: str, path: str, timeout: int = 30) -> requests.Response:
    url = f"{base_url.rstrip('/')}{path}"
    return requests.get(url, timeout=timeout)


def _call(base_url: str, title: str, path: str, payload: Dict[str, Any]) -> Any:
    start = time.time()
    r = _post(base_url, path, payload)
    body = r.json()
    _pp(f"{title} ({r.status_code}, {time.time() - start:.1f}s)", body)
    return body if r.ok else None


def test_health(base_url: str):
    r = _get(base_url, "/health")
    _pp("Health", {"status_code": r.status_code, "response": r.json()})


def test_quiz(base_url: str, location: str):
    print("\n############################")
    print("# TEST 1: QUIZ + QUIZ CHAIN")
    print("######################")

    answers = {
        "scenery": "City",
        "pace": "Moderate",
        "activity": "Food",
        "companion": "Friends",
        "scope": "Local",
        "location": location,
    }
    _call(base_url, "Quiz", "/v1/quiz", answers)
    _call(base_url, "Quiz (no location)", "/v1/quiz", {**answers, "location": None})
    _call(base_url, "Quiz chain", "/v1/quiz/destinations", {
        "answers": answers,
        "budgetMin": 200,
        "budgetMax": 800,
        "duration": 3,
        "currency": "USD",
    })


def test_destinations(base_url: str):
    print("\n############################")
    print("# TEST 2: DESTINATIONS")
    print("######################")

    _call(base_url, "Destinations", "/v1/destinations", {
        "destinations": "Portugal",
        "budgetMin": 500,
        "budgetMax": 2000,
        "duration": 7,
        "interests": ["museums", "beaches", "food"],
        "currency": "EUR",
    })


def test_itinerary(base_url: str, destination: str, budget: float):
    print("\n############################")
    print("# TEST 3: ITINERARY + ADJUST + UPDATE")
    print("######################")

    plan = _call(base_url, "Itinerary", "/v1/itineraries", {
        "destination": destination,
        "budget": budget,
        "currency": "USD",
        "timeline": "3 days",
        "interests": "museums, parks, food",
    })
    if not plan:
        return

    _call(base_url, "Adjusted itinerary", "/v1/itineraries/adjust", {
        "destination": destination,
        "budget": max(1.0, plan["totalPrice"] / 2),
        "currency": "USD",
        "timeline": "3 days",
        "interests": "museums, parks, food",
        "currentItinerary": plan["itinerary"],
        "currentCost": plan["totalPrice"],
    })

    _call(base_url, "Updated itinerary", "/v1/itineraries/update", {
        "selectedPlaces": [p["name"] for p in plan["places"][:4]],
        "budget": budget,
        "availableTime": "2",
    })


# ==============================
# main
# ==============================

def main():
    parser = argparse.ArgumentParser(description="Wayfinder end-to-end smoke test")
    parser.add_argument("--base-url", default="http://127.0.0.1:8077", help="API base URL")
    parser.add_argument("--location", default="Bengaluru")
    parser.add_argument("--destination", default="Lisbon")
    parser.add_argument("--budget", type=float, default=1500)
    args = parser.parse_args()

    test_health(args.base_url)
    test_quiz(args.base_url, args.location)
    test_destinations(args.base_url)
    test_itinerary(args.base_url, args.destination, args.budget)


if __name__ == "__main__":
    main()
