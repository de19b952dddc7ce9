import asyncio
import copy
import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from wayfinder.shared.places.gateway import PlaceRecord, PlacesConfig, PlacesGateway


# ---------------------------------------------------------------------------
# Model stubs
# ---------------------------------------------------------------------------

def json_reply(obj: Any) -> Dict[str, Any]:
    return {"role": "assistant", "content": json.dumps(obj)}


def tool_reply(name: str, arguments: Any, call_id: str = "call_1") -> Dict[str, Any]:
    args = arguments if isinstance(arguments, str) else json.dumps(arguments)
    return {
        "role": "assistant",
        "content": None,
        "tool_calls": [{"id": call_id, "type": "function", "function": {"name": name, "arguments": args}}],
    }


class ScriptedComplete:
    """Stands in for chat_completion: returns (or raises) the scripted replies in order."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls: List[Dict[str, Any]] = []

    async def __call__(self, messages, **kwargs):
        self.calls.append({"messages": copy.deepcopy(messages), **kwargs})
        if not self.replies:
            raise AssertionError("unexpected model call")
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply


class FakeGenerator:
    """Stands in for StructuredGenerationClient at the flow level."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls: List[Dict[str, Any]] = []

    async def generate(self, name, prompt, output_type, *, tools=(), system=None):
        self.calls.append({"name": name, "prompt": prompt, "output_type": output_type, "tools": list(tools), "system": system})
        if not self.results:
            raise AssertionError("unexpected generation")
        result = self.results.pop(0)
        if isinstance(result, BaseException):
            raise result
        if isinstance(result, dict):
            return output_type.model_validate(result)
        return result


class FakeGateway:
    """In-memory gateway: photos by query, search results by query."""

    def __init__(self, photos: Optional[Dict[str, str]] = None, places: Optional[Dict[str, List[str]]] = None):
        self.photos = photos or {}
        self.places = places or {}
        self.searches: List[str] = []
        self.lookups: List[str] = []
        self.batch_calls: List[List[str]] = []
        self.batch_result: Optional[List[str]] = None

    async def search_places(self, query: str) -> List[PlaceRecord]:
        self.searches.append(query)
        return [PlaceRecord(name=n, place_id=f"id-{i}") for i, n in enumerate(self.places.get(query, []))]

    async def lookup_photo_url(self, query: str) -> Optional[str]:
        self.lookups.append(query)
        return self.photos.get(query)

    async def get_place_image_urls(self, names: List[str]) -> List[str]:
        self.batch_calls.append(list(names))
        if self.batch_result is not None:
            return list(self.batch_result)
        return [self.photos.get(n, "") for n in names]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def run() -> Callable:
    return asyncio.run


@pytest.fixture
def make_gateway() -> Callable[..., PlacesGateway]:
    def _make(handler=None, api_key: str = "test-key", **config) -> PlacesGateway:
        transport = httpx.MockTransport(handler) if handler is not None else None
        return PlacesGateway(PlacesConfig(api_key=api_key, **config), transport=transport)
    return _make


@pytest.fixture
def suggestion_payload() -> Callable[..., Dict[str, Any]]:
    def _make(*names: str, **extra) -> Dict[str, Any]:
        return {
            "suggestions": [
                {
                    "destination": n,
                    "description": f"{n} is a great fit.",
                    "imageHint": f"{n} view",
                    "rating": 4.5,
                    **extra,
                }
                for n in names
            ]
        }
    return _make


@pytest.fixture
def itinerary_payload() -> Dict[str, Any]:
    return {
        "itinerary": (
            "## Day 1\n"
            "Morning at **Lalbagh Botanical Garden** (approx. 5 USD), "
            "breakfast at **Vidyarthi Bhavan** (approx. 3 USD).\n"
            "## Day 2\n"
            "Visit **Bangalore Palace** (approx. 10 USD)."
        ),
        "totalPrice": 1200,
        "totalTime": "2 days",
        "places": [
            {"name": "Lalbagh Botanical Garden", "description": "Historic garden."},
            {"name": "Vidyarthi Bhavan", "description": "Famous dosa spot."},
            {"name": "Bangalore Palace", "description": "Tudor-style palace."},
        ],
    }
