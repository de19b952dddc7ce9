# shared/places/gateway.py
"""
Google Places access for the planner.

Every method here degrades instead of raising: missing credentials, transport
errors and non-OK provider statuses turn into an empty list or a seeded
placeholder image, and are only logged.
"""
from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Dict, List, Literal, Optional, Union
from urllib.parse import quote, urlencode

import httpx
from pydantic import BaseModel

log = logging.getLogger("places")

PLACEHOLDER_KEYS = ("", "YOUR_API_KEY")
FALLBACK_IMAGE_TEMPLATE = "https://picsum.photos/seed/{seed}/600/400"

_RE_WS = re.compile(r"\s+")


def fallback_image_url(key: str) -> str:
    """Deterministic placeholder image for `key` (same key, same URL)."""
    seed = _RE_WS.sub("", key or "") or "travel"
    return FALLBACK_IMAGE_TEMPLATE.format(seed=quote(seed, safe=""))


class PlacesConfig(BaseModel):
    api_key: str = ""
    text_search_url: str = "https://maps.googleapis.com/maps/api/place/textsearch/json"
    find_place_url: str = "https://maps.googleapis.com/maps/api/place/findplacefromtext/json"
    photo_url: str = "https://maps.googleapis.com/maps/api/place/photo"
    max_results: int = 5
    photo_max_width: int = 600
    timeout: float = 20.0

    @property
    def configured(self) -> bool:
        return (self.api_key or "").strip() not in PLACEHOLDER_KEYS

    @classmethod
    def from_settings(cls, s: Any) -> "PlacesConfig":
        return cls(
            api_key=s.GOOGLE_PLACES_API_KEY,
            text_search_url=s.PLACES_TEXT_SEARCH_URL,
            find_place_url=s.PLACES_FIND_PLACE_URL,
            photo_url=s.PLACES_PHOTO_URL,
            max_results=s.PLACES_MAX_RESULTS,
            photo_max_width=s.PLACES_PHOTO_MAX_WIDTH,
            timeout=s.PLACES_REQUEST_TIMEOUT,
        )


class PlaceRecord(BaseModel):
    name: str
    place_id: str = ""
    rating: Union[float, Literal["N/A"]] = "N/A"


def _to_record(raw: Dict[str, Any]) -> Optional[PlaceRecord]:
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        return None
    name = name.strip()
    rating = raw.get("rating")
    return PlaceRecord(
        name=name,
        place_id=str(raw.get("place_id") or ""),
        rating=float(rating) if isinstance(rating, (int, float)) and not isinstance(rating, bool) else "N/A",
    )


class PlacesGateway:
    def __init__(self, config: PlacesConfig, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.config = config
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=httpx.Timeout(self.config.timeout), transport=self._transport)

    def _check_configured(self, what: str) -> bool:
        if self.config.configured:
            return True
        log.warning(f"Google Places API key is not configured; {what}")
        return False

    async def _get_json(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        async with self._client() as client:
            r = await client.get(url, params=params)
            r.raise_for_status()
            data = r.json()
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return data

    async def search_places(self, query: str) -> List[PlaceRecord]:
        """
        Text search for `query`. Returns at most `max_results` records in the
        provider's relevance order, or an empty list on any failure.
        """
        if not self._check_configured("returning no places."):
            return []
        try:
            data = await self._get_json(
                self.config.text_search_url,
                {"query": query, "key": self.config.api_key},
            )
        except (httpx.HTTPError, ValueError) as e:
            log.error(f"Failed to search places for query {query!r}: {e}")
            return []

        status = data.get("status")
        if status != "OK":
            log.warning(f"Text search for query {query!r} failed with status: {status}")
            return []

        out: List[PlaceRecord] = []
        results = data.get("results")
        for raw in results if isinstance(results, list) else []:
            rec = _to_record(raw) if isinstance(raw, dict) else None
            if rec is not None:
                out.append(rec)
            if len(out) >= self.config.max_results:
                break
        return out

    def photo_url(self, photo_reference: str) -> str:
        params = urlencode({
            "maxwidth": str(self.config.photo_max_width),
            "photoreference": photo_reference,
            "key": self.config.api_key,
        })
        return f"{self.config.photo_url}?{params}"

    async def lookup_photo_url(self, place_query: str) -> Optional[str]:
        """
        Find the place and return a photo URL for its first photo, or None
        when there is no key, no candidate, no photo, or the call failed.
        """
        if not self._check_configured("using fallback image."):
            return None
        try:
            data = await self._get_json(
                self.config.find_place_url,
                {
                    "input": place_query,
                    "inputtype": "textquery",
                    "fields": "photos",
                    "key": self.config.api_key,
                },
            )
        except (httpx.HTTPError, ValueError) as e:
            log.error(f"Failed to fetch image from Google Places API for query {place_query!r}: {e}")
            return None

        candidates = data.get("candidates")
        if not isinstance(candidates, list):
            candidates = []
        photos = candidates[0].get("photos") if candidates and isinstance(candidates[0], dict) else None
        if not isinstance(photos, list):
            photos = []
        ref = photos[0].get("photo_reference") if photos and isinstance(photos[0], dict) else None
        if not isinstance(ref, str):
            ref = None
        if data.get("status") != "OK" or not ref:
            log.warning(f"No photo reference found for query: {place_query!r}. Using fallback image.")
            return None
        return self.photo_url(ref)

    async def get_place_image_url(self, place_query: str) -> str:
        return (await self.lookup_photo_url(place_query)) or fallback_image_url(place_query)

    async def get_place_image_urls(self, names: List[str]) -> List[str]:
        """One URL per name, in input order; each entry falls back on its own."""
        if not names:
            return []
        return list(await asyncio.gather(*(self.get_place_image_url(n) for n in names)))
