from __future__ import annotations

import json
import logging
from typing import Literal

from pydantic import BaseModel, Field

from wayfinder.shared.llm.structured import Tool
from wayfinder.shared.places.gateway import PlacesGateway

log = logging.getLogger("places")

NO_PLACES_FOUND = "No places found for that query."
EMPTY_JSON_LIST = "[]"
BUDGET_KEYWORDS = ("affordable", "budget", "cheap")

FIND_PLACES_TOOL_NAME = "find_places"


class FindPlacesInput(BaseModel):
    query: str = Field(..., min_length=1, description='A search query for places, e.g. "best pizza in Rome" or "parks in Bengaluru".')


def budget_query(query: str) -> str:
    q = (query or "").strip()
    if any(k in q.lower() for k in BUDGET_KEYWORDS):
        return q
    return f"affordable {q}"


def make_find_places_tool(
    gateway: PlacesGateway,
    *,
    style: Literal["names", "json"],
    budget_bias: bool = False,
) -> Tool:
    """
    Wrap `gateway.search_places` as a model tool.

    "names" answers with comma-separated place names (or NO_PLACES_FOUND),
    "json" with a JSON array of {"name", "rating"} objects (or "[]").
    """

    async def _find_places(args: FindPlacesInput) -> str:
        query = budget_query(args.query) if budget_bias else args.query.strip()
        places = await gateway.search_places(query)
        log.debug(f"find_places({query!r}) -> {len(places)} result(s)")
        if style == "names":
            return ", ".join(p.name for p in places) if places else NO_PLACES_FOUND
        if not places:
            return EMPTY_JSON_LIST
        return json.dumps([{"name": p.name, "rating": p.rating} for p in places], ensure_ascii=False)

    if style == "names":
        description = (
            "Search a real places directory. Returns a comma-separated list of up to 5 matching place names, "
            f'or "{NO_PLACES_FOUND}" when nothing matches.'
        )
    else:
        description = (
            "Search a real places directory. Returns a JSON array of up to 5 objects "
            '{"name": string, "rating": number or "N/A"}; an empty array "[]" means nothing matched.'
        )
        if budget_bias:
            description += " Queries are biased towards affordable, budget-friendly options."

    return Tool(
        name=FIND_PLACES_TOOL_NAME,
        description=description,
        input_model=FindPlacesInput,
        func=_find_places,
    )
