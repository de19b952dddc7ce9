from __future__ import annotations

import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from wayfinder.shared.config.settings import settings

PLACE_DELIMITER = "**"

_RE_MENTION = re.compile(r"\*\*(.+?)\*\*", re.DOTALL)
_RE_WS = re.compile(r"\s+")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _default_currency() -> str:
    return settings.DEFAULT_CURRENCY


class ItineraryRequest(_CamelModel):
    destination: str = Field(..., min_length=1)
    budget: float = Field(..., gt=0)
    currency: str = Field(default_factory=_default_currency, min_length=3, max_length=3)
    timeline: Optional[str] = Field(None, description="Preferred trip duration, e.g. 3 days, 1 week")
    interests: str = Field(..., min_length=1, description="e.g. hiking, museums, food")
    selections: Optional[str] = Field(None, description="Places the user already picked")

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()

    @field_validator("destination", "interests")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


class BudgetAdjustmentRequest(ItineraryRequest):
    current_itinerary: str = Field(..., min_length=1)
    current_cost: float = Field(..., ge=0)


class ItineraryPlace(_CamelModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    image_url: str = Field("", description="Leave empty; filled in afterwards")


class ItineraryResult(_CamelModel):
    itinerary: str = Field(..., description="Day-by-day plan; every place name wrapped as **Name**")
    total_price: float = Field(..., ge=0)
    total_time: str
    places: List[ItineraryPlace] = Field(default_factory=list)


class SelectionUpdateRequest(_CamelModel):
    selected_places: List[str] = Field(..., min_length=1)
    budget: float = Field(..., ge=0)
    available_time: str = Field(..., min_length=1, description="Available time in days")
    currency: str = Field(default_factory=_default_currency, min_length=3, max_length=3)

    @field_validator("selected_places")
    @classmethod
    def no_blank_places(cls, v: List[str]) -> List[str]:
        out = [p.strip() for p in v]
        if any(not p for p in out):
            raise ValueError("selected place names must not be blank")
        return out

    @field_validator("available_time", mode="before")
    @classmethod
    def time_as_text(cls, v):
        return str(v) if isinstance(v, (int, float)) else v


class UpdatedItinerary(_CamelModel):
    updated_itinerary: str
    total_price: float = Field(..., ge=0)
    total_time: str


def normalize_place_name(name: str) -> str:
    return _RE_WS.sub(" ", name or "").strip().casefold()


def extract_place_mentions(text: str) -> List[str]:
    """Delimited place names in the narrative, in order of appearance."""
    return [_RE_WS.sub(" ", m).strip() for m in _RE_MENTION.findall(text or "") if m.strip()]


def missing_mentions(result: ItineraryResult) -> List[str]:
    """Structured places that never appear delimiter-wrapped in the narrative."""
    mentioned = {normalize_place_name(m) for m in extract_place_mentions(result.itinerary)}
    return [p.name for p in result.places if normalize_place_name(p.name) not in mentioned]
