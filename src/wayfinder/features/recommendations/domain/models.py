from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from wayfinder.shared.config.settings import settings

Scope = Literal["Local", "Domestic", "International"]
Rating = Union[Annotated[float, Field(ge=1, le=5)], Literal["N/A"]]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v.strip() if isinstance(v, str) else v


class QuizAnswers(_CamelModel):
    scenery: str = Field(..., min_length=1, description="Mountains, Beach, City, Countryside")
    pace: str = Field(..., min_length=1, description="Relaxed, Moderate, Fast-paced")
    activity: str = Field(..., min_length=1, description="Adventure, Culture, Relaxation, Food")
    companion: str = Field(..., min_length=1, description="Alone, Partner, Family, Friends")
    scope: Scope
    location: Optional[str] = None

    clean_location = field_validator("location", mode="before")(_blank_to_none)

    @field_validator("scenery", "pace", "activity", "companion")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("answer must not be blank")
        return v.strip()


class DestinationPreferences(_CamelModel):
    destinations: str = Field(..., min_length=1, description="Destination focus, e.g. a city, region or country")
    budget_min: float = Field(..., ge=0)
    budget_max: float = Field(..., ge=0)
    duration: int = Field(..., ge=1, description="Trip duration in days")
    interests: List[str] = Field(..., min_length=1)
    currency: str = Field(default_factory=lambda: settings.DEFAULT_CURRENCY, min_length=3, max_length=3)
    location: Optional[str] = None
    scope: Optional[Scope] = None

    clean_location = field_validator("location", mode="before")(_blank_to_none)

    @field_validator("interests")
    @classmethod
    def clean_interests(cls, v: List[str]) -> List[str]:
        out = [i.strip() for i in v if i and i.strip()]
        if not out:
            raise ValueError("at least one interest is required")
        return out

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()

    @model_validator(mode="after")
    def check_budget_range(self):
        if self.budget_min > self.budget_max:
            raise ValueError("budget_min must not exceed budget_max")
        return self


class DestinationSuggestion(_CamelModel):
    destination: str = Field(..., min_length=1, description="Name of the suggested destination or point of interest")
    description: str = Field(..., description="Short description and the reasoning behind the suggestion")
    image_hint: str = Field("", description="One or two keywords describing a representative photo")
    image_url: str = Field("", description="Leave empty; filled in afterwards")
    estimated_price: Optional[float] = Field(None, ge=0, description="Estimated total trip price")
    currency: Optional[str] = Field(None, description="ISO currency code of estimatedPrice")
    estimated_duration: Optional[float] = Field(None, gt=0, description="Estimated stay in days")
    rating: Rating = Field("N/A", description='Rating from 1 to 5, or "N/A"')

    @model_validator(mode="after")
    def check_price_and_currency(self):
        if (self.estimated_price is None) != (self.currency is None):
            raise ValueError("estimatedPrice and currency must be given together")
        return self


class SuggestionList(_CamelModel):
    suggestions: List[DestinationSuggestion]
