from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from wayfinder.shared.config.settings import settings
from wayfinder.features.recommendations.domain.models import QuizAnswers


class QuizChainRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    answers: QuizAnswers
    budget_min: float = Field(..., ge=0)
    budget_max: float = Field(..., ge=0)
    duration: int = Field(..., ge=1)
    currency: str = Field(default_factory=lambda: settings.DEFAULT_CURRENCY, min_length=3, max_length=3)

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()

    @model_validator(mode="after")
    def check_budget_range(self):
        if self.budget_min > self.budget_max:
            raise ValueError("budget_min must not exceed budget_max")
        return self
