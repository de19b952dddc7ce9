# features/planner/app/actions.py
"""
Entry points called by the UI/API layer.

Each action takes one request (a model instance or a plain mapping), runs the
matching flow and returns its typed result. Every failure, whatever stage it
comes from, leaves here as a PlannerError carrying the original cause.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from wayfinder.shared.deps import get_generator, get_places_gateway
from wayfinder.shared.errors import PlannerError, ValidationFailure
from wayfinder.shared.llm.structured import StructuredGenerationClient
from wayfinder.shared.places.gateway import PlacesGateway
from wayfinder.features.itinerary.app.use_cases import adjust_itinerary, generate_itinerary, update_selection
from wayfinder.features.itinerary.domain.models import (
    BudgetAdjustmentRequest,
    ItineraryRequest,
    ItineraryResult,
    SelectionUpdateRequest,
    UpdatedItinerary,
)
from wayfinder.features.planner.api.schemas import QuizChainRequest
from wayfinder.features.recommendations.app.use_cases import recommend_from_quiz, suggest_destinations
from wayfinder.features.recommendations.domain.models import (
    DestinationPreferences,
    DestinationSuggestion,
    QuizAnswers,
)

log = logging.getLogger("planner")

M = TypeVar("M", bound=BaseModel)


def _coerce(model: Type[M], value: Any) -> M:
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise ValidationFailure(f"Invalid {model.__name__}: {e.error_count()} problem(s): {e}", cause=e) from e


def _wrap(stage: str, action: str, e: Exception) -> PlannerError:
    if isinstance(e, PlannerError):
        return e
    log.exception(f"Error in {stage} stage")
    return PlannerError(f"Failed to {action}. Details: {e}", stage=stage, cause=e)


def _deps(gateway: Optional[PlacesGateway], generator: Optional[StructuredGenerationClient]):
    return gateway or get_places_gateway(), generator or get_generator()


def quiz_interests(answers: QuizAnswers) -> List[str]:
    return [
        answers.activity,
        f"{answers.scenery} scenery",
        f"{answers.pace} pace",
        f"travelling with {answers.companion.lower()}" if answers.companion != "Alone" else "solo travel",
    ]


async def run_quiz(
    answers: Any,
    *,
    gateway: Optional[PlacesGateway] = None,
    generator: Optional[StructuredGenerationClient] = None,
) -> List[DestinationSuggestion]:
    try:
        req = _coerce(QuizAnswers, answers)
        gw, gen = _deps(gateway, generator)
        return await recommend_from_quiz(req, gateway=gw, generator=gen)
    except Exception as e:
        raise _wrap("quiz", "get quiz results from AI", e) from e


async def get_destinations(
    prefs: Any,
    *,
    gateway: Optional[PlacesGateway] = None,
    generator: Optional[StructuredGenerationClient] = None,
) -> List[DestinationSuggestion]:
    try:
        req = _coerce(DestinationPreferences, prefs)
        gw, gen = _deps(gateway, generator)
        return await suggest_destinations(req, gateway=gw, generator=gen)
    except Exception as e:
        raise _wrap("destinations", "get destination suggestions from AI", e) from e


async def get_itinerary(
    request: Any,
    *,
    gateway: Optional[PlacesGateway] = None,
    generator: Optional[StructuredGenerationClient] = None,
) -> ItineraryResult:
    try:
        req = _coerce(ItineraryRequest, request)
        gw, gen = _deps(gateway, generator)
        return await generate_itinerary(req, gateway=gw, generator=gen)
    except Exception as e:
        raise _wrap("itinerary", "generate itinerary from AI", e) from e


async def get_adjusted_itinerary(
    request: Any,
    *,
    gateway: Optional[PlacesGateway] = None,
    generator: Optional[StructuredGenerationClient] = None,
) -> ItineraryResult:
    try:
        req = _coerce(BudgetAdjustmentRequest, request)
        gw, gen = _deps(gateway, generator)
        return await adjust_itinerary(req, gateway=gw, generator=gen)
    except Exception as e:
        raise _wrap("adjustment", "adjust itinerary from AI", e) from e


async def update_itinerary(
    request: Any,
    *,
    generator: Optional[StructuredGenerationClient] = None,
) -> UpdatedItinerary:
    try:
        req = _coerce(SelectionUpdateRequest, request)
        return await update_selection(req, generator=generator or get_generator())
    except Exception as e:
        raise _wrap("update", "update itinerary from AI", e) from e


async def run_quiz_chain(
    request: Any,
    *,
    gateway: Optional[PlacesGateway] = None,
    generator: Optional[StructuredGenerationClient] = None,
) -> List[DestinationSuggestion]:
    """
    Quiz first, then destination suggestions around the quiz's top pick.
    The error names the stage that failed; nothing from the quiz stage is
    returned on its own.
    """
    try:
        req = _coerce(QuizChainRequest, request)
    except Exception as e:
        raise _wrap("input", "read the quiz request", e) from e

    quiz = await run_quiz(req.answers, gateway=gateway, generator=generator)
    top = quiz[0]
    log.info(f"quiz chain: top pick {top.destination!r}")

    prefs = {
        "destinations": top.destination,
        "budget_min": req.budget_min,
        "budget_max": req.budget_max,
        "duration": req.duration,
        "interests": quiz_interests(req.answers),
        "currency": req.currency,
        "location": req.answers.location,
        "scope": req.answers.scope,
    }
    return await get_destinations(prefs, gateway=gateway, generator=generator)
