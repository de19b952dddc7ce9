from __future__ import annotations
import logging
from typing import List

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from wayfinder.shared.errors import PlannerError
from wayfinder.features.planner.app import actions
from wayfinder.features.planner.api.schemas import QuizChainRequest
from wayfinder.features.itinerary.domain.models import (
    BudgetAdjustmentRequest,
    ItineraryRequest,
    ItineraryResult,
    SelectionUpdateRequest,
    UpdatedItinerary,
)
from wayfinder.features.recommendations.domain.models import (
    DestinationPreferences,
    DestinationSuggestion,
    QuizAnswers,
)

log = logging.getLogger("api")

router = APIRouter(tags=["planner"])

_STATUS_BY_KIND = {"validation": 422, "empty": 404, "generation": 502}


async def planner_error_handler(request: Request, exc: PlannerError) -> JSONResponse:
    log.warning(f"{request.url.path} failed at {exc.stage}: {exc.message}")
    return JSONResponse(status_code=_STATUS_BY_KIND.get(exc.kind, 502), content=exc.to_dict())


@router.post("/quiz", response_model=List[DestinationSuggestion])
async def run_quiz(payload: QuizAnswers):
    return await actions.run_quiz(payload)

@router.post("/quiz/destinations", response_model=List[DestinationSuggestion])
async def run_quiz_chain(payload: QuizChainRequest):
    return await actions.run_quiz_chain(payload)

@router.post("/destinations", response_model=List[DestinationSuggestion])
async def get_destinations(payload: DestinationPreferences):
    return await actions.get_destinations(payload)

@router.post("/itineraries", response_model=ItineraryResult)
async def get_itinerary(payload: ItineraryRequest):
    return await actions.get_itinerary(payload)

@router.post("/itineraries/adjust", response_model=ItineraryResult)
async def get_adjusted_itinerary(payload: BudgetAdjustmentRequest):
    return await actions.get_adjusted_itinerary(payload)

@router.post("/itineraries/update", response_model=UpdatedItinerary)
async def update_itinerary(payload: SelectionUpdateRequest):
    return await actions.update_itinerary(payload)
