from __future__ import annotations

import logging

from wayfinder.shared.errors import EmptyResultFailure, GenerationFailure
from wayfinder.shared.llm.structured import StructuredGenerationClient
from wayfinder.shared.places.gateway import PlacesGateway, fallback_image_url
from wayfinder.shared.places.tools import make_find_places_tool
from wayfinder.shared.utils.amounts import format_amount
from wayfinder.features.itinerary.domain.models import (
    BudgetAdjustmentRequest,
    ItineraryRequest,
    ItineraryResult,
    SelectionUpdateRequest,
    UpdatedItinerary,
    missing_mentions,
)
from wayfinder.features.itinerary.domain.prompts import (
    ITINERARY_SYSTEM_PROMPT,
    adjustment_prompt,
    itinerary_prompt,
    selection_update_prompt,
)

log = logging.getLogger("itinerary")


def _check_result(result: ItineraryResult) -> None:
    if not result.itinerary.strip() or not result.places:
        raise EmptyResultFailure("AI returned an empty or invalid itinerary.")
    missing = missing_mentions(result)
    if missing:
        raise GenerationFailure(
            f"AI returned an itinerary whose narrative does not mark these places with ** delimiters: {', '.join(missing)}"
        )


async def enrich_places(result: ItineraryResult, gateway: PlacesGateway) -> ItineraryResult:
    """Attach an image URL to each place, position by position."""
    names = [p.name for p in result.places]
    urls = await gateway.get_place_image_urls(names)
    places = []
    for i, place in enumerate(result.places):
        url = urls[i] if i < len(urls) else ""
        places.append(place.model_copy(update={"image_url": url or fallback_image_url(place.name)}))
    return result.model_copy(update={"places": places})


async def _run_itinerary(
    name: str,
    prompt: str,
    request: ItineraryRequest,
    *,
    gateway: PlacesGateway,
    generator: StructuredGenerationClient,
    budget_bias: bool,
) -> ItineraryResult:
    tool = make_find_places_tool(gateway, style="json", budget_bias=budget_bias)
    result: ItineraryResult = await generator.generate(
        name,
        prompt,
        ItineraryResult,
        tools=[tool],
        system=ITINERARY_SYSTEM_PROMPT,
    )
    _check_result(result)
    if result.total_price > request.budget:
        # Trusted to the model; surfaced only in logs.
        log.warning(
            f"[{name}] total price {format_amount(result.total_price)} {request.currency} exceeds budget {format_amount(request.budget)}"
        )
    log.info(f"[{name}] {len(result.places)} place(s), total {format_amount(result.total_price)} {request.currency}")
    return await enrich_places(result, gateway)


async def generate_itinerary(
    request: ItineraryRequest,
    *,
    gateway: PlacesGateway,
    generator: StructuredGenerationClient,
) -> ItineraryResult:
    prompt = itinerary_prompt(
        request.destination,
        request.budget,
        request.currency,
        request.timeline,
        request.interests,
        request.selections,
    )
    return await _run_itinerary("generateItinerary", prompt, request, gateway=gateway, generator=generator, budget_bias=False)


async def adjust_itinerary(
    request: BudgetAdjustmentRequest,
    *,
    gateway: PlacesGateway,
    generator: StructuredGenerationClient,
) -> ItineraryResult:
    prompt = adjustment_prompt(
        request.destination,
        request.budget,
        request.currency,
        request.timeline,
        request.interests,
        request.selections,
        request.current_itinerary,
        request.current_cost,
    )
    return await _run_itinerary("adjustItineraryForBudget", prompt, request, gateway=gateway, generator=generator, budget_bias=True)


async def update_selection(
    request: SelectionUpdateRequest,
    *,
    generator: StructuredGenerationClient,
) -> UpdatedItinerary:
    """Text-only re-plan around the user's picks; no tools, no images."""
    prompt = selection_update_prompt(request.selected_places, request.budget, request.currency, request.available_time)
    result: UpdatedItinerary = await generator.generate("updateItinerary", prompt, UpdatedItinerary)
    if not result.updated_itinerary.strip():
        raise EmptyResultFailure("AI returned an empty updated itinerary.")
    return result
