"""
Destination recommendation flows: one driven by the five-question quiz, one by
explicit trip preferences. Both ground suggestions with the find_places tool
and replace model-guessed images with real place photos.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List

from wayfinder.shared.errors import EmptyResultFailure
from wayfinder.shared.llm.structured import StructuredGenerationClient
from wayfinder.shared.places.gateway import PlacesGateway, fallback_image_url
from wayfinder.shared.places.tools import make_find_places_tool
from wayfinder.features.recommendations.domain.models import (
    DestinationPreferences,
    DestinationSuggestion,
    QuizAnswers,
    SuggestionList,
)
from wayfinder.features.recommendations.domain.prompts import (
    RECOMMENDER_SYSTEM_PROMPT,
    preferences_prompt,
    quiz_prompt,
)

log = logging.getLogger("recommendations")

MAX_SUGGESTIONS = 3


def _is_http_url(url: str) -> bool:
    return (url or "").strip().lower().startswith(("http://", "https://"))


async def _enrich_one(s: DestinationSuggestion, gateway: PlacesGateway) -> DestinationSuggestion:
    key = s.image_hint.strip() or s.destination
    real = await gateway.lookup_photo_url(key)
    if real:
        url = real
    elif _is_http_url(s.image_url):
        url = s.image_url.strip()
    else:
        url = fallback_image_url(key)
    return s.model_copy(update={"image_url": url})


async def enrich_suggestions(suggestions: List[DestinationSuggestion], gateway: PlacesGateway) -> List[DestinationSuggestion]:
    """Fill image_url for every suggestion concurrently, keeping order."""
    return list(await asyncio.gather(*(_enrich_one(s, gateway) for s in suggestions)))


async def _generate_suggestions(
    name: str,
    prompt: str,
    *,
    gateway: PlacesGateway,
    generator: StructuredGenerationClient,
) -> List[DestinationSuggestion]:
    tool = make_find_places_tool(gateway, style="names")
    result: SuggestionList = await generator.generate(
        name,
        prompt,
        SuggestionList,
        tools=[tool],
        system=RECOMMENDER_SYSTEM_PROMPT,
    )
    if not result.suggestions:
        raise EmptyResultFailure("No suggestions found. Please try different criteria.")

    suggestions = result.suggestions[:MAX_SUGGESTIONS]
    log.info(f"[{name}] {len(suggestions)} suggestion(s): {[s.destination for s in suggestions]}")
    return await enrich_suggestions(suggestions, gateway)


async def recommend_from_quiz(
    answers: QuizAnswers,
    *,
    gateway: PlacesGateway,
    generator: StructuredGenerationClient,
) -> List[DestinationSuggestion]:
    prompt = quiz_prompt(
        answers.scenery,
        answers.pace,
        answers.activity,
        answers.companion,
        answers.scope,
        answers.location,
    )
    return await _generate_suggestions("personalizedDestinationQuiz", prompt, gateway=gateway, generator=generator)


async def suggest_destinations(
    prefs: DestinationPreferences,
    *,
    gateway: PlacesGateway,
    generator: StructuredGenerationClient,
) -> List[DestinationSuggestion]:
    prompt = preferences_prompt(
        prefs.destinations,
        prefs.budget_min,
        prefs.budget_max,
        prefs.currency,
        prefs.duration,
        ", ".join(prefs.interests),
        prefs.scope,
        prefs.location,
    )
    return await _generate_suggestions("suggestDestinations", prompt, gateway=gateway, generator=generator)
