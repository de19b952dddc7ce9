# features/recommendations/domain/prompts.py
from __future__ import annotations

from typing import Optional

from wayfinder.shared.utils.amounts import format_amount

RECOMMENDER_SYSTEM_PROMPT = """
ROLE
You are an expert travel advisor who recommends destinations that truly exist.

TOOLS
- Use the find_places tool to check that the places you recommend are real, and to discover
  points of interest when the user's scope is local. Never invent a place the tool cannot find
  when you can search for it.

OUTPUT
- Answer with one JSON object only, exactly matching the requested schema.
"""

EXAMPLE_FRAMING_RULE = (
    "The user did not share their location. You MUST frame every suggestion as an example "
    '(e.g. "For a {scope_lower} trip, a great example is ...") and the description MUST invite the user '
    'to share their location for a tailored recommendation (e.g. "If you provide your location, I can '
    'suggest a destination closer to you.").'
)


def localization_rules(scope: Optional[str], location: Optional[str]) -> str:
    """Where suggestions may be, given the travel scope and the user's location."""
    if scope in ("Local", "Domestic") and not location:
        return "LOCALIZATION RULES\n- " + EXAMPLE_FRAMING_RULE.format(scope_lower=scope.lower())

    if scope == "Local":
        return (
            "LOCALIZATION RULES\n"
            f'- The user is located in "{location}" and wants a LOCAL trip.\n'
            f'- If "{location}" is a city, every suggestion MUST be a point of interest (neighbourhood, park, '
            f"museum, landmark, market, etc.) located WITHIN {location}. Never suggest a different city.\n"
            f'- If "{location}" is a region or state, suggestions may be any place within that region or state.\n'
            f'- Use find_places with queries such as "top attractions in {location}" to ground your answers.'
        )
    if scope == "Domestic":
        return (
            "LOCALIZATION RULES\n"
            f'- The user is located in "{location}" and wants a DOMESTIC trip.\n'
            f"- Every suggestion MUST be within the same country as {location}. Never suggest a place abroad."
        )
    if scope == "International":
        extra = f' The user lives in "{location}"; suggest places outside that country.' if location else ""
        return "LOCALIZATION RULES\n- Suggestions may be anywhere in the world." + extra
    if location:
        return f'LOCALIZATION RULES\n- The user is located in "{location}"; prefer places that are sensible to reach from there.'
    return ""


def quiz_prompt(
    scenery: str,
    pace: str,
    activity: str,
    companion: str,
    scope: str,
    location: Optional[str],
) -> str:
    loc_line = f"User location: {location}" if location else "User location: (not provided)"
    return f"""
Based on the user's answers to the following questions, suggest 1 to 3 travel destinations that match
their interests and personality.

Questions:
1. What type of scenery appeals to you most? {scenery}
2. What is your preferred travel pace? {pace}
3. What kind of activities do you enjoy on vacation? {activity}
4. What is your ideal travel companion? {companion}
5. What is your desired travel scope? {scope}
{loc_line}

{localization_rules(scope, location)}

For each suggestion provide:
- destination: the name of the place.
- description: your reasoning in detail, connecting the user's answers to the destination.
- imageHint: one or two keywords describing a representative photo of the place.
- rating: the place's typical visitor rating from 1 to 5, or "N/A" if unknown.
- estimatedPrice and currency only if you can give a sensible estimate; give both or neither.
- estimatedDuration in days only if it applies.
Leave imageUrl empty.
""".strip()


def preferences_prompt(
    destinations: str,
    budget_min: float,
    budget_max: float,
    currency: str,
    duration: int,
    interests: str,
    scope: Optional[str],
    location: Optional[str],
) -> str:
    loc_line = f"User location: {location}" if location else "User location: (not provided)"
    scope_line = f"Travel scope: {scope}" if scope else "Travel scope: (not specified)"
    return f"""
Suggest 1 to 3 destinations based on the user's preferences.

Destination focus: {destinations}
Budget: {format_amount(budget_min)} - {format_amount(budget_max)} {currency}
Duration: {duration} days
Interests: {interests}
{scope_line}
{loc_line}

{localization_rules(scope, location)}

Rules:
- If the destination focus is a city or region, suggest specific places or areas within it; if it is a
  country, suggest cities or regions within it.
- Use find_places to ground your suggestions in real places.
- For each suggestion give destination, description, imageHint (one or two keywords for a photo),
  rating (1 to 5 or "N/A"), estimatedPrice for the whole trip in {currency} together with
  currency "{currency}", and estimatedDuration in days.
- Keep the estimated price within the budget range. Leave imageUrl empty. Be concise.
""".strip()
