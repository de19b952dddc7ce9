# features/itinerary/domain/prompts.py
from __future__ import annotations

from typing import List, Optional

from wayfinder.shared.utils.amounts import format_amount

ITINERARY_SYSTEM_PROMPT = """
ROLE
You are an expert travel planner and local insider who optimizes for realism, flow, and joy.

PLANNING PRINCIPLES
- Balance: mix must-see sights, local gems, food, and rest.
- Feasibility: cluster nearby spots; minimize backtracking; account for opening hours.
- Intent-first: reflect the user's budget, pace, interests, and dates.

OUTPUT
- Answer with one JSON object only, exactly matching the requested schema.
"""

FORMAT_RULES = """
FORMATTING CONTRACT (mandatory)
- The "itinerary" field is a day-by-day plan in Markdown (## Day 1, ## Day 2, ...).
- EVERY place name mentioned in the itinerary MUST be wrapped in double asterisks on both sides,
  e.g. "Morning visit to **Lalbagh Botanical Garden**, then lunch at **Vidyarthi Bhavan**."
- The "places" array lists every highlighted place exactly once, in the order it first appears,
  with "name" spelled exactly as it appears between the asterisks and a one-sentence "description".
  Leave "imageUrl" empty.
- "totalTime" is the total duration as free text, e.g. "3 days".
"""


def _currency_rules(currency: str) -> str:
    return (
        "CURRENCY\n"
        f"- State every price in the itinerary in {currency}, e.g. \"(approx. 25 {currency})\".\n"
        f"- \"totalPrice\" is a plain number: the sum of all costs, in {currency}."
    )


def _place_rules(selections: Optional[str], *, budget_mode: bool) -> str:
    query_hint = (
        'Build budget-oriented queries, e.g. "affordable restaurants near X", "cheap eats in Y", '
        '"budget-friendly hotels in Z".'
        if budget_mode
        else 'e.g. "best breakfast near Lalbagh Botanical Garden" or "dinner restaurants in Indiranagar".'
    )
    lines: List[str] = ["PLACES AND TOOLS"]
    if selections:
        lines += [
            f"- The user already selected these places: {selections}.",
            "- Build the plan AROUND the selected places; they take priority over anything you discover.",
            "- Use find_places only to fill gaps between them (meals, short stops).",
        ]
    else:
        lines.append("- Use find_places to discover real attractions that match the interests.")
    lines += [
        "- For EVERY meal (breakfast, lunch, dinner) you MUST call find_places and name a real place it "
        "returned. Generic entries such as \"lunch at a local restaurant\" are not allowed.",
        f"- find_places returns a JSON array of {{\"name\", \"rating\"}}; \"[]\" means nothing matched, try another query. {query_hint}",
    ]
    return "\n".join(lines)


def itinerary_prompt(
    destination: str,
    budget: float,
    currency: str,
    timeline: Optional[str],
    interests: str,
    selections: Optional[str],
) -> str:
    return f"""
Create a personalized travel itinerary.

Destination: {destination}
Budget: {format_amount(budget)} {currency}
Timeline: {timeline or "(not specified; choose a sensible length)"}
Interests: {interests}
{f"Selected places: {selections}" if selections else ""}

Include estimated prices and times for each activity and keep the total within the budget.

{_place_rules(selections, budget_mode=False)}

{_currency_rules(currency)}
{FORMAT_RULES}
""".strip()


def adjustment_prompt(
    destination: str,
    budget: float,
    currency: str,
    timeline: Optional[str],
    interests: str,
    selections: Optional[str],
    current_itinerary: str,
    current_cost: float,
) -> str:
    return f"""
You are helping a user stay within their budget. The current itinerary costs {format_amount(current_cost)} {currency},
which is OVER their budget of {format_amount(budget)} {currency}.

Destination: {destination}
Budget: {format_amount(budget)} {currency}
Timeline: {timeline or "(keep the current length)"}
Interests: {interests}
{f"Selected places: {selections}" if selections else ""}

Current itinerary:
{current_itinerary}

REBUILD the itinerary so that "totalPrice" is at most {format_amount(budget)}. Do not just delete activities:
replace expensive activities, meals, and stays with cheaper alternatives that still match the interests,
and recalculate every price. Mention briefly at the start of the itinerary what changed and why.

{_place_rules(selections, budget_mode=True)}

{_currency_rules(currency)}
{FORMAT_RULES}
""".strip()


def selection_update_prompt(selected_places: List[str], budget: float, currency: str, available_time: str) -> str:
    return f"""
You are a trip planning expert.

Based on the user's selected places, budget, and available time, generate an optimized itinerary.

Selected Places: {", ".join(selected_places)}
Budget: {format_amount(budget)} {currency}
Available Time: {available_time} days

Use only the selected places; do not add new ones. Provide the updated itinerary ("updatedItinerary"),
the total estimated price in {currency} ("totalPrice", a number), and the total time ("totalTime").
Be concise.
""".strip()
