from __future__ import annotations

import logging
from collections.abc import Sequence

from ..catalog.filters import matches_query
from ..catalog.models import NewPlace, Place
from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..llm.groq_client import complete, get_client

logger = logging.getLogger(__name__)

MAX_OFFLINE_RESULTS = 3

DEFAULT_DESCRIPTION = "A great place to study on campus."
OFFLINE_NO_MATCH = "I couldn't reach the AI right now, but try browsing the list or using filters!"
OFFLINE_MATCH_TEMPLATE = (
    "I don't have AI access right now, but based on your search, you might like: {names}."
)
EMPTY_RESPONSE = (
    "I'm having trouble accessing the campus database right now. Please try browsing the list!"
)
ERROR_RESPONSE = "Sorry, I couldn't process your request at the moment."

# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

DESCRIPTION_PROMPT = """\
Write a short, engaging description (max 2 sentences) for a university study spot named "{name}".
Key features/tags provided: {tags}.
The tone should be helpful for students looking for a place to study."""

RECOMMENDATION_PROMPT = """\
You are a helpful campus guide. A student asks: "{query}"

Here is a list of available study places on campus:
{context}

Based strictly on the list above, recommend the top 1-3 places that best fit their request.
Explain why you chose them briefly. If nothing matches well, say so politely and suggest \
the closest alternative.
Format the output as a friendly chat response. Do not use Markdown lists, just conversational text."""


def describe_tags(data: NewPlace) -> list[str]:
    """Tags sent along with a place name when asking for a description."""
    tags = [data.type.value, data.noise_level.value]
    if data.has_outlets:
        tags.append("Power Outlets")
    if data.has_food:
        tags.append("Food Available")
    if data.is_open_late:
        tags.append("Open Late")
    return tags


def build_places_context(places: Sequence[Place]) -> str:
    """One line per place, in catalog order."""
    return "\n".join(
        f"ID: {p.id}, Name: {p.name}, Type: {p.type.value}, Noise: {p.noise_level.value}, "
        f"Outlets: {str(p.has_outlets).lower()}, OpenLate: {str(p.is_open_late).lower()}, "
        f"Desc: {p.description}"
        for p in places
    )


def offline_recommendation(query: str, places: Sequence[Place]) -> str:
    matches = [p for p in places if matches_query(p, query)][:MAX_OFFLINE_RESULTS]
    if not matches:
        return OFFLINE_NO_MATCH
    return OFFLINE_MATCH_TEMPLATE.format(names=", ".join(p.name for p in matches))


# ---------------------------------------------------------------------------
# LLM Calls
# ---------------------------------------------------------------------------


async def generate_description(
    name: str,
    tags: Sequence[str],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str:
    client = get_client(config)
    if client is None:
        return DEFAULT_DESCRIPTION

    prompt = DESCRIPTION_PROMPT.format(name=name, tags=", ".join(tags))
    try:
        text = await complete(client, prompt, config)
    except Exception:
        logger.warning("Description generation failed, using default", exc_info=True)
        return DEFAULT_DESCRIPTION

    return text or DEFAULT_DESCRIPTION


async def get_recommendation(
    query: str,
    places: Sequence[Place],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str:
    client = get_client(config)
    if client is None:
        logger.warning("No LLM credential configured; returning offline recommendations")
        return offline_recommendation(query, places)

    prompt = RECOMMENDATION_PROMPT.format(query=query, context=build_places_context(places))
    try:
        text = await complete(client, prompt, config)
    except Exception:
        logger.warning("Recommendation request failed", exc_info=True)
        return ERROR_RESPONSE

    return text or EMPTY_RESPONSE
