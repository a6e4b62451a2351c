from __future__ import annotations

import logging

from groq import AsyncGroq

from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

_client: AsyncGroq | None = None
_client_key: tuple[str, float] | None = None


def get_client(config: LLMConfig = DEFAULT_LLM_CONFIG) -> AsyncGroq | None:
    """
    Return the shared Groq client, building it on first use.

    Returns ``None`` when the LLM is disabled or no credential is configured;
    callers treat that as the offline mode rather than an error.
    """
    global _client, _client_key
    if not config.enabled or not config.api_key:
        return None

    key = (config.api_key, config.timeout)
    if _client is None or _client_key != key:
        if _client is not None:
            logger.info("LLM credentials changed; replacing the Groq client")
        _client = AsyncGroq(api_key=config.api_key, timeout=config.timeout)
        _client_key = key
    return _client


async def aclose_client() -> None:
    global _client, _client_key
    if _client is not None:
        client, _client, _client_key = _client, None, None
        await client.close()


async def complete(
    client: AsyncGroq,
    prompt: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str:
    """
    Send a single prompt and return the stripped response text.

    Returns an empty string when the model answers with no content. Transport
    and API errors propagate so each caller can pick its own fallback.
    """
    response = await client.chat.completions.create(
        model=config.model,
        messages=[{"role": "user", "content": prompt}],
        max_tokens=config.max_tokens,
        temperature=config.temperature,
    )
    if not response.choices:
        logger.warning("Groq returned no choices for model %s", config.model)
        return ""
    return (response.choices[0].message.content or "").strip()
