from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_CREDENTIAL_VARS = ("GROQ_API_KEY", "CAMPUSSPOT_API_KEY", "API_KEY")


def resolve_api_key() -> str:
    """Return the first non-empty credential from the supported env vars."""
    for name in _CREDENTIAL_VARS:
        value = os.getenv(name, "").strip()
        if value:
            return value
    return ""


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = field(default_factory=resolve_api_key)
    model: str = "llama-3.3-70b-versatile"
    timeout: float = 10.0
    max_tokens: int = 512
    temperature: float = 0.7
    enabled: bool = True


DEFAULT_LLM_CONFIG = LLMConfig()
