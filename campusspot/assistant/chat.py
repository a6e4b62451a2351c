from __future__ import annotations

import logging
from collections.abc import Sequence

from ..catalog.models import Place
from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from .models import ChatMessage, ChatRole
from .recommender import get_recommendation

logger = logging.getLogger(__name__)

GREETING = (
    "Hi! I'm your CampusSpot guide. Looking for a quiet corner or a coffee buzz? Ask me!"
)


class ChatSession:
    """
    Message history for the recommendation chat.

    Overlapping ``send`` calls are allowed. Each assistant reply is appended
    when its request finishes, so replies follow completion order, which can
    differ from the order the questions were sent in.
    """

    def __init__(self, config: LLMConfig = DEFAULT_LLM_CONFIG) -> None:
        self._config = config
        self._messages: list[ChatMessage] = [
            ChatMessage(role=ChatRole.assistant, text=GREETING),
        ]

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    async def send(self, text: str, places: Sequence[Place]) -> str | None:
        """Ask for a recommendation. Blank input is ignored and returns ``None``."""
        if not text.strip():
            return None

        self._messages = self._messages + [ChatMessage(role=ChatRole.user, text=text)]
        reply = await get_recommendation(text, places, config=self._config)
        self._messages = self._messages + [ChatMessage(role=ChatRole.assistant, text=reply)]
        logger.debug("Chat history now has %d messages", len(self._messages))
        return reply
