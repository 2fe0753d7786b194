from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional

from config.settings import get_settings
from relay.core.errors import ProviderError
from relay.core.prompt import system_turn
from relay.core.transcript import NO_REPLY_PLACEHOLDER, Turn
from relay.providers import gemini_chat, openai_chat


logger = logging.getLogger("rutdoc")

Backend = Callable[[List[Dict[str, str]]], Optional[str]]

BACKENDS: Dict[str, Backend] = {
    "openai": openai_chat.complete,
    "gemini": gemini_chat.complete,
}


def build_provider_messages(turns: Iterable[Turn]) -> List[Dict[str, str]]:
    """System turn first, then the caller's turns untouched and in order."""
    return [system_turn().model_dump()] + [t.model_dump() for t in turns]


def get_backend(name: str) -> Backend:
    try:
        return BACKENDS[name]
    except KeyError:
        raise ProviderError(f"Unknown provider: {name!r}") from None


def relay_transcript(turns: Iterable[Turn]) -> str:
    settings = get_settings()
    backend = get_backend(settings.provider)
    messages = build_provider_messages(turns)
    logger.info(
        "Forwarding transcript: provider=%s model=%s turns=%s",
        settings.provider,
        settings.model,
        len(messages) - 1,
    )
    reply = backend(messages)
    if not reply:
        logger.info("Provider returned no content, using placeholder")
        return NO_REPLY_PLACEHOLDER
    return reply
