from __future__ import annotations

import logging
from typing import Dict, List, Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from config.settings import get_settings
from relay.core.errors import ProviderError, ProviderNotConfigured


logger = logging.getLogger("rutdoc.provider")


def build_llm() -> ChatGoogleGenerativeAI:
    settings = get_settings()
    if not settings.google_api_key:
        raise ProviderNotConfigured(
            "GOOGLE_API_KEY not set. Please configure it in environment or .env"
        )

    return ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=settings.google_api_key,
        temperature=settings.temperature,
        top_p=settings.top_p,
        timeout=settings.provider_timeout,
        max_retries=max(settings.provider_max_retries, 0),
    )


def to_lc_messages(messages: List[Dict[str, str]]) -> List[BaseMessage]:
    converted: List[BaseMessage] = []
    for item in messages:
        role = item["role"]
        content = item["content"]
        if role == "system":
            converted.append(SystemMessage(content=content))
        elif role == "assistant":
            converted.append(AIMessage(content=content))
        else:
            converted.append(HumanMessage(content=content))
    return converted


def complete(messages: List[Dict[str, str]]) -> Optional[str]:
    llm = build_llm()
    try:
        result = llm.invoke(to_lc_messages(messages))
    except Exception as exc:
        raise ProviderError(f"Gemini call failed: {type(exc).__name__}") from exc

    content = getattr(result, "content", None)
    if isinstance(content, list):
        # Multi-part replies come back as a list of text chunks / dicts.
        parts = [p if isinstance(p, str) else (p.get("text") or "") for p in content if isinstance(p, (str, dict))]
        content = "".join(parts)
    if not isinstance(content, str):
        return None
    return content
