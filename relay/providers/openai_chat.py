from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from config.settings import get_settings
from relay.core.errors import ProviderError, ProviderNotConfigured


logger = logging.getLogger("rutdoc.provider")


def _make_client(timeout: float) -> httpx.Client:
    return httpx.Client(timeout=timeout)


def extract_reply(data: Any) -> Optional[str]:
    """Return ``choices[0].message.content`` or None when any level is missing."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    if not isinstance(content, str):
        return None
    return content


def _post_with_retry(client: httpx.Client, url: str, payload: Dict[str, Any], headers: Dict[str, str], retries: int) -> httpx.Response:
    attempt = 0
    while True:
        try:
            return client.post(url, json=payload, headers=headers)
        except httpx.TransportError as exc:
            if attempt >= retries:
                raise
            attempt += 1
            logger.warning(
                "Provider transport error (%s), retrying %s/%s",
                type(exc).__name__,
                attempt,
                retries,
            )


def complete(messages: List[Dict[str, str]]) -> Optional[str]:
    settings = get_settings()
    if not settings.openai_api_key:
        raise ProviderNotConfigured("OPENAI_API_KEY not configured")

    endpoint = f"{settings.openai_base_url.rstrip('/')}/chat/completions"
    payload = {
        "model": settings.openai_model,
        "messages": messages,
    }
    headers = {
        "Authorization": f"Bearer {settings.openai_api_key}",
        "Content-Type": "application/json",
    }

    try:
        with _make_client(settings.provider_timeout) as client:
            response = _post_with_retry(
                client, endpoint, payload, headers, max(settings.provider_max_retries, 0)
            )
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPStatusError as exc:
        raise ProviderError(
            f"Chat completion call failed with status {exc.response.status_code}"
        ) from exc
    except httpx.HTTPError as exc:
        raise ProviderError(f"Chat completion call failed: {type(exc).__name__}") from exc
    except ValueError as exc:
        raise ProviderError("Chat completion response was not valid JSON") from exc

    return extract_reply(data)
