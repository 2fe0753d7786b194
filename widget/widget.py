"""Client side of the chat: owns the transcript and talks to the relay.

One widget instance is one page session. Nothing is persisted; a new widget
starts again from the greeting.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import httpx

from config.settings import get_settings
from relay.core.transcript import NO_REPLY_PLACEHOLDER, Transcript, Turn


logger = logging.getLogger("rutdoc.widget")

ERROR_REPLY = "Sorry, RutDoc couldn't be reached right now. Please try again in a moment."


async def request_reply(client: httpx.AsyncClient, relay_url: str, turns: Iterable[Turn]) -> Turn:
    """POST the whole transcript to the relay and turn the outcome into one assistant turn.

    Never raises: transport errors, non-2xx statuses and unreadable bodies all
    map to ``ERROR_REPLY``.
    """
    payload = {"messages": [t.model_dump() for t in turns]}
    try:
        response = await client.post(relay_url, json=payload)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as exc:
        logger.warning("Relay returned status %s", exc.response.status_code)
        return Turn(role="assistant", content=ERROR_REPLY)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Relay request failed: %s", type(exc).__name__)
        return Turn(role="assistant", content=ERROR_REPLY)
    except ValueError:
        logger.warning("Relay response was not valid JSON")
        return Turn(role="assistant", content=ERROR_REPLY)

    reply = data.get("reply") if isinstance(data, dict) else None
    if not isinstance(reply, str) or not reply:
        return Turn(role="assistant", content=NO_REPLY_PLACEHOLDER)
    return Turn(role="assistant", content=reply)


class ChatWidget:
    """Transcript, input buffer and visibility for one chat session."""

    def __init__(
        self,
        relay_url: Optional[str] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self.relay_url = relay_url or settings.relay_url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.widget_timeout
        )
        self.transcript = Transcript.with_greeting()
        self.input_buffer = ""
        self.visible = False
        self._in_flight = False

    @property
    def busy(self) -> bool:
        return self._in_flight

    def open(self) -> None:
        self.visible = True

    def close(self) -> None:
        self.visible = False

    def toggle(self) -> None:
        self.visible = not self.visible

    def set_input(self, text: str) -> None:
        self.input_buffer = text

    async def submit(self, text: Optional[str] = None) -> Optional[Turn]:
        """Send ``text`` (or the input buffer) and return the assistant turn appended.

        Returns None without touching the transcript for blank input or while an
        earlier submit is still waiting on the relay.
        """
        if text is None:
            text = self.input_buffer
        if not text.strip():
            return None
        if self._in_flight:
            logger.info("Submit ignored: a reply is still pending")
            return None

        self._in_flight = True
        try:
            self.transcript.append(Turn(role="user", content=text))
            self.input_buffer = ""
            reply = await request_reply(self._client, self.relay_url, self.transcript)
            return self.transcript.append(reply)
        finally:
            self._in_flight = False

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ChatWidget":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
