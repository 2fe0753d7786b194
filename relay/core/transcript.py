"""Conversation turns shared by the widget and the relay.

The relay keeps no server-side memory. The client owns the Transcript and sends
it whole on every request; the relay only reads it.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Literal, Optional

from pydantic import BaseModel, Field


GREETING = "I'm RutDoc™ — ask me anything about scent, wind, or scrape setup."
NO_REPLY_PLACEHOLDER = "[No reply]"

Role = Literal["system", "user", "assistant"]


class Turn(BaseModel):
    role: Role = Field(..., description="'system', 'user' or 'assistant'")
    content: str


class Transcript:
    """Ordered, append-only list of turns for one conversation."""

    def __init__(self, turns: Optional[Iterable[Turn]] = None) -> None:
        self._turns: List[Turn] = list(turns or [])

    @classmethod
    def with_greeting(cls) -> "Transcript":
        return cls([Turn(role="assistant", content=GREETING)])

    def append(self, turn: Turn) -> Turn:
        self._turns.append(turn)
        return turn

    def to_payload(self) -> List[Dict[str, str]]:
        return [t.model_dump() for t in self._turns]

    def __iter__(self) -> Iterator[Turn]:
        return iter(list(self._turns))

    def __len__(self) -> int:
        return len(self._turns)

    def __getitem__(self, index: int) -> Turn:
        return self._turns[index]

    def __repr__(self) -> str:
        return f"Transcript(turns={len(self._turns)})"
