"""
Conversation domain models.

A conversation is seeded with the model-authored analysis and grows by
appending turns; existing turns are never edited, removed or reordered.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from chatsense.llm.client import AnalysisClient


class ConversationError(ValueError):
    """Raised when turns would violate the conversation invariants."""


class Role(str, Enum):
    USER = "user"
    MODEL = "model"


class ChatTurn(BaseModel):
    """One message in the follow-up conversation."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    role: Role
    text: str = Field(..., description="Message text")


class Conversation:
    """Append-only sequence of chat turns starting with the seed analysis."""

    def __init__(self, turns: Iterable[ChatTurn]) -> None:
        self._turns: list[ChatTurn] = list(turns)
        if not self._turns:
            raise ConversationError("conversation must start with the seed analysis")
        if self._turns[0].role != Role.MODEL.value:
            raise ConversationError("first turn must be the model's seed analysis")

    @classmethod
    def start(cls, analysis: str) -> Conversation:
        return cls([ChatTurn(role=Role.MODEL, text=analysis)])

    @property
    def turns(self) -> tuple[ChatTurn, ...]:
        return tuple(self._turns)

    @property
    def seed(self) -> str:
        return self._turns[0].text

    def __len__(self) -> int:
        return len(self._turns)

    def append(self, role: Role, text: str) -> ChatTurn:
        turn = ChatTurn(role=role, text=text)
        self._turns.append(turn)
        return turn

    def ask(self, client: AnalysisClient, message: str) -> str:
        """
        Send a follow-up question and record both sides of the exchange.

        The user turn is recorded before the call so it stays visible even if
        the call fails; the reply is recorded only on success.
        """
        history = self.turns
        self.append(Role.USER, message)
        reply = client.converse(message, history)
        self.append(Role.MODEL, reply)
        return reply
