"""Projection of a conversation into the Gemini multi-turn request shape."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from chatsense.conversation.models import ChatTurn, Role


def _content(role: str, text: str) -> dict[str, Any]:
    return {"role": role, "parts": [{"text": text}]}


def build_chat_contents(
    system_prompt: str,
    history: Iterable[ChatTurn],
    message: str,
) -> list[dict[str, Any]]:
    """
    Build the `contents` list for a follow-up question.

    The system prompt goes first as a user turn, then every prior turn in its
    original order and role, then the new user message. Nothing is reordered
    or deduplicated.
    """
    contents = [_content(Role.USER.value, system_prompt)]
    contents.extend(_content(Role(turn.role).value, turn.text) for turn in history)
    contents.append(_content(Role.USER.value, message))
    return contents
