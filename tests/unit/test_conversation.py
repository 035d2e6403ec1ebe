"""Unit tests for conversation turns and their projection into Gemini contents."""

from __future__ import annotations

import pytest
from fixtures.fake_gemini import FakeModel, FakeModelFactory

from chatsense.conversation.models import ChatTurn, Conversation, ConversationError, Role
from chatsense.llm.client import AnalysisClient
from chatsense.llm.history import build_chat_contents


def test_conversation_starts_with_seed_analysis():
    conversation = Conversation.start("initial analysis")

    assert conversation.turns == (ChatTurn(role=Role.MODEL, text="initial analysis"),)
    assert conversation.seed == "initial analysis"


def test_empty_conversation_is_rejected():
    with pytest.raises(ConversationError):
        Conversation([])


def test_conversation_must_not_start_with_user_turn():
    with pytest.raises(ConversationError):
        Conversation([ChatTurn(role=Role.USER, text="hi")])


def test_turns_are_a_snapshot():
    conversation = Conversation.start("seed")
    snapshot = conversation.turns

    conversation.append(Role.USER, "question")

    assert len(snapshot) == 1
    assert len(conversation) == 2


def test_ask_sends_prior_history_and_records_both_turns(settings):
    model = FakeModel(reply="the answer")
    client = AnalysisClient(settings, model_factory=FakeModelFactory(model))
    conversation = Conversation.start("seed")

    reply = conversation.ask(client, "question")

    assert reply == "the answer"
    assert [(t.role, t.text) for t in conversation.turns] == [
        ("model", "seed"),
        ("user", "question"),
        ("model", "the answer"),
    ]
    sent = model.requests[0]
    assert [c["parts"][0]["text"] for c in sent] == ["SYS", "seed", "question"]


def test_failed_ask_keeps_user_turn(settings):
    model = FakeModel(error=ConnectionError("offline"))
    client = AnalysisClient(settings, model_factory=FakeModelFactory(model))
    conversation = Conversation.start("seed")

    with pytest.raises(ConnectionError):
        conversation.ask(client, "question")

    assert [t.role for t in conversation.turns] == ["model", "user"]


def test_build_chat_contents_shape():
    contents = build_chat_contents(
        "system",
        [ChatTurn(role=Role.MODEL, text="seed"), ChatTurn(role=Role.USER, text="q1")],
        "q2",
    )

    assert contents == [
        {"role": "user", "parts": [{"text": "system"}]},
        {"role": "model", "parts": [{"text": "seed"}]},
        {"role": "user", "parts": [{"text": "q1"}]},
        {"role": "user", "parts": [{"text": "q2"}]},
    ]


def test_chat_turn_parses_role_strings():
    turn = ChatTurn.model_validate({"role": "model", "text": "seed"})

    assert turn.role == "model"
    assert turn.model_dump() == {"role": "model", "text": "seed"}
