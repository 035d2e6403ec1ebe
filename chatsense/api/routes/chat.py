"""Follow-up conversation endpoint.

Stateless: the caller sends the conversation so far (seed analysis first)
and gets back the reply plus the extended history.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from chatsense.api.deps import get_model_factory, get_settings_store
from chatsense.api.errors import to_http_error
from chatsense.api.models import ChatRequest, ChatResponse
from chatsense.conversation.models import Conversation
from chatsense.llm.client import AnalysisClient, ModelFactory
from chatsense.storage.settings_store import SettingsStore

router = APIRouter(prefix="/api", tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    store: SettingsStore = Depends(get_settings_store),
    model_factory: ModelFactory = Depends(get_model_factory),
) -> ChatResponse:
    conversation = Conversation(request.history)
    client = AnalysisClient(store.load(), model_factory=model_factory)

    try:
        reply = await run_in_threadpool(conversation.ask, client, request.message)
    except Exception as e:
        raise to_http_error(e) from e

    return ChatResponse(reply=reply, history=list(conversation.turns))
