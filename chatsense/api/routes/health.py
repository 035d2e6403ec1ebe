"""Health check endpoint for the ChatSense API."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends

from chatsense.api.deps import get_settings_store
from chatsense.config import APP_VERSION
from chatsense.storage.settings_store import SettingsStore

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(store: SettingsStore = Depends(get_settings_store)) -> dict[str, Any]:
    """Health check endpoint.

    Reports whether an API key is configured (does not call Gemini).
    """
    return {
        "status": "healthy",
        "service": "ChatSense API",
        "version": APP_VERSION,
        "timestamp": datetime.now(UTC).isoformat(),
        "llm": {"ready": store.has_api_key()},
    }
