"""FastAPI dependency providers.

Tests swap these out with app.dependency_overrides.
"""

from __future__ import annotations

from functools import lru_cache

from chatsense.config import DB_PATH
from chatsense.llm.client import ModelFactory
from chatsense.llm.gemini import get_gemini_model
from chatsense.storage.kv import SqliteKeyValueStore
from chatsense.storage.settings_store import SettingsStore


@lru_cache(maxsize=1)
def get_settings_store() -> SettingsStore:
    return SettingsStore(SqliteKeyValueStore(DB_PATH))


def get_model_factory() -> ModelFactory:
    return get_gemini_model
