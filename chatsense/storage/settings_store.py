"""User settings persistence.

SettingsStore is the only place that reads or writes the persisted settings.
Callers load a Settings snapshot and hand it to the AnalysisClient; they never
look values up ad hoc.
"""

from __future__ import annotations

from typing import Protocol

from chatsense.config import DEFAULT_MODEL_NAME, DEFAULT_THEME_MODE, GOOGLE_API_KEY, THEME_MODES
from chatsense.llm.prompts import DEFAULT_SYSTEM_PROMPT
from chatsense.observability.logging import get_logger
from chatsense.observability.telemetry import log_event
from chatsense.storage.models import Settings

logger = get_logger(__name__)

API_KEY = "gemini_api_key"
SYSTEM_PROMPT = "gemini_system_prompt"
MODEL_NAME = "gemini_model_name"
THEME_MODE = "theme_mode"


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class SettingsStore:
    """Typed accessors over a string key-value store, with defaults."""

    def __init__(self, kv: KeyValueStore, default_api_key: str = GOOGLE_API_KEY) -> None:
        self.kv = kv
        self.default_api_key = default_api_key or ""

    # --- API key ---

    def get_api_key(self) -> str:
        """Stored key, else the environment default. A stored "" means the user cleared it."""
        stored = self.kv.get(API_KEY)
        if stored is None:
            return self.default_api_key
        return stored

    def set_api_key(self, api_key: str) -> None:
        self.kv.set(API_KEY, api_key.strip())

    def has_api_key(self) -> bool:
        return bool(self.get_api_key())

    # --- Model ---

    def get_model_name(self) -> str:
        return self.kv.get(MODEL_NAME) or DEFAULT_MODEL_NAME

    def set_model_name(self, model_name: str) -> None:
        self.kv.set(MODEL_NAME, model_name)

    # --- System prompt ---

    def get_system_prompt(self, use_default: bool = False) -> str:
        if use_default:
            return DEFAULT_SYSTEM_PROMPT
        return self.kv.get(SYSTEM_PROMPT) or DEFAULT_SYSTEM_PROMPT

    def set_system_prompt(self, prompt: str) -> None:
        self.kv.set(SYSTEM_PROMPT, prompt)

    # --- Theme ---

    def get_theme_mode(self) -> str:
        mode = self.kv.get(THEME_MODE)
        return mode if mode in THEME_MODES else DEFAULT_THEME_MODE

    def set_theme_mode(self, mode: str) -> None:
        if mode not in THEME_MODES:
            raise ValueError(f"Unknown theme mode: {mode}")
        self.kv.set(THEME_MODE, mode)

    # --- Snapshot ---

    def load(self) -> Settings:
        """Read the current settings, falling back to defaults per key."""
        return Settings(
            api_key=self.get_api_key(),
            model_name=self.get_model_name(),
            system_prompt=self.get_system_prompt(),
        )

    def save(self, settings: Settings) -> Settings:
        """
        Persist all three settings.

        The API key is written only when it differs from the current one, so an
        environment default is never copied into the store.

        Side Effects:
            - Writes gemini_model_name, gemini_system_prompt and, if changed, gemini_api_key
        """
        if settings.api_key.strip() != self.get_api_key():
            self.set_api_key(settings.api_key)
        self.set_model_name(settings.model_name)
        self.set_system_prompt(settings.system_prompt)
        log_event("settings.saved", model=settings.model_name, has_api_key=settings.has_api_key)
        return self.load()

    def reset_to_defaults(self) -> Settings:
        """Restore the default model and system prompt. The API key is kept."""
        self.kv.delete(MODEL_NAME)
        self.kv.delete(SYSTEM_PROMPT)
        logger.info("Settings restored to defaults")
        return self.load()

    def available_models(self) -> list[str]:
        """
        List model ids for the settings picker.

        Raises:
            MissingApiKeyError: If no API key is configured
        """
        from chatsense.llm.client import MissingApiKeyError
        from chatsense.llm.gemini import list_available_models

        api_key = self.get_api_key()
        if not api_key:
            raise MissingApiKeyError()
        return list_available_models(api_key)
