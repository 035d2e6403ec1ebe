"""Unit tests for settings persistence."""

from __future__ import annotations

import pytest

from chatsense.config import DEFAULT_MODEL_NAME
from chatsense.llm.client import MissingApiKeyError
from chatsense.llm.prompts import DEFAULT_SYSTEM_PROMPT
from chatsense.storage.kv import SqliteKeyValueStore
from chatsense.storage.models import Settings
from chatsense.storage.settings_store import API_KEY, SettingsStore


class TestDefaults:
    def test_fresh_store_returns_defaults(self, settings_store):
        loaded = settings_store.load()

        assert loaded.api_key == ""
        assert loaded.model_name == DEFAULT_MODEL_NAME
        assert loaded.system_prompt == DEFAULT_SYSTEM_PROMPT
        assert settings_store.get_theme_mode() == "light"

    def test_environment_key_is_used_until_one_is_saved(self, kv_store):
        store = SettingsStore(kv_store, default_api_key="env-key")

        assert store.get_api_key() == "env-key"
        store.set_api_key("saved-key")
        assert store.get_api_key() == "saved-key"

    def test_cleared_key_overrides_environment_key(self, kv_store):
        store = SettingsStore(kv_store, default_api_key="env-key")

        store.save(store.load().model_copy(update={"api_key": ""}))

        assert store.get_api_key() == ""
        assert not store.has_api_key()
        assert not store.load().has_api_key

    def test_environment_key_is_not_copied_into_store(self, kv_store):
        store = SettingsStore(kv_store, default_api_key="env-key")

        store.save(store.load().model_copy(update={"model_name": "gemini-1.5-pro"}))

        assert kv_store.get(API_KEY) is None
        assert store.get_api_key() == "env-key"

    def test_explicit_default_prompt(self, settings_store):
        settings_store.set_system_prompt("custom")

        assert settings_store.get_system_prompt() == "custom"
        assert settings_store.get_system_prompt(use_default=True) == DEFAULT_SYSTEM_PROMPT


class TestPersistence:
    def test_save_round_trips_through_sqlite(self, tmp_path):
        db_path = tmp_path / "settings.db"
        SettingsStore(SqliteKeyValueStore(db_path), default_api_key="").save(
            Settings(api_key="key-5678", model_name="gemini-1.5-pro", system_prompt="Be brief")
        )

        reopened = SettingsStore(SqliteKeyValueStore(db_path), default_api_key="").load()

        assert reopened == Settings(
            api_key="key-5678", model_name="gemini-1.5-pro", system_prompt="Be brief"
        )

    def test_api_key_is_trimmed(self, settings_store, kv_store):
        settings_store.set_api_key("  padded-key \n")

        assert kv_store.get(API_KEY) == "padded-key"

    def test_empty_prompt_falls_back_to_default(self, settings_store):
        settings_store.set_system_prompt("")

        assert settings_store.get_system_prompt() == DEFAULT_SYSTEM_PROMPT

    def test_reset_keeps_api_key(self, settings_store):
        settings_store.save(
            Settings(api_key="keep-me", model_name="gemini-pro", system_prompt="custom")
        )

        restored = settings_store.reset_to_defaults()

        assert restored.api_key == "keep-me"
        assert restored.model_name == DEFAULT_MODEL_NAME
        assert restored.system_prompt == DEFAULT_SYSTEM_PROMPT


class TestTheme:
    def test_set_and_get(self, settings_store):
        settings_store.set_theme_mode("dark")

        assert settings_store.get_theme_mode() == "dark"

    def test_unknown_mode_rejected(self, settings_store):
        with pytest.raises(ValueError):
            settings_store.set_theme_mode("purple")


class TestAvailableModels:
    def test_requires_api_key(self, settings_store):
        with pytest.raises(MissingApiKeyError):
            settings_store.available_models()

    def test_lists_models_with_stored_key(self, settings_store, monkeypatch):
        seen = []
        monkeypatch.setattr(
            "chatsense.llm.gemini.list_available_models",
            lambda api_key: seen.append(api_key) or ["gemini-2.0-flash"],
        )
        settings_store.set_api_key("abc")

        assert settings_store.available_models() == ["gemini-2.0-flash"]
        assert seen == ["abc"]


class TestMaskedApiKey:
    @pytest.mark.parametrize(
        "api_key,expected",
        [
            ("", ""),
            ("abc", "***"),
            ("abcdefgh", "****efgh"),
        ],
    )
    def test_masking(self, api_key, expected):
        masked = Settings(api_key=api_key, model_name="m", system_prompt="p").masked_api_key()

        assert masked == expected


def test_kv_store_delete_missing_key_is_noop(kv_store):
    kv_store.delete("never-set")

    assert kv_store.get("never-set") is None


def test_kv_store_overwrites(kv_store):
    kv_store.set("k", "one")
    kv_store.set("k", "two")

    assert kv_store.get("k") == "two"
