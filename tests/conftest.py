"""
Pytest configuration shared across unit and integration tests

Provides fake Gemini models, settings, stores and sample Telegram exports.
"""

from __future__ import annotations

import os

# Must be set before chatsense.config is imported by any test module
os.environ.setdefault("CHATSENSE_RATE_LIMIT_RPM", "10000")
os.environ.setdefault("CHATSENSE_RATE_LIMIT_RPH", "100000")

import pytest  # noqa: E402

from chatsense.observability.telemetry import reset_counters  # noqa: E402
from chatsense.storage.kv import SqliteKeyValueStore  # noqa: E402
from chatsense.storage.models import Settings  # noqa: E402
from chatsense.storage.settings_store import SettingsStore  # noqa: E402
from fixtures.fake_gemini import FakeModel, FakeModelFactory  # noqa: E402
from fixtures.telegram_exports import weekend_chat_json  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_telemetry():
    reset_counters()
    yield
    reset_counters()


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key-1234", model_name="gemini-2.0-flash", system_prompt="SYS")


@pytest.fixture
def fake_model() -> FakeModel:
    return FakeModel()


@pytest.fixture
def model_factory(fake_model) -> FakeModelFactory:
    return FakeModelFactory(fake_model)


@pytest.fixture
def kv_store(tmp_path) -> SqliteKeyValueStore:
    return SqliteKeyValueStore(tmp_path / "chatsense_test.db")


@pytest.fixture
def settings_store(kv_store) -> SettingsStore:
    return SettingsStore(kv_store, default_api_key="")


@pytest.fixture
def long_chat_json() -> str:
    """A JSON export whose extracted text is well above the minimum length."""
    return weekend_chat_json()
