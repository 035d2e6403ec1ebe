"""Centralized configuration for the ChatSense backend.

Re-exports everything from chatsense.infrastructure.settings, then adds typed
constants for ingestion limits, model defaults and rate limiting. Environment
variable overrides use safe defaults so the app starts without extra env
configuration.
"""

from __future__ import annotations

import os

from chatsense.infrastructure.settings import *  # noqa: F401, F403
from chatsense.infrastructure.settings import GEMINI_MODEL

# --- App ---
APP_VERSION: str = "1.0.0"

# --- Ingestion ---
MAX_UPLOAD_BYTES: int = int(os.getenv("CHATSENSE_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
MIN_CONTENT_CHARS: int = int(os.getenv("CHATSENSE_MIN_CONTENT_CHARS", "100"))
MAX_FILES_PER_BATCH: int = int(os.getenv("CHATSENSE_MAX_FILES_PER_BATCH", "20"))
ALLOWED_EXTENSIONS: tuple[str, ...] = (".json", ".html")
ALLOWED_CONTENT_TYPES: tuple[str, ...] = ("application/json", "text/html")

# --- LLM ---
DEFAULT_MODEL_NAME: str = GEMINI_MODEL
FALLBACK_MODELS: tuple[str, ...] = ("gemini-1.5-flash", "gemini-1.5-pro", "gemini-pro")

# --- Rate Limiting ---
RATE_LIMIT_RPM: int = int(os.getenv("CHATSENSE_RATE_LIMIT_RPM", "30"))
RATE_LIMIT_RPH: int = int(os.getenv("CHATSENSE_RATE_LIMIT_RPH", "500"))
RATE_LIMIT_MAX_IPS: int = 10000

# --- Theme ---
THEME_MODES: tuple[str, ...] = ("light", "dark")
DEFAULT_THEME_MODE: str = "light"
