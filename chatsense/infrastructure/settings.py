"""
Application-wide settings and environment configuration
"""

from __future__ import annotations

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
CHATSENSE_ROOT = Path(__file__).parent.parent

# Environment
ENV = os.getenv("CHATSENSE_ENV", "development")
DEBUG = ENV == "development"

# API Configuration
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Key-value store backing the user settings
DB_PATH = Path(os.getenv("CHATSENSE_DB_PATH", str(CHATSENSE_ROOT / "data" / "chatsense.db")))

# Gemini
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")


def is_development() -> bool:
    """Check if running in development"""
    return ENV == "development"
