"""ChatSense - relationship analysis of exported Telegram chats with Gemini"""

from __future__ import annotations

__version__ = "1.0.0"


# Lazy imports so importing chatsense does not pull in the Gemini SDK
def __getattr__(name: str):
    if name == "AnalysisClient":
        from chatsense.llm.client import AnalysisClient

        return AnalysisClient

    if name in ("extract_content", "process_uploads"):
        from chatsense.ingest import extractor, service

        if name == "extract_content":
            return extractor.extract_content
        return service.process_uploads

    if name == "SettingsStore":
        from chatsense.storage.settings_store import SettingsStore

        return SettingsStore

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "AnalysisClient",
    "SettingsStore",
    "extract_content",
    "process_uploads",
]
