"""Pydantic request/response models for the ChatSense API."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from chatsense.config import MAX_FILES_PER_BATCH, THEME_MODES
from chatsense.conversation.models import ChatTurn, Conversation

# =============================================================================
# ANALYSIS
# =============================================================================


class ProcessedFileModel(BaseModel):
    name: str
    content: str


class SkippedFileModel(BaseModel):
    name: str
    kind: str
    reason: str


class AnalyzeResponse(BaseModel):
    """Result of analyzing a batch of uploaded exports."""

    analysis: str
    files: list[ProcessedFileModel]
    skipped: list[SkippedFileModel] = Field(default_factory=list)


class AnalyzeContentsRequest(BaseModel):
    """Re-analysis of files that were already extracted (e.g. after removing one)."""

    files: list[ProcessedFileModel] = Field(..., min_length=1, max_length=MAX_FILES_PER_BATCH)


# =============================================================================
# CHAT
# =============================================================================


class ChatRequest(BaseModel):
    """Follow-up question with the conversation so far (seed analysis first)."""

    message: str = Field(..., min_length=1)
    history: list[ChatTurn] = Field(..., min_length=1)

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("message cannot be empty")
        return v

    @field_validator("history")
    @classmethod
    def history_starts_with_seed(cls, v: list[ChatTurn]) -> list[ChatTurn]:
        Conversation(v)
        return v


class ChatResponse(BaseModel):
    reply: str
    history: list[ChatTurn]


# =============================================================================
# SETTINGS
# =============================================================================


class SettingsResponse(BaseModel):
    """Current settings. The API key is never echoed back in full."""

    api_key: str
    has_api_key: bool
    model_name: str
    system_prompt: str
    default_system_prompt: str


class SettingsUpdate(BaseModel):
    """Partial settings update; omitted fields keep their stored value."""

    api_key: str | None = None
    model_name: str | None = Field(default=None, min_length=1)
    system_prompt: str | None = Field(default=None, min_length=1)


class ModelOption(BaseModel):
    id: str
    description: str = ""
    recommended: bool = False


class ModelsResponse(BaseModel):
    models: list[ModelOption]
    current: str


class ThemeSetting(BaseModel):
    mode: str

    @field_validator("mode")
    @classmethod
    def known_mode(cls, v: str) -> str:
        if v not in THEME_MODES:
            raise ValueError(f"mode must be one of {THEME_MODES}")
        return v
