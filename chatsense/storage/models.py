"""Settings model shared by the settings store, the analysis client and the API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Settings(BaseModel):
    """User-configurable settings. Read fresh before each analysis/chat call."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(default="", description="Gemini API key")
    model_name: str = Field(..., description="Gemini model id, e.g. 'gemini-2.0-flash'")
    system_prompt: str = Field(..., description="Instruction preamble sent with every request")

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())

    def masked_api_key(self) -> str:
        """Return the key with all but the last four characters hidden."""
        if not self.has_api_key:
            return ""
        if len(self.api_key) <= 4:
            return "*" * len(self.api_key)
        return "*" * (len(self.api_key) - 4) + self.api_key[-4:]
