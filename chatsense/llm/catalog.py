"""Descriptions of well-known Gemini models for the settings picker."""

from __future__ import annotations

from dataclasses import dataclass

from chatsense.llm.gemini import normalize_model_name


@dataclass(frozen=True)
class ModelInfo:
    description: str
    recommended: bool = False


MODEL_INFO: dict[str, ModelInfo] = {
    "gemini-2.0-flash": ModelInfo(
        "Newest fast model with strong performance at low cost", recommended=True
    ),
    "gemini-1.5-pro": ModelInfo(
        "Most capable multimodal model with an extended context window", recommended=True
    ),
    "gemini-1.5-flash": ModelInfo("Fast model balancing quality and speed"),
    "gemini-pro": ModelInfo("Classic Gemini model for text tasks"),
    "gemini-pro-vision": ModelInfo("Classic Gemini model with image support"),
}


def describe_model(model_name: str) -> ModelInfo | None:
    """Match a model id exactly or as a versioned variant ("gemini-1.5-pro-002")."""
    base = normalize_model_name(model_name)
    # Longest key first so "gemini-pro-vision" wins over "gemini-pro"
    for key in sorted(MODEL_INFO, key=len, reverse=True):
        if base == key or base.startswith(key + "-"):
            return MODEL_INFO[key]
    return None
