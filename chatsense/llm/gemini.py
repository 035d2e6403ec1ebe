"""
Gemini model construction and model listing.

Uses google-generativeai with the API key from the user's settings. The SDK
keeps its client configuration globally, so a model is built per call from
the Settings passed in rather than cached.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from chatsense.config import DEFAULT_MODEL_NAME, FALLBACK_MODELS
from chatsense.observability.logging import get_logger
from chatsense.observability.telemetry import counter

if TYPE_CHECKING:
    from chatsense.storage.models import Settings

logger = get_logger(__name__)


class GeminiInitializationError(RuntimeError):
    """Raised when a Gemini model cannot be constructed."""


def normalize_model_name(model_name: str) -> str:
    """Strip the resource prefix the models endpoint returns ("models/gemini-pro")."""
    if "/" in model_name:
        return model_name.rsplit("/", 1)[-1] or DEFAULT_MODEL_NAME
    return model_name or DEFAULT_MODEL_NAME


def safety_settings() -> dict[Any, Any]:
    """Block only high-probability harm in every category.

    Chat exports routinely contain rough language; the SDK defaults block far
    more than an analysis of a private conversation needs.
    """
    from google.generativeai.types import HarmBlockThreshold, HarmCategory

    return {
        HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_ONLY_HIGH,
        HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_ONLY_HIGH,
        HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_ONLY_HIGH,
        HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_ONLY_HIGH,
    }


def get_gemini_model(settings: Settings) -> Any:
    """
    Create a Gemini model for the given settings.

    Returns:
        GenerativeModel configured with the user's API key, model and safety settings

    Raises:
        GeminiInitializationError: If the SDK rejects the configuration
    """
    import google.generativeai as genai

    model_name = normalize_model_name(settings.model_name)
    try:
        genai.configure(api_key=settings.api_key)
        model = genai.GenerativeModel(model_name=model_name, safety_settings=safety_settings())
    except Exception as e:
        logger.error("Failed to initialize Gemini model %s: %s", model_name, e)
        raise GeminiInitializationError(f"Failed to initialize Gemini: {e}") from e

    logger.debug("Initialized Gemini model: model=%s", model_name)
    return model


def list_available_models(api_key: str) -> list[str]:
    """
    List Gemini model ids available for the API key.

    Model listing only feeds the settings picker, so any upstream failure
    falls back to a static list instead of raising.
    """
    import google.generativeai as genai

    try:
        genai.configure(api_key=api_key)
        names = [
            normalize_model_name(model.name)
            for model in genai.list_models()
            if "gemini" in model.name
        ]
    except Exception as e:
        counter("llm.list_models.fallback")
        logger.warning("Could not list Gemini models, using fallback list: %s", e)
        return list(FALLBACK_MODELS)

    if not names:
        return [DEFAULT_MODEL_NAME]
    return names
