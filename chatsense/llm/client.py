"""Analysis client for the Gemini API.

Wraps the three calls the app makes: one-shot analysis of a single chat,
one-shot analysis of several chats, and a follow-up conversation turn.
Settings are passed in explicitly; the client never reads persisted state.

Failures are not retried. A safety block becomes ContentBlockedError with a
user-facing message; any other upstream error propagates unchanged.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from chatsense.conversation.models import ChatTurn
from chatsense.llm.gemini import get_gemini_model
from chatsense.llm.history import build_chat_contents
from chatsense.llm.prompts import build_analysis_prompt, build_multi_analysis_prompt
from chatsense.observability.logging import get_logger
from chatsense.observability.telemetry import counter, time_block
from chatsense.storage.models import Settings

logger = get_logger(__name__)

MISSING_API_KEY_MESSAGE = "Add your Gemini API key in settings"
ANALYSIS_BLOCKED_MESSAGE = (
    "The content was blocked by Google's safety rules. The conversation may contain "
    "content that is not allowed. Try editing or shortening the conversation."
)
CHAT_BLOCKED_MESSAGE = (
    "The message was blocked by Google's safety rules. Please change the message content."
)

SAFETY_INDICATOR = "SAFETY"

ModelFactory = Callable[[Settings], Any]


class MissingApiKeyError(RuntimeError):
    """Raised before any network call when no API key is configured."""

    def __init__(self, message: str = MISSING_API_KEY_MESSAGE) -> None:
        super().__init__(message)


class ContentBlockedError(RuntimeError):
    """Raised when Gemini's safety filter blocks the prompt or the reply."""


class _BlockedResponse(Exception):
    """A response came back without text because of a block."""


def _enum_name(value: Any) -> str:
    return getattr(value, "name", str(value))


def _raise_if_blocked(response: Any) -> None:
    feedback = getattr(response, "prompt_feedback", None)
    block_reason = getattr(feedback, "block_reason", None)
    if block_reason:
        raise _BlockedResponse(f"prompt blocked: {_enum_name(block_reason)}")

    candidates = getattr(response, "candidates", None) or []
    if candidates and _enum_name(getattr(candidates[0], "finish_reason", None)) == SAFETY_INDICATOR:
        raise _BlockedResponse(f"candidate blocked: {SAFETY_INDICATOR}")


def is_safety_block(error: BaseException) -> bool:
    """Check whether an upstream failure means the content was blocked."""
    if isinstance(error, _BlockedResponse):
        return True

    from google.generativeai.types import BlockedPromptException

    if isinstance(error, BlockedPromptException):
        return True
    return SAFETY_INDICATOR in str(error)


class AnalysisClient:
    """
    Gemini calls for chat analysis and follow-up questions.

    Args:
        settings: Snapshot of the user's settings for this call
        model_factory: Builds a model from settings (tests inject a fake)
    """

    def __init__(self, settings: Settings, model_factory: ModelFactory | None = None) -> None:
        self.settings = settings
        self._model_factory = model_factory or get_gemini_model

    def ensure_configured(self) -> None:
        """Raise MissingApiKeyError if no API key is set."""
        if not self.settings.has_api_key:
            counter("llm.missing_api_key")
            raise MissingApiKeyError()

    def analyze(self, content: str) -> str:
        """Analyze one chat history."""
        prompt = build_analysis_prompt(self.settings.system_prompt, content)
        return self._generate(prompt, "analyze", ANALYSIS_BLOCKED_MESSAGE)

    def analyze_multiple(self, contents: Sequence[str]) -> str:
        """Analyze several chat histories as one document.

        A single content goes through analyze() unchanged.
        """
        self.ensure_configured()
        if len(contents) == 1:
            return self.analyze(contents[0])
        if not contents:
            raise ValueError("analyze_multiple needs at least one content")

        prompt = build_multi_analysis_prompt(self.settings.system_prompt, contents)
        return self._generate(prompt, "analyze_multiple", ANALYSIS_BLOCKED_MESSAGE)

    def converse(self, message: str, history: Iterable[ChatTurn]) -> str:
        """Ask a follow-up question, replaying the prior turns in order."""
        contents = build_chat_contents(self.settings.system_prompt, history, message)
        return self._generate(contents, "chat", CHAT_BLOCKED_MESSAGE)

    def _generate(self, request: Any, operation: str, blocked_message: str) -> str:
        self.ensure_configured()
        model = self._model_factory(self.settings)

        try:
            with time_block(f"llm.{operation}.latency"):
                response = model.generate_content(request)
            _raise_if_blocked(response)
            text = response.text
        except Exception as e:
            if is_safety_block(e):
                counter(f"llm.{operation}.blocked")
                logger.warning("Gemini %s call blocked by safety filter: %s", operation, e)
                raise ContentBlockedError(blocked_message) from e
            counter(f"llm.{operation}.error")
            logger.error("Gemini %s call failed: %s", operation, e)
            raise

        counter(f"llm.{operation}.success")
        return text
