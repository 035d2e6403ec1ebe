"""Mapping of domain failures to HTTP errors."""

from __future__ import annotations

from fastapi import HTTPException, status

from chatsense.ingest.aggregator import NoProcessableFilesError
from chatsense.llm.client import ContentBlockedError, MissingApiKeyError
from chatsense.observability.logging import get_logger
from chatsense.observability.telemetry import counter

logger = get_logger(__name__)


def to_http_error(error: Exception) -> HTTPException:
    """
    Convert a failure raised while analyzing or chatting into an HTTPException.

    Configuration and empty-batch problems are client errors, a safety block is
    unprocessable content, and anything else is reported as an upstream failure
    carrying the underlying message.
    """
    if isinstance(error, (MissingApiKeyError, NoProcessableFilesError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, ContentBlockedError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(error))

    counter("api.upstream_errors")
    logger.error("Upstream failure: %s - %s", type(error).__name__, error)
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=str(error) or "The analysis service failed. Please try again.",
    )
