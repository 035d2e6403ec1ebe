"""Multi-file aggregation: filter extracted files and route them to analysis."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from chatsense.config import MIN_CONTENT_CHARS
from chatsense.ingest.types import FailureKind, ProcessedFile, SkippedFile
from chatsense.observability.logging import get_logger

if TYPE_CHECKING:
    from chatsense.llm.client import AnalysisClient

logger = get_logger(__name__)


class NoProcessableFilesError(ValueError):
    """Raised when a submission has nothing left to analyze."""


def select_usable(
    files: Sequence[ProcessedFile],
    min_chars: int = MIN_CONTENT_CHARS,
) -> tuple[list[ProcessedFile], list[SkippedFile]]:
    """
    Drop files whose extracted content is shorter than min_chars.

    Returns:
        (usable files in input order, skipped files)
    """
    usable: list[ProcessedFile] = []
    skipped: list[SkippedFile] = []

    for file in files:
        if len(file.content) < min_chars:
            skipped.append(SkippedFile(file.name, FailureKind.TOO_SHORT, "content too short"))
        else:
            usable.append(file)

    if skipped:
        logger.info("Dropped %d file(s) below %d characters", len(skipped), min_chars)
    return usable, skipped


def analyze_contents(client: AnalysisClient, contents: Sequence[str]) -> str:
    """
    Send extracted contents to the analysis client.

    One content is analyzed as-is; several are combined into one document with
    a FILE N header per source, in the given order.

    Raises:
        NoProcessableFilesError: If contents is empty
    """
    if not contents:
        raise NoProcessableFilesError("None of the provided files could be processed.")
    if len(contents) == 1:
        return client.analyze(contents[0])
    return client.analyze_multiple(contents)
