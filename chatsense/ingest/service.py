"""Upload batch processing: validate, extract, filter, analyze.

Per-file problems (bad type, oversized, unparseable, too short, unexpected
extraction errors) are collected as SkippedFile entries and never stop the
batch. Only an empty result or a failed analysis call fails the submission.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chatsense.config import MAX_UPLOAD_BYTES, MIN_CONTENT_CHARS
from chatsense.ingest.aggregator import NoProcessableFilesError, analyze_contents, select_usable
from chatsense.ingest.extractor import extract_content
from chatsense.ingest.types import (
    ExtractionFailure,
    FailureKind,
    ProcessedFile,
    SkippedFile,
    UploadedFile,
)
from chatsense.ingest.validator import partition_uploads
from chatsense.observability.logging import get_logger
from chatsense.observability.telemetry import counter, log_event

if TYPE_CHECKING:
    from chatsense.llm.client import AnalysisClient

logger = get_logger(__name__)


@dataclass
class BatchOutcome:
    """Analysis of one submission plus what was kept and what was dropped."""

    analysis: str
    processed: list[ProcessedFile]
    skipped: list[SkippedFile] = field(default_factory=list)


def extract_files(
    files: Sequence[UploadedFile],
    min_chars: int = MIN_CONTENT_CHARS,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> tuple[list[ProcessedFile], list[SkippedFile]]:
    """
    Turn uploaded files into usable ProcessedFiles, in submission order.

    Raises:
        NoProcessableFilesError: If no file passes validation
    """
    valid, rejected = partition_uploads(files, max_bytes=max_bytes)
    skipped = [
        SkippedFile(name, FailureKind.INVALID, "unsupported file type or size") for name in rejected
    ]

    if not valid:
        max_mb = max_bytes // (1024 * 1024)
        raise NoProcessableFilesError(
            f"No suitable files to process. Only .html and .json files up to {max_mb} MB "
            "are supported."
        )

    processed: list[ProcessedFile] = []
    for file in valid:
        try:
            result = extract_content(file.name, file.decode())
        except Exception:
            logger.exception("Failed to process %s", file.name)
            counter(f"ingest.failed.{FailureKind.PROCESSING.value}")
            skipped.append(SkippedFile(file.name, FailureKind.PROCESSING, "processing error"))
            continue
        if isinstance(result, ExtractionFailure):
            counter(f"ingest.failed.{result.kind.value}")
            skipped.append(SkippedFile(file.name, result.kind, result.reason))
            continue
        processed.append(ProcessedFile(file.name, result.content))

    usable, too_short = select_usable(processed, min_chars=min_chars)
    skipped.extend(too_short)
    return usable, skipped


def process_uploads(
    files: Sequence[UploadedFile],
    client: AnalysisClient,
    min_chars: int = MIN_CONTENT_CHARS,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> BatchOutcome:
    """
    Run a batch of uploaded exports through the whole pipeline.

    The API key is checked first so no file work happens without one.

    Raises:
        MissingApiKeyError: If the client has no API key
        NoProcessableFilesError: If nothing usable remains after filtering
        ContentBlockedError: If Gemini blocks the analysis
    """
    client.ensure_configured()

    usable, skipped = extract_files(files, min_chars=min_chars, max_bytes=max_bytes)
    if skipped:
        logger.warning("Skipped %d of %d file(s)", len(skipped), len(files))

    analysis = analyze_contents(client, [file.content for file in usable])
    log_event("ingest.batch_analyzed", files=len(usable), skipped=len(skipped))
    return BatchOutcome(analysis=analysis, processed=usable, skipped=skipped)


__all__ = ["BatchOutcome", "NoProcessableFilesError", "extract_files", "process_uploads"]
