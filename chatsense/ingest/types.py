"""
Module: types
Purpose: Shared domain types for the ingestion pipeline.

Leaf module with no internal dependencies so the validator, extractor,
aggregator and API routes can all import from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import Union


@dataclass(frozen=True)
class UploadedFile:
    """A file as received from the user, before validation."""

    name: str
    data: bytes
    content_type: str = ""
    # Size reported by the client when the body was not read
    declared_size: int | None = None

    @property
    def size(self) -> int:
        if self.declared_size is not None:
            return self.declared_size
        return len(self.data)

    @property
    def extension(self) -> str:
        return PurePath(self.name).suffix.lower()

    def decode(self) -> str:
        """Decode bytes as UTF-8 text, replacing undecodable sequences."""
        return self.data.decode("utf-8-sig", errors="replace")


@dataclass(frozen=True)
class ProcessedFile:
    """Extracted, newline-joined message lines of one export file."""

    name: str
    content: str


class FailureKind(str, Enum):
    """Why a file did not make it into the analysis."""

    INVALID = "invalid"  # Wrong extension/type or too large
    PARSE = "parse"  # Not valid JSON
    FORMAT = "format"  # JSON without a top-level message collection
    EXTRACTION = "extraction"  # HTML without any .message elements
    UNSUPPORTED = "unsupported"  # Extension has no parser
    TOO_SHORT = "too_short"  # Extracted text below the minimum length
    PROCESSING = "processing"  # Unexpected error while reading or extracting


@dataclass(frozen=True)
class SkippedFile:
    """A file dropped from a batch, with the reason reported back to the user."""

    name: str
    kind: FailureKind
    reason: str


# ---------------------------------------------------------------------------
# Extraction result (success-with-lines | failure-with-reason)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExtractionSuccess:
    lines: tuple[str, ...]

    ok = True

    @property
    def content(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class ExtractionFailure:
    kind: FailureKind
    reason: str

    ok = False


ExtractionResult = Union[ExtractionSuccess, ExtractionFailure]
