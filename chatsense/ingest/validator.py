"""Upload validation: file type and size checks.

Rejections are not errors. The caller gets the rejected names back and keeps
processing the rest of the batch.
"""

from __future__ import annotations

from collections.abc import Iterable

from chatsense.config import ALLOWED_CONTENT_TYPES, ALLOWED_EXTENSIONS, MAX_UPLOAD_BYTES
from chatsense.ingest.types import UploadedFile
from chatsense.observability.logging import get_logger
from chatsense.observability.telemetry import counter

logger = get_logger(__name__)


def _base_content_type(content_type: str | None) -> str:
    # "text/html; charset=utf-8" -> "text/html"
    return (content_type or "").split(";", 1)[0].strip().lower()


def is_valid_upload(file: UploadedFile, max_bytes: int = MAX_UPLOAD_BYTES) -> bool:
    """
    Check whether a file looks like a chat export we can parse.

    A file passes when its extension is .json/.html (any case) or its declared
    MIME type is application/json/text/html, and its size is at most max_bytes.
    """
    has_valid_type = (
        file.extension in ALLOWED_EXTENSIONS
        or _base_content_type(file.content_type) in ALLOWED_CONTENT_TYPES
    )
    if not has_valid_type:
        return False

    return file.size <= max_bytes


def partition_uploads(
    files: Iterable[UploadedFile],
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> tuple[list[UploadedFile], list[str]]:
    """
    Split a batch into (valid files, rejected file names), preserving order.

    Side Effects:
        - Logs a warning and bumps ingest.rejected when any file is rejected
    """
    valid: list[UploadedFile] = []
    rejected: list[str] = []

    for file in files:
        if is_valid_upload(file, max_bytes=max_bytes):
            valid.append(file)
        else:
            rejected.append(file.name)

    if rejected:
        counter("ingest.rejected", len(rejected))
        logger.warning(
            "Skipped %d file(s) with unsupported type or size: %s", len(rejected), rejected
        )

    return valid, rejected
