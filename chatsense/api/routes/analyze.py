"""Analysis endpoints: upload exports, or re-analyze already extracted files."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from starlette.concurrency import run_in_threadpool

from chatsense.api.deps import get_model_factory, get_settings_store
from chatsense.api.errors import to_http_error
from chatsense.api.models import (
    AnalyzeContentsRequest,
    AnalyzeResponse,
    ProcessedFileModel,
    SkippedFileModel,
)
from chatsense.config import MAX_FILES_PER_BATCH, MAX_UPLOAD_BYTES, MIN_CONTENT_CHARS
from chatsense.ingest.aggregator import analyze_contents, select_usable
from chatsense.ingest.service import process_uploads
from chatsense.ingest.types import ProcessedFile, UploadedFile
from chatsense.llm.client import AnalysisClient, ModelFactory
from chatsense.observability.logging import get_logger
from chatsense.storage.settings_store import SettingsStore

router = APIRouter(prefix="/api", tags=["analyze"])
logger = get_logger(__name__)


async def read_upload(upload: UploadFile, max_bytes: int) -> UploadedFile:
    """
    Read an uploaded file, never holding more than max_bytes + 1 bytes.

    A file whose reported size is over the limit is not read at all. Otherwise
    reading stops one byte past the limit, which still fails validation.
    """
    name = upload.filename or ""
    content_type = upload.content_type or ""
    if upload.size is not None and upload.size > max_bytes:
        logger.info("Not reading %s: %d bytes exceeds %d", name, upload.size, max_bytes)
        return UploadedFile(name, b"", content_type, declared_size=upload.size)

    data = await upload.read(max_bytes + 1)
    return UploadedFile(name, data, content_type)


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_uploads(
    files: list[UploadFile] = File(...),
    store: SettingsStore = Depends(get_settings_store),
    model_factory: ModelFactory = Depends(get_model_factory),
) -> AnalyzeResponse:
    """
    Analyze uploaded Telegram exports (.json / .html, up to 10 MB each).

    Files that fail validation or extraction are listed under `skipped`; the
    rest are analyzed together in upload order.
    """
    if len(files) > MAX_FILES_PER_BATCH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Too many files. Maximum {MAX_FILES_PER_BATCH} per upload.",
        )

    uploads = [await read_upload(upload, MAX_UPLOAD_BYTES) for upload in files]
    logger.info("Analyzing batch of %d uploaded file(s)", len(uploads))

    client = AnalysisClient(store.load(), model_factory=model_factory)
    try:
        outcome = await run_in_threadpool(
            process_uploads, uploads, client, max_bytes=MAX_UPLOAD_BYTES
        )
    except Exception as e:
        raise to_http_error(e) from e

    return AnalyzeResponse(
        analysis=outcome.analysis,
        files=[ProcessedFileModel(name=f.name, content=f.content) for f in outcome.processed],
        skipped=[
            SkippedFileModel(name=s.name, kind=s.kind.value, reason=s.reason)
            for s in outcome.skipped
        ],
    )


@router.post("/analyze/contents", response_model=AnalyzeResponse)
async def analyze_processed_files(
    request: AnalyzeContentsRequest,
    store: SettingsStore = Depends(get_settings_store),
    model_factory: ModelFactory = Depends(get_model_factory),
) -> AnalyzeResponse:
    """Re-run the analysis over files returned by a previous /api/analyze call."""
    usable, too_short = select_usable(
        [ProcessedFile(f.name, f.content) for f in request.files], min_chars=MIN_CONTENT_CHARS
    )

    client = AnalysisClient(store.load(), model_factory=model_factory)
    try:
        client.ensure_configured()
        analysis = await run_in_threadpool(
            analyze_contents, client, [f.content for f in usable]
        )
    except Exception as e:
        raise to_http_error(e) from e

    return AnalyzeResponse(
        analysis=analysis,
        files=[ProcessedFileModel(name=f.name, content=f.content) for f in usable],
        skipped=[
            SkippedFileModel(name=s.name, kind=s.kind.value, reason=s.reason) for s in too_short
        ],
    )
