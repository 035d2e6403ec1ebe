"""FastAPI server for ChatSense"""

from __future__ import annotations

from typing import Any

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chatsense.api.middleware.rate_limit import RateLimitMiddleware
from chatsense.api.routes.analyze import router as analyze_router
from chatsense.api.routes.chat import router as chat_router
from chatsense.api.routes.health import router as health_router
from chatsense.api.routes.settings import router as settings_router
from chatsense.config import APP_VERSION, is_development
from chatsense.observability.logging import get_logger
from chatsense.observability.telemetry import counter, log_event

# Load environment variables from .env file
load_dotenv()

app = FastAPI(title="ChatSense API", version=APP_VERSION)

logger = get_logger(__name__)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Report which fields were invalid without echoing request content back.
    """
    logger.warning("Validation error on %s: %d error(s)", request.url.path, len(exc.errors()))
    counter("api.validation_errors")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Invalid request format. Please check your request and try again.",
            "error_count": len(exc.errors()),
            "invalid_fields": [str(err["loc"][-1]) for err in exc.errors()],
        },
    )


ALLOWED_ORIGINS: list[str] = []

# Local front-end dev servers
if is_development():
    ALLOWED_ORIGINS.extend(
        [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
)

app.add_middleware(RateLimitMiddleware)

app.include_router(health_router)
app.include_router(analyze_router)
app.include_router(chat_router)
app.include_router(settings_router)

log_event("api.startup", service="chatsense", version=APP_VERSION)


@app.get("/")
def root() -> dict[str, Any]:
    return {
        "service": "ChatSense API",
        "version": APP_VERSION,
        "status": "running",
        "endpoints": {
            "health": "/health",
            "analyze": "/api/analyze",
            "analyze_contents": "/api/analyze/contents",
            "chat": "/api/chat",
            "settings": "/api/settings",
            "models": "/api/settings/models",
            "theme": "/api/settings/theme",
        },
    }
