"""Rate limiting middleware for the ChatSense API

Every analysis and chat request spends the user's Gemini quota, so requests
are capped per client IP.

- X-Forwarded-For is trusted only when CHATSENSE_TRUST_PROXY=true (behind a known proxy)
- Buckets live in TTLCaches so idle IPs are evicted automatically
"""

from __future__ import annotations

import ipaddress
import os
import time
from collections.abc import Callable
from typing import Any

from cachetools import TTLCache
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from chatsense.config import RATE_LIMIT_MAX_IPS, RATE_LIMIT_RPH, RATE_LIMIT_RPM
from chatsense.observability.telemetry import log_event

EXEMPT_PATHS = ("/health", "/")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Per-IP rate limiting (requests per minute and per hour).

    For multi-instance deployments this would need a shared backend such as Redis.
    """

    def __init__(
        self,
        app: Any,
        requests_per_minute: int = RATE_LIMIT_RPM,
        requests_per_hour: int = RATE_LIMIT_RPH,
    ) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.requests_per_hour = requests_per_hour

        # Request tracking: {ip: [timestamp, ...]}
        self.minute_buckets: TTLCache[str, list[float]] = TTLCache(
            maxsize=RATE_LIMIT_MAX_IPS, ttl=120
        )
        self.hour_buckets: TTLCache[str, list[float]] = TTLCache(
            maxsize=RATE_LIMIT_MAX_IPS, ttl=7200
        )

    def _is_valid_ip(self, ip_str: str) -> bool:
        try:
            ipaddress.ip_address(ip_str)
            return True
        except ValueError:
            return False

    def _trust_forwarded(self) -> bool:
        return os.getenv("CHATSENSE_TRUST_PROXY", "").lower() == "true"

    def _get_client_ip(self, request: Request) -> str:
        """Extract the client IP, honoring X-Forwarded-For only behind a trusted proxy."""
        if self._trust_forwarded():
            forwarded = request.headers.get("X-Forwarded-For")
            if forwarded:
                ip = forwarded.split(",")[0].strip()
                if self._is_valid_ip(ip):
                    return ip

        return request.client.host if request.client else "unknown"

    def _clean_old_requests(self, bucket: list[float], max_age_seconds: int) -> list[float]:
        """Remove requests older than max_age_seconds"""
        now = time.time()
        return [ts for ts in bucket if now - ts < max_age_seconds]

    def _limited(self, limit: str, max_requests: int, retry_after: int) -> JSONResponse:
        return JSONResponse(
            status_code=429,
            content={
                "detail": f"Rate limit exceeded. Maximum {max_requests} requests per {limit}.",
                "retry_after": retry_after,
            },
            headers={"Retry-After": str(retry_after)},
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Check rate limits before processing request."""
        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        client_ip = self._get_client_ip(request)

        minute_bucket = self._clean_old_requests(self.minute_buckets.get(client_ip, []), 60)
        hour_bucket = self._clean_old_requests(self.hour_buckets.get(client_ip, []), 3600)

        if len(minute_bucket) >= self.requests_per_minute:
            log_event("api.rate_limit.exceeded", limit="minute", count=len(minute_bucket))
            self.minute_buckets[client_ip] = minute_bucket
            return self._limited("minute", self.requests_per_minute, 60)

        if len(hour_bucket) >= self.requests_per_hour:
            log_event("api.rate_limit.exceeded", limit="hour", count=len(hour_bucket))
            self.hour_buckets[client_ip] = hour_bucket
            return self._limited("hour", self.requests_per_hour, 3600)

        now = time.time()
        minute_bucket.append(now)
        hour_bucket.append(now)
        self.minute_buckets[client_ip] = minute_bucket
        self.hour_buckets[client_ip] = hour_bucket

        response = await call_next(request)
        response.headers["X-RateLimit-Limit-Minute"] = str(self.requests_per_minute)
        response.headers["X-RateLimit-Remaining-Minute"] = str(
            self.requests_per_minute - len(minute_bucket)
        )
        response.headers["X-RateLimit-Limit-Hour"] = str(self.requests_per_hour)
        response.headers["X-RateLimit-Remaining-Hour"] = str(
            self.requests_per_hour - len(hour_bucket)
        )
        return response
