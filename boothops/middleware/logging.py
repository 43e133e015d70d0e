"""Logging middleware for request tracking."""
import time
import uuid
from typing import Callable, Mapping, Optional

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from boothops.core.constants import ADMIN_TOKEN_QUERY_PARAM

logger = structlog.get_logger(__name__)

REDACTED = "***"


def redact_query_params(query_params: Mapping) -> Optional[str]:
    """Render query params for the log line with the admin token masked."""
    if not query_params:
        return None
    parts = []
    for key, value in query_params.items():
        if key == ADMIN_TOKEN_QUERY_PARAM:
            value = REDACTED
        parts.append(f"{key}={value}")
    return "&".join(parts)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with a request ID bound to the structlog context."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_host=request.client.host if request.client else None,
        )

        start_time = time.time()
        logger.info(
            "request_started",
            method=request.method,
            path=request.url.path,
            query_params=redact_query_params(request.query_params),
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            duration = time.time() - start_time
            logger.error(
                "request_failed",
                exception=str(exc),
                exception_type=type(exc).__name__,
                duration_ms=round(duration * 1000, 2),
            )
            raise

        duration = time.time() - start_time
        response.headers["X-Request-ID"] = request_id

        logger.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )
        return response
