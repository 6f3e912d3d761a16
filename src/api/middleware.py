"""Middleware for request processing and observability."""

from typing import Optional
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


def parse_accept_language(header: Optional[str]) -> Optional[str]:
    """Return the first language tag of an Accept-Language header.

    Quality values are ignored. Tags are normalized to ``lang-REGION``
    casing, so ``zh-cn;q=0.9`` becomes ``zh-CN``.
    """
    if not header:
        return None
    first = header.split(",")[0].split(";")[0].strip()
    if not first or first == "*":
        return None
    lang, _, region = first.partition("-")
    return f"{lang.lower()}-{region.upper()}" if region else lang.lower()


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to add correlation ID and request language to every request.

    - Generates UUID4 per request (or uses X-Correlation-Id header if present)
    - Stores correlation_id and language in request.state
    - Binds both to structlog context for all subsequent logging
    - Adds X-Correlation-Id response header
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process request with correlation ID tracking."""
        correlation_id = request.headers.get("X-Correlation-Id", str(uuid4()))
        language = parse_accept_language(request.headers.get("Accept-Language"))

        request.state.correlation_id = correlation_id
        request.state.language = language

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=correlation_id, language=language)

        response = await call_next(request)

        response.headers["X-Correlation-Id"] = correlation_id

        return response
