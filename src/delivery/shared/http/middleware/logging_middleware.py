from __future__ import annotations

import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from delivery.shared.logging import bind_request_context, get_logger

log = get_logger("http")


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Structured access logs.
    - One line per request with latency, method, path, status.
    - request_id is already bound by RequestIdMiddleware.
    """
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        bind_request_context(
            path=request.url.path,
            method=request.method,
            client_ip=request.client.host if request.client else None,
        )
        status_code: Optional[int] = None
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            dur_ms = round((time.perf_counter() - start) * 1000.0, 2)
            log.info(
                "http_access",
                method=request.method,
                path=request.url.path,
                status_code=status_code or 500,
                duration_ms=dur_ms,
            )
