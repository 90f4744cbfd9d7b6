from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from zendesk_mcp.core.context import request_scope
from zendesk_mcp.core.observability import log_event

REQUEST_ID_HEADER = "X-Request-Id"
CORRELATION_ID_HEADER = "X-Correlation-Id"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Ensure every request has a request_id.
    - Accepts X-Request-Id or X-Correlation-Id.
    - Generates UUID4 hex when absent/blank.
    - Binds it to the request scope so Zendesk call logs carry it.
    - Stores on request.state.request_id and echoes X-Request-Id on responses.
    """

    async def dispatch(self, request: Request, call_next):
        candidate = (
            request.headers.get(REQUEST_ID_HEADER)
            or request.headers.get(CORRELATION_ID_HEADER)
            or ""
        ).strip()

        with request_scope(candidate or None) as rid:
            request.state.request_id = rid

            start = time.perf_counter()
            response: Response | None = None
            status_code: int | None = None
            try:
                response = await call_next(request)
                status_code = response.status_code
                return response
            finally:
                duration_ms = int((time.perf_counter() - start) * 1000)
                if response is not None:
                    response.headers.setdefault(REQUEST_ID_HEADER, rid)
                    response.headers.setdefault("X-Request-Duration-Ms", str(duration_ms))

                # Log even on unhandled errors
                log_event(
                    "http_request",
                    method=request.method.upper(),
                    path=request.url.path,
                    status=status_code if status_code is not None else "exception",
                    duration_ms=duration_ms,
                )


__all__ = ["RequestIdMiddleware", "REQUEST_ID_HEADER", "CORRELATION_ID_HEADER"]
