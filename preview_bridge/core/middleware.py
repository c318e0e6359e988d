# preview_bridge/core/middleware.py
from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from preview_bridge.core.request_context import (
    PREVIEW_HEADER,
    bind_preview,
    request_id_ctx,
    unbind_preview,
)

log = logging.getLogger("preview_bridge.request")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_ctx.set(request_id)
        start = time.perf_counter()

        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            duration_ms = int((time.perf_counter() - start) * 1000)
            log.info(
                "request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_ms": duration_ms,
                },
            )
            request_id_ctx.reset(token)


class PreviewMiddleware(BaseHTTPMiddleware):
    """
    Copies the X-PREVIEW header of an inbound request into the request context,
    where outbound clients built by preview_bridge.clients.preview pick it up.

    Requests without the header (or with an empty one) pass through untouched.
    The response is never inspected.
    """

    async def dispatch(self, request: Request, call_next):
        value = request.headers.get(PREVIEW_HEADER)
        if not value:
            return await call_next(request)

        request.state.preview = value
        token = bind_preview(value)
        try:
            return await call_next(request)
        finally:
            unbind_preview(token)
