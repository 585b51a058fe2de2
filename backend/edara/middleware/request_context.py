# backend/edara/middleware/request_context.py
from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_request_id: ContextVar[Optional[str]] = ContextVar("edara_request_id", default=None)

log = logging.getLogger("edara.request")


def get_request_id() -> Optional[str]:
    return _request_id.get()


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Per-request id plus one access log line.

    The id is taken from X-Request-ID when the caller sends one, otherwise a
    uuid4 is minted. It is echoed back on the response and visible to every
    log record emitted while the request runs (see logging_config).
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = (request.headers.get(REQUEST_ID_HEADER) or "").strip() or str(uuid.uuid4())
        request.state.request_id = rid
        token = _request_id.set(rid)

        t0 = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            log.info(
                "%s %s -> %s",
                request.method,
                request.url.path,
                status_code,
                extra={
                    "http_method": request.method,
                    "http_path": request.url.path,
                    "status_code": status_code,
                    "latency_ms": int((time.perf_counter() - t0) * 1000),
                },
            )
            _request_id.reset(token)
