"""Request ID and access logging middleware.

Every request gets an ID: the client's ``X-Request-ID`` when it is a sane
token, a fresh UUID4 otherwise. The ID lives in ``request.state.request_id``
and in ``request_id_context`` for the JSON log formatter, and is echoed in the
``X-Request-ID`` response header. One access log line is written per request.
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from contextvars import ContextVar

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from petrohub.middleware.error_handler import REQUEST_ID_HEADER, classify_exception

logger = logging.getLogger(__name__)

_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

request_id_context: ContextVar[str | None] = ContextVar("request_id", default=None)


def request_id_from(request: Request) -> str:
    """Return the caller's request ID if usable, else a new UUID4."""
    incoming = request.headers.get(REQUEST_ID_HEADER.lower())
    if incoming and _VALID_REQUEST_ID.match(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that tags each request with an ID and logs it."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request_id_from(request)
        request.state.request_id = request_id
        token = request_id_context.set(request_id)
        started = time.perf_counter()
        status_code = 500
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
        except Exception as exc:
            # The outer boundary answers with the classified status.
            status_code = classify_exception(exc).status_code
            raise
        finally:
            logger.info(
                "%s %s -> %d",
                request.method,
                request.url.path,
                status_code,
                extra={
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
            request_id_context.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
