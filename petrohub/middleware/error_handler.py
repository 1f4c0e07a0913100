"""Global error hierarchy, exception boundary middleware and FastAPI handlers.

Business failures are expected to travel as ``Result`` values; only
unanticipated errors reach the boundary. The boundary classifies them into a
small taxonomy and writes a camelCase JSON body: { statusCode, message, type }.

| error kind           | classes                          | status |
|----------------------|----------------------------------|--------|
| invalid argument     | ArgumentError, ValueError        | 400    |
| unauthorized access  | PermissionError, Unauthorized... | 401    |
| anything else        | Exception                        | 500    |

Only ``ApiError`` subclasses echo their own message to the client.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from petrohub.models.responses import ErrorResponse

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

VALIDATION_ERROR = "Validation Error"
AUTHORIZATION_ERROR = "Authorization Error"
SERVER_ERROR = "Server Error"

INVALID_ARGUMENT_MESSAGE = "Invalid argument"
UNAUTHORIZED_MESSAGE = "Unauthorized access"
SERVER_ERROR_MESSAGE = "An internal server error occurred"

ERROR_TYPES = {400: VALIDATION_ERROR, 401: AUTHORIZATION_ERROR, 500: SERVER_ERROR}


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class ApiError(Exception):
    """Base error for errors raised deliberately by the API.

    ``status_code`` must be one of 400, 401 or 500; ``error_type`` follows
    from it. Subclasses declaring any other status fail at class creation.
    """

    status_code: int = 500
    error_type: str = SERVER_ERROR
    message: str = SERVER_ERROR_MESSAGE

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        if cls.status_code not in ERROR_TYPES:
            raise TypeError(
                f"{cls.__name__}.status_code must be one of {sorted(ERROR_TYPES)}, "
                f"got {cls.status_code}"
            )
        cls.error_type = ERROR_TYPES[cls.status_code]

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.__class__.message
        super().__init__(self.message)


class ArgumentError(ApiError, ValueError):
    """An argument or payload failed validation."""

    status_code = 400
    message = INVALID_ARGUMENT_MESSAGE


class UnauthorizedAccessError(ApiError, PermissionError):
    """The caller may not perform the requested operation."""

    status_code = 401
    message = UNAUTHORIZED_MESSAGE


class UnsupportedApiVersionError(ArgumentError):
    """The requested API version is not served."""

    message = "Unsupported API version"


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify_exception(exc: BaseException) -> ErrorResponse:
    """Map an exception to the error body the client receives.

    Only ``ApiError`` subclasses with a 400 or 401 status carry their own
    message. Other ``ValueError``/``PermissionError`` instances get fixed
    texts, and a pydantic ``ValidationError`` raised outside request parsing
    is a server fault.
    """
    if isinstance(exc, ApiError):
        message = SERVER_ERROR_MESSAGE if exc.status_code == 500 else exc.message
        return ErrorResponse(status_code=exc.status_code, message=message, type=exc.error_type)
    if isinstance(exc, PydanticValidationError):
        return ErrorResponse(status_code=500, message=SERVER_ERROR_MESSAGE, type=SERVER_ERROR)
    if isinstance(exc, ValueError):
        return ErrorResponse(status_code=400, message=INVALID_ARGUMENT_MESSAGE, type=VALIDATION_ERROR)
    if isinstance(exc, PermissionError):
        return ErrorResponse(status_code=401, message=UNAUTHORIZED_MESSAGE, type=AUTHORIZATION_ERROR)
    return ErrorResponse(status_code=500, message=SERVER_ERROR_MESSAGE, type=SERVER_ERROR)


def error_json(error: ErrorResponse) -> JSONResponse:
    """Build the camelCase JSON response for an error body."""
    return JSONResponse(
        status_code=error.status_code,
        content=error.model_dump(by_alias=True),
    )


# ---------------------------------------------------------------------------
# Exception boundary
# ---------------------------------------------------------------------------


class GlobalExceptionMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that converts any uncaught exception into JSON.

    Must be the outermost application middleware so failures raised by the
    culture resolver, version negotiation, routing and handlers all pass
    through it.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception(
                "An unhandled exception occurred",
                extra={
                    "request_id": getattr(request.state, "request_id", None),
                    "path": request.url.path,
                    "error_reason": repr(exc),
                },
            )
            response = error_json(classify_exception(exc))
            request_id = getattr(request.state, "request_id", None)
            if request_id:
                response.headers[REQUEST_ID_HEADER] = request_id
            return response


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI / Pydantic RequestValidationError as a 400 validation error."""
    problems = [
        f"{' -> '.join(str(loc) for loc in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    logger.info("Request validation failed: %s", "; ".join(problems))
    return error_json(
        ErrorResponse(
            status_code=400,
            message="; ".join(problems) or "Invalid request",
            type=VALIDATION_ERROR,
        )
    )


def register_error_handlers(app: FastAPI) -> None:
    """Wire up exception handlers that run inside the routing layer."""
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
