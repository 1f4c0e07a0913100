"""Middleware package — error boundary, culture resolution and request ID."""

from petrohub.middleware.culture import CultureMiddleware
from petrohub.middleware.error_handler import (
    ApiError,
    ArgumentError,
    GlobalExceptionMiddleware,
    UnauthorizedAccessError,
    UnsupportedApiVersionError,
    classify_exception,
    register_error_handlers,
)
from petrohub.middleware.request_id import RequestIdMiddleware

__all__ = [
    "ApiError",
    "ArgumentError",
    "CultureMiddleware",
    "GlobalExceptionMiddleware",
    "RequestIdMiddleware",
    "UnauthorizedAccessError",
    "UnsupportedApiVersionError",
    "classify_exception",
    "register_error_handlers",
]
