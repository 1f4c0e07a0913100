"""Public models for the API service."""

from petrohub.models.responses import (
    ApiDataResponse,
    ApiResponse,
    CultureReport,
    ErrorResponse,
    HealthReport,
)
from petrohub.models.result import Failure, Result, Success, failure, from_errors, success

__all__ = [
    "ApiDataResponse",
    "ApiResponse",
    "CultureReport",
    "ErrorResponse",
    "Failure",
    "HealthReport",
    "Result",
    "Success",
    "failure",
    "from_errors",
    "success",
]
