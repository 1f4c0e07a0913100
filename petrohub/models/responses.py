"""API response envelope models.

Business responses: { success: bool, message: str, errors: [str], data?: T }
Error responses from the exception boundary: { statusCode, message, type }
"""

from __future__ import annotations

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiResponse(BaseModel):
    """JSON envelope for payload-free API responses."""

    success: bool
    message: str = ""
    errors: list[str] = Field(default_factory=list)


class ApiDataResponse(ApiResponse, Generic[T]):
    """JSON envelope for API responses carrying a payload."""

    data: T | None = None


class ErrorResponse(BaseModel):
    """Body written by the global exception boundary.

    Serialized with camelCase keys: ``statusCode``, ``message``, ``type``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_code: int
    message: str
    type: str


class HealthReport(BaseModel):
    """Payload of the versioned health endpoint (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str
    timestamp: datetime
    environment: str
    version: str


class CultureReport(BaseModel):
    """Payload of the culture diagnostics endpoint (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_culture: str
    current_ui_culture: str = Field(alias="currentUICulture")
    localized_message: str
