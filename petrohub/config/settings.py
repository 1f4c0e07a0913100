"""Pydantic Settings for the API service.

All environment variables use the PETROHUB_ prefix.
Example: PETROHUB_ENVIRONMENT=Development, PETROHUB_DATABASE_URL=sqlite:///./dev.db
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

DEFAULT_RESOURCES_PATH = str(
    Path(__file__).resolve().parent.parent / "localization" / "resources" / "shared_resources.yaml"
)


class ApiSettings(BaseSettings):
    """API service configuration validated from environment variables."""

    # Service
    title: str = "PetroHub API"
    environment: str = "Production"
    app_version: str = "1.0.0"
    log_level: str = "INFO"
    docs_enabled: bool | None = None  # None = only in Development

    # Persistence
    database_url: str = "sqlite:///./petrohub.db"

    # Localization
    default_culture: str = "en-US"
    supported_cultures: list[str] = Field(default_factory=lambda: ["en-US", "ar", "hi"])
    resources_path: str = DEFAULT_RESOURCES_PATH

    # API versioning
    default_api_version: str = "1.0"
    supported_api_versions: list[str] = Field(default_factory=lambda: ["1.0"])

    # CORS
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    model_config = {"env_prefix": "PETROHUB_"}

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        if value.upper() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level '{value}'")
        return value.upper()

    @model_validator(mode="after")
    def _default_culture_is_supported(self) -> "ApiSettings":
        if self.default_culture not in self.supported_cultures:
            raise ValueError(
                f"default_culture '{self.default_culture}' is not one of "
                f"{self.supported_cultures}"
            )
        return self

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def show_docs(self) -> bool:
        """Swagger UI is served in Development unless explicitly configured."""
        if self.docs_enabled is None:
            return self.is_development
        return self.docs_enabled
