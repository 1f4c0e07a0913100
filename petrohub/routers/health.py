"""Health endpoints.

- GET /api/v{version}/health: service status, environment and version
- GET /api/v{version}/health/culture: culture resolved for the request
- GET /health: infrastructure probe; 200 "Healthy" when the database answers,
  503 "Unhealthy" otherwise
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from petrohub.data.context import ApplicationDbContext
from petrohub.data.database import get_db_context
from petrohub.localization.culture import get_current_culture
from petrohub.localization.localizer import StringLocalizer
from petrohub.models.responses import CultureReport, HealthReport
from petrohub.routers.base import get_localizer

if TYPE_CHECKING:
    from petrohub.config.settings import ApiSettings


def create_health_router(*, settings: ApiSettings) -> APIRouter:
    """Factory that creates the versioned health controller router."""

    health_router = APIRouter(prefix="/health", tags=["health"])

    @health_router.get("")
    async def health() -> dict:
        """Service status."""
        return HealthReport(
            status="Healthy",
            timestamp=datetime.now(timezone.utc),
            environment=settings.environment,
            version=settings.app_version,
        ).model_dump(by_alias=True, mode="json")

    @health_router.get("/culture")
    async def culture(localizer: StringLocalizer = Depends(get_localizer)) -> dict:
        """Culture resolved for this request and a message localized in it."""
        current = get_current_culture()
        return CultureReport(
            current_culture=current,
            current_ui_culture=current,
            localized_message=localizer["Success"],
        ).model_dump(by_alias=True, mode="json")

    return health_router


def create_probe_router() -> APIRouter:
    """Factory that creates the unversioned infrastructure health probe."""

    probe_router = APIRouter(tags=["health"])

    @probe_router.get("/health", response_class=PlainTextResponse)
    def probe(db_context: ApplicationDbContext = Depends(get_db_context)) -> PlainTextResponse:
        """Database-backed liveness check."""
        if db_context.ping():
            return PlainTextResponse("Healthy", status_code=200)
        return PlainTextResponse("Unhealthy", status_code=503)

    return probe_router
