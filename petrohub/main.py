"""FastAPI application entry point with lifespan management.

Startup: configure JSON logging, create missing tables for registered entities.
Shutdown: dispose of the database engine.

Request pipeline, outermost first:
exception boundary → request id → CORS → culture resolver → routing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from petrohub.config.settings import ApiSettings
from petrohub.data.context import AnonymousActorProvider, ApplicationDbContext, CurrentActorProvider
from petrohub.data.database import create_db_engine
from petrohub.localization.localizer import StringLocalizer
from petrohub.logging_config import configure_logging
from petrohub.middleware.culture import CultureMiddleware
from petrohub.middleware.error_handler import GlobalExceptionMiddleware, register_error_handlers
from petrohub.middleware.request_id import RequestIdMiddleware
from petrohub.routers.health import create_health_router, create_probe_router
from petrohub.versioning import ApiVersionResolver

logger = logging.getLogger(__name__)

VERSIONED_PREFIX = "/api/v{version}"
UNVERSIONED_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic."""
    settings: ApiSettings = app.state.settings
    db_context: ApplicationDbContext = app.state.db_context

    configure_logging(settings.log_level)
    logger.info(
        "Starting %s %s (%s)", settings.title, settings.app_version, settings.environment
    )

    db_context.create_schema()

    yield

    logger.info("Shutting down %s", settings.title)
    db_context.engine.dispose()


def create_app(
    settings: ApiSettings | None = None,
    *,
    entities: Iterable[type] = (),
    actor_provider: CurrentActorProvider | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Service settings; loaded from the environment when omitted.
        entities: Persisted entity types managed by the data context.
        actor_provider: Source of the acting user for audit fields. Defaults to
            ``AnonymousActorProvider`` since no authentication scheme is wired.
    """
    settings = settings or ApiSettings()

    app = FastAPI(
        title=settings.title,
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/swagger" if settings.show_docs else None,
        redoc_url=None,
        openapi_url="/swagger/v1/swagger.json" if settings.show_docs else None,
    )

    app.state.settings = settings
    app.state.localizer = StringLocalizer.from_file(
        settings.resources_path, default_culture=settings.default_culture
    )
    app.state.db_context = ApplicationDbContext(
        create_db_engine(settings.database_url),
        entities=entities,
        actor_provider=actor_provider or AnonymousActorProvider(),
    )

    # Register error handlers
    register_error_handlers(app)

    # Middleware (order: exception boundary → request_id → CORS → culture)
    # Note: Starlette middleware is applied in reverse order of add_middleware calls
    app.add_middleware(CultureMiddleware, default_culture=settings.default_culture)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(GlobalExceptionMiddleware)

    # Controllers, reachable by URL segment or by ?version= / X-Version
    version_resolver = ApiVersionResolver(
        settings.supported_api_versions, settings.default_api_version
    )
    health_router = create_health_router(settings=settings)
    app.include_router(
        health_router, prefix=VERSIONED_PREFIX, dependencies=[Depends(version_resolver)]
    )
    app.include_router(
        health_router,
        prefix=UNVERSIONED_PREFIX,
        dependencies=[Depends(version_resolver)],
        include_in_schema=False,
    )

    # Infrastructure health probe
    app.include_router(create_probe_router())

    return app


app = create_app()
