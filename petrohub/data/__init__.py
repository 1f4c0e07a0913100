"""Persistence layer: engine setup and the application data context."""

from petrohub.data.context import (
    INCLUDE_DELETED,
    AnonymousActorProvider,
    ApplicationDbContext,
    CurrentActorProvider,
    include_deleted,
    utc_now,
)
from petrohub.data.database import create_db_engine, get_db, get_db_context

__all__ = [
    "INCLUDE_DELETED",
    "AnonymousActorProvider",
    "ApplicationDbContext",
    "CurrentActorProvider",
    "create_db_engine",
    "get_db",
    "get_db_context",
    "include_deleted",
    "utc_now",
]
