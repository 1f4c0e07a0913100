"""Database engine creation and the per-request session dependency."""

from __future__ import annotations

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from petrohub.data.context import ApplicationDbContext

logger = logging.getLogger(__name__)


def get_connect_args(db_url: str) -> dict:
    """Return database-specific connection arguments."""
    if db_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def _safe_url(db_url: str) -> str:
    if "@" in db_url:
        return db_url.split("@")[0].rsplit(":", 1)[0] + ":***@..."
    return db_url


def create_db_engine(db_url: str, echo: bool = False) -> Engine:
    """Create the SQLAlchemy engine for ``db_url``.

    In-memory SQLite shares a single connection so every session sees the
    same database.
    """
    kwargs: dict = {"connect_args": get_connect_args(db_url), "echo": echo}
    in_memory = db_url.startswith("sqlite") and (
        ":memory:" in db_url or db_url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:")
    )
    if in_memory:
        kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    logger.info("Using database: %s", _safe_url(db_url))
    return create_engine(db_url, **kwargs)


def get_db_context(request: Request) -> ApplicationDbContext:
    """FastAPI dependency returning the application's data context."""
    return request.app.state.db_context


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a session from the application's data context, closing it afterwards."""
    with get_db_context(request).session() as session:
        yield session
