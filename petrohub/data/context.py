"""Application data context: sessions plus audit and soft-delete interception.

The context is built with an explicit list of entity types. Each type states
its capabilities by inheriting ``Auditable`` and/or ``SoftDelete``; only the
listed types are stamped or filtered.

- Before every flush, new auditable entities get ``created_at``/``created_by``
  and modified ones get ``updated_at``/``updated_by``.
- Every ORM select excludes soft-deleted rows of the listed ``SoftDelete``
  types unless the statement carries ``include_deleted=True``.

Soft-delete filtering happens in SQL; an entity already in a session's
identity map is returned by ``Session.get`` without a query.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Protocol, TypeVar

from sqlalchemy import event, false, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import ORMExecuteState, Session, sessionmaker, with_loader_criteria

from petrohub.domain.common import Base, is_auditable, is_soft_deletable
from petrohub.middleware.error_handler import ArgumentError

logger = logging.getLogger(__name__)

INCLUDE_DELETED = "include_deleted"

S = TypeVar("S")


class CurrentActorProvider(Protocol):
    """Supplies the identity of the user acting in the current request."""

    def get_current_actor(self) -> str | None: ...


class AnonymousActorProvider:
    """Actor provider for deployments without an authentication scheme."""

    def get_current_actor(self) -> str | None:
        return None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def include_deleted(statement: S) -> S:
    """Mark ``statement`` so soft-deleted rows are returned as well."""
    return statement.execution_options(**{INCLUDE_DELETED: True})  # type: ignore[attr-defined]


class ApplicationDbContext:
    """Session factory with audit stamping and soft-delete read filters.

    Args:
        engine: SQLAlchemy engine to bind sessions to.
        entities: Every persisted entity type the context manages.
        actor_provider: Source of the acting user for ``*_by`` audit fields.
        clock: Returns the current UTC time; injectable for tests.
    """

    def __init__(
        self,
        engine: Engine,
        *,
        entities: Iterable[type],
        actor_provider: CurrentActorProvider,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._engine = engine
        self._entities: tuple[type, ...] = tuple(entities)
        self._actor_provider = actor_provider
        self._clock = clock

        self._auditable_types = tuple(e for e in self._entities if is_auditable(e))
        self._soft_delete_types = tuple(e for e in self._entities if is_soft_deletable(e))

        self._session_factory = sessionmaker(bind=engine, autoflush=False)
        event.listen(self._session_factory, "before_flush", self._stamp_auditable_entities)
        event.listen(self._session_factory, "do_orm_execute", self._apply_soft_delete_filters)

        logger.info(
            "Data context ready: %d entity types (%d auditable, %d soft-deletable)",
            len(self._entities),
            len(self._auditable_types),
            len(self._soft_delete_types),
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def soft_delete_types(self) -> tuple[type, ...]:
        return self._soft_delete_types

    def create_schema(self) -> None:
        """Create the tables of all registered entity types that do not exist yet."""
        tables = [entity.__table__ for entity in self._entities]  # type: ignore[attr-defined]
        Base.metadata.create_all(bind=self._engine, tables=tables, checkfirst=True)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Open a session that is closed when the block exits."""
        session = self._session_factory()
        try:
            yield session
        finally:
            session.close()

    def save_changes(self, session: Session) -> int:
        """Commit pending changes and return the number of entities written.

        Raises
        ------
        SQLAlchemyError
            On any storage failure; the session is rolled back first.
        """
        affected = (
            len(session.new)
            + len(session.deleted)
            + sum(1 for entity in session.dirty if session.is_modified(entity))
        )
        try:
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Failed to save changes", extra={"affected": affected})
            raise
        logger.debug("Saved changes", extra={"affected": affected})
        return affected

    def soft_delete(self, session: Session, entity: Any) -> None:
        """Mark ``entity`` as deleted; persisted by the next ``save_changes``."""
        if not isinstance(entity, self._soft_delete_types):
            raise ArgumentError(
                f"{type(entity).__name__} is not a registered soft-deletable entity"
            )
        entity.is_deleted = True
        entity.deleted_at = self._clock()
        entity.deleted_by = self._actor_provider.get_current_actor()
        session.add(entity)

    def ping(self) -> bool:
        """Return True when the database answers a trivial query."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.warning("Database health check failed: %s", exc)
            return False
        return True

    # ------------------------------------------------------------------
    # Session event hooks
    # ------------------------------------------------------------------

    def _stamp_auditable_entities(self, session: Session, _flush_context: Any, _instances: Any) -> None:
        if not self._auditable_types:
            return
        now = self._clock()
        actor = self._actor_provider.get_current_actor()

        for entity in session.new:
            if isinstance(entity, self._auditable_types):
                entity.created_at = now
                if actor is not None:
                    entity.created_by = actor

        for entity in session.dirty:
            if isinstance(entity, self._auditable_types) and session.is_modified(entity):
                entity.updated_at = now
                if actor is not None:
                    entity.updated_by = actor

    def _apply_soft_delete_filters(self, execute_state: ORMExecuteState) -> None:
        if (
            not self._soft_delete_types
            or not execute_state.is_select
            or execute_state.is_column_load
            or execute_state.is_relationship_load
            or execute_state.execution_options.get(INCLUDE_DELETED, False)
        ):
            return
        execute_state.statement = execute_state.statement.options(
            *(
                with_loader_criteria(entity, lambda cls: cls.is_deleted == false(), include_aliases=True)
                for entity in self._soft_delete_types
            )
        )
