"""Declarative base and capability mixins shared by all persisted entities.

An entity opts into a capability by inheriting its mixin:

- ``Auditable``: creation/modification timestamps and actors, stamped on save
- ``SoftDelete``: logical deletion, hidden from default reads

Capabilities are honoured only for entity types registered with
``ApplicationDbContext``.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Boolean, Column, DateTime, Integer, String, false
from sqlalchemy.orm import declarative_base

Base: Any = declarative_base()


class BaseEntity(Base):
    """Abstract root entity with an integer primary key."""

    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True)


class Auditable:
    """Mixin adding creation/modification audit columns."""

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)
    created_by = Column(String(255), nullable=True)
    updated_by = Column(String(255), nullable=True)


class SoftDelete:
    """Mixin adding logical-deletion columns."""

    is_deleted = Column(Boolean, default=False, server_default=false(), nullable=False, index=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    deleted_by = Column(String(255), nullable=True)


class AuditableEntity(BaseEntity, Auditable):
    """Abstract base for persisted records that carry audit fields."""

    __abstract__ = True


def is_auditable(entity_type: type) -> bool:
    return issubclass(entity_type, Auditable)


def is_soft_deletable(entity_type: type) -> bool:
    return issubclass(entity_type, SoftDelete)
