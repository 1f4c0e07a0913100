"""Domain building blocks: entity base classes and capabilities."""

from petrohub.domain.common import (
    Auditable,
    AuditableEntity,
    Base,
    BaseEntity,
    SoftDelete,
    is_auditable,
    is_soft_deletable,
)

__all__ = [
    "Auditable",
    "AuditableEntity",
    "Base",
    "BaseEntity",
    "SoftDelete",
    "is_auditable",
    "is_soft_deletable",
]
