"""Operation outcome values handed from handlers to the response mapper.

A ``Result`` is either a ``Success`` carrying an optional payload or a
``Failure`` carrying an error message and/or a list of error strings.  The two
variants share the same read-only attributes (``is_success``, ``data``,
``error_message``, ``errors``) so the mapper can consume either without
``isinstance`` checks, but neither derives from the other.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome. ``data`` is ``None`` for payload-free results."""

    data: T | None = None

    @property
    def is_success(self) -> bool:
        return True

    @property
    def error_message(self) -> None:
        return None

    @property
    def errors(self) -> tuple[str, ...]:
        return ()


@dataclass(frozen=True)
class Failure:
    """Failed outcome with a message, a list of errors, or both."""

    error_message: str | None = None
    errors: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "errors", _error_tuple(self.errors))
        if not self.error_message and not self.errors:
            raise ValueError("A failed result needs an error message or at least one error")

    @property
    def is_success(self) -> bool:
        return False

    @property
    def data(self) -> None:
        return None


Result = Union[Success[T], Failure]


def _error_tuple(errors: Iterable[str] | str) -> tuple[str, ...]:
    """Freeze ``errors``; a bare string is one error, not a sequence of characters."""
    if isinstance(errors, str):
        return (errors,)
    return tuple(errors)


def success(data: T | None = None) -> Success[T]:
    """Build a successful result, optionally carrying ``data``."""
    return Success(data)


def failure(message: str | None = None, errors: Iterable[str] = ()) -> Failure:
    """Build a failed result.

    Raises
    ------
    ValueError
        If neither ``message`` nor any ``errors`` are given.
    """
    return Failure(error_message=message, errors=_error_tuple(errors))


def from_errors(errors: Iterable[str]) -> Result:
    """Success when ``errors`` is empty, otherwise a failure listing them."""
    collected = _error_tuple(errors)
    if not collected:
        return Success()
    return Failure(errors=collected)
