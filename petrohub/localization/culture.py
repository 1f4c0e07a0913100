"""Request-scoped culture state and culture tag resolution.

The active culture lives in a ``ContextVar`` so each request (and each task
spawned while serving it) sees its own value. Nothing here is process-global.
"""

from __future__ import annotations

from contextvars import ContextVar, Token

from babel import Locale, UnknownLocaleError

DEFAULT_CULTURE = "en-US"

_current_culture: ContextVar[str] = ContextVar("current_culture", default=DEFAULT_CULTURE)


class CultureNotFoundError(ValueError):
    """Raised when a culture tag does not name a known locale."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"Culture '{tag}' is not a recognised locale identifier")


def get_current_culture() -> str:
    """Return the culture of the request being served."""
    return _current_culture.get()


def set_current_culture(culture: str) -> Token[str]:
    """Make ``culture`` current; pass the returned token to ``reset_current_culture``."""
    return _current_culture.set(culture)


def reset_current_culture(token: Token[str]) -> None:
    _current_culture.reset(token)


def resolve_culture(tag: str) -> str:
    """Parse ``tag`` and return its canonical form (``en-US``, ``ar``, ``zh-Hant-TW``).

    Both ``-`` and ``_`` separators are accepted.

    Raises
    ------
    CultureNotFoundError
        If the tag is empty, malformed, or names no known locale.
    """
    cleaned = tag.strip().replace("_", "-")
    if not cleaned:
        raise CultureNotFoundError(tag)
    try:
        locale = Locale.parse(cleaned, sep="-")
    except (UnknownLocaleError, ValueError) as exc:
        raise CultureNotFoundError(tag) from exc
    parts = [locale.language]
    if locale.script:
        parts.append(locale.script)
    if locale.territory:
        parts.append(locale.territory)
    return "-".join(parts)
