"""Localization: request culture state and the shared message catalog."""

from petrohub.localization.culture import (
    DEFAULT_CULTURE,
    CultureNotFoundError,
    get_current_culture,
    reset_current_culture,
    resolve_culture,
    set_current_culture,
)
from petrohub.localization.localizer import StringLocalizer, load_catalog

__all__ = [
    "DEFAULT_CULTURE",
    "CultureNotFoundError",
    "StringLocalizer",
    "get_current_culture",
    "load_catalog",
    "reset_current_culture",
    "resolve_culture",
    "set_current_culture",
]
