"""Message catalog lookup keyed by culture and resource key.

The catalog is a YAML file mapping culture tags to key/text pairs::

    cultures:
      en-US:
        Success: Operation completed successfully
      ar:
        Success: ...

Lookups fall back from the exact culture to its bare language, then to the
default culture, and finally to the key itself.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from petrohub.localization.culture import DEFAULT_CULTURE, get_current_culture

logger = logging.getLogger(__name__)


def load_catalog(yaml_path: str) -> dict[str, dict[str, str]]:
    """Parse a message catalog YAML file.

    Returns an empty catalog (every lookup echoes its key) when the file is
    missing or malformed.
    """
    path = Path(yaml_path)

    if not path.exists():
        logger.warning("Message catalog not found at %s; lookups will return keys", yaml_path)
        return {}

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Failed to parse message catalog at %s: %s", yaml_path, exc)
        return {}

    if not isinstance(raw, dict) or not isinstance(raw.get("cultures"), dict):
        logger.warning("Message catalog missing 'cultures' key; lookups will return keys")
        return {}

    catalog: dict[str, dict[str, str]] = {}
    for culture, messages in raw["cultures"].items():
        if not isinstance(messages, dict):
            logger.error("Messages for culture '%s' are not a mapping, skipping", culture)
            continue
        catalog[str(culture)] = {str(k): str(v) for k, v in messages.items()}
    return catalog


class StringLocalizer:
    """Looks up localized strings for the current (or an explicit) culture."""

    def __init__(
        self,
        catalog: dict[str, dict[str, str]],
        default_culture: str = DEFAULT_CULTURE,
    ) -> None:
        self._catalog = catalog
        self._default_culture = default_culture

    @classmethod
    def from_file(cls, yaml_path: str, default_culture: str = DEFAULT_CULTURE) -> StringLocalizer:
        return cls(load_catalog(yaml_path), default_culture=default_culture)

    @property
    def cultures(self) -> list[str]:
        return list(self._catalog.keys())

    def __getitem__(self, key: str) -> str:
        return self.get(key)

    def get(self, key: str, culture: str | None = None) -> str:
        """Return the text for ``key`` in ``culture`` (default: the current culture)."""
        culture = culture or get_current_culture()
        for candidate in self._fallback_chain(culture):
            messages = self._catalog.get(candidate)
            if messages and key in messages:
                return messages[key]
        logger.debug("No localized text for key '%s' in culture '%s'", key, culture)
        return key

    def _fallback_chain(self, culture: str) -> list[str]:
        chain = [culture]
        language = culture.split("-", 1)[0]
        if language != culture:
            chain.append(language)
        if self._default_culture not in chain:
            chain.append(self._default_culture)
        return chain
