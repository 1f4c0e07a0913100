"""Configuration module — environment-driven settings."""

from petrohub.config.settings import ApiSettings

__all__ = [
    "ApiSettings",
]
