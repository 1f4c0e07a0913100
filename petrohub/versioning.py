"""API version negotiation.

The requested version is read from, in priority order:

1. the URL segment (``/api/v{version}/...``)
2. the ``version`` query parameter
3. the ``X-Version`` header

The first source that carries a value wins. With no source the configured
default applies. Versions are normalised to ``major.minor`` (``1`` -> ``1.0``).
"""

from __future__ import annotations

import logging
import re

from fastapi import Request

from petrohub.middleware.error_handler import UnsupportedApiVersionError

logger = logging.getLogger(__name__)

VERSION_QUERY_KEY = "version"
VERSION_HEADER = "x-version"

_VERSION_RE = re.compile(r"^v?(\d+)(?:\.(\d+))?$", re.IGNORECASE)


def normalize_version(raw: str) -> str:
    """Return ``raw`` as ``major.minor``.

    Raises
    ------
    UnsupportedApiVersionError
        If ``raw`` is not a numeric version.
    """
    match = _VERSION_RE.match(raw.strip())
    if not match:
        raise UnsupportedApiVersionError(f"API version '{raw}' is not a valid version")
    major, minor = match.group(1), match.group(2) or "0"
    return f"{int(major)}.{int(minor)}"


def requested_version(request: Request) -> str | None:
    """Return the raw version string supplied by the client, if any."""
    for candidate in (
        request.path_params.get("version"),
        request.query_params.get(VERSION_QUERY_KEY),
        request.headers.get(VERSION_HEADER),
    ):
        if candidate:
            return str(candidate)
    return None


class ApiVersionResolver:
    """FastAPI dependency that negotiates the API version for a request."""

    def __init__(self, supported: list[str], default: str) -> None:
        self._supported = {normalize_version(v) for v in supported}
        self._default = normalize_version(default)

    @property
    def supported(self) -> list[str]:
        return sorted(self._supported)

    def resolve(self, raw: str | None) -> str:
        if raw is None:
            return self._default
        version = normalize_version(raw)
        if version not in self._supported:
            raise UnsupportedApiVersionError(
                f"API version '{raw}' is not supported; supported versions: "
                f"{', '.join(self.supported)}"
            )
        return version

    async def __call__(self, request: Request) -> str:
        version = self.resolve(requested_version(request))
        request.state.api_version = version
        return version
