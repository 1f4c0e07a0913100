"""Request culture resolution middleware.

Determines the culture for every request and makes it current for the rest
of the pipeline. Sources, first match wins:

1. ``culture`` query parameter
2. first entry of the ``Accept-Language`` header (``;q=`` weight stripped)
3. ``culture`` cookie

An unrecognised tag falls back to the default culture (``en-US``) with a
warning; no tag at all leaves the default culture in place. Resolution never fails the request.
"""

from __future__ import annotations

import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from petrohub.localization.culture import (
    DEFAULT_CULTURE,
    CultureNotFoundError,
    reset_current_culture,
    resolve_culture,
    set_current_culture,
)

logger = logging.getLogger(__name__)

CULTURE_QUERY_KEY = "culture"
CULTURE_COOKIE_KEY = "culture"


def culture_from_request(request: Request) -> str | None:
    """Return the raw culture tag requested by the client, if any."""
    query_value = request.query_params.get(CULTURE_QUERY_KEY)
    if query_value:
        return query_value

    accept_language = request.headers.get("accept-language")
    if accept_language:
        primary = accept_language.split(",")[0].split(";")[0].strip()
        if primary:
            return primary

    cookie_value = request.cookies.get(CULTURE_COOKIE_KEY)
    if cookie_value:
        return cookie_value

    return None


class CultureMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that sets the request-scoped current culture.

    The resolved culture is also stored in ``request.state.culture``.
    """

    def __init__(self, app, default_culture: str = DEFAULT_CULTURE) -> None:  # noqa: ANN001
        super().__init__(app)
        self._default_culture = default_culture

    def _resolve(self, tag: str | None) -> str | None:
        if tag is None:
            return None
        try:
            culture = resolve_culture(tag)
        except CultureNotFoundError as exc:
            logger.warning(
                "Invalid culture specified: %s",
                tag,
                extra={"event": "culture_fallback", "error_reason": str(exc)},
            )
            return self._default_culture
        logger.debug("Culture set to: %s", culture)
        return culture

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        culture = self._resolve(culture_from_request(request)) or self._default_culture
        token = set_current_culture(culture)
        request.state.culture = culture
        try:
            return await call_next(request)
        finally:
            reset_current_culture(token)
