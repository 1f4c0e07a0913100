"""Result-to-HTTP response mapping shared by every controller router.

Success is always 200 and every business failure is 400; handlers that need
404 or 401 call ``not_found`` / ``unauthorized`` explicitly.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from petrohub.localization.localizer import StringLocalizer
from petrohub.models.responses import ApiDataResponse, ApiResponse
from petrohub.models.result import Result


class ResponseMapper:
    """Turns ``Result`` values into enveloped JSON responses.

    Args:
        localizer: Message catalog used for the default Success/Error/NotFound/
            Unauthorized texts in the current culture.
    """

    def __init__(self, localizer: StringLocalizer) -> None:
        self._localizer = localizer

    def handle_result(self, result: Result[Any], *, with_data: bool = True) -> JSONResponse:
        """Map ``result`` to 200 (success) or 400 (failure).

        ``with_data=False`` produces the payload-free envelope (no ``data`` key).
        """
        if result.is_success:
            envelope: ApiResponse = (
                ApiDataResponse[Any](
                    success=True,
                    message=self._localizer["Success"],
                    data=result.data,
                )
                if with_data
                else ApiResponse(success=True, message=self._localizer["Success"])
            )
            return JSONResponse(status_code=200, content=envelope.model_dump(mode="json"))

        body: dict[str, Any] = {
            "success": False,
            "message": result.error_message or self._localizer["Error"],
            "errors": list(result.errors),
        }
        envelope = ApiDataResponse[Any](**body) if with_data else ApiResponse(**body)
        return JSONResponse(status_code=400, content=envelope.model_dump(mode="json"))

    def not_found(self, message: str | None = None) -> JSONResponse:
        """404 envelope with ``message`` or the localized NotFound text."""
        envelope = ApiResponse(success=False, message=message or self._localizer["NotFound"])
        return JSONResponse(status_code=404, content=envelope.model_dump(mode="json"))

    def unauthorized(self, message: str | None = None) -> JSONResponse:
        """401 envelope with ``message`` or the localized Unauthorized text."""
        envelope = ApiResponse(success=False, message=message or self._localizer["Unauthorized"])
        return JSONResponse(status_code=401, content=envelope.model_dump(mode="json"))


def get_localizer(request: Request) -> StringLocalizer:
    """FastAPI dependency returning the application's message catalog."""
    return request.app.state.localizer


def get_response_mapper(request: Request) -> ResponseMapper:
    """FastAPI dependency returning a mapper bound to the application's catalog."""
    return ResponseMapper(get_localizer(request))
