"""Unit tests for the Result-to-HTTP response mapper."""

from __future__ import annotations

import json

import pytest

from petrohub.localization.culture import reset_current_culture, set_current_culture
from petrohub.models.result import failure, success
from petrohub.routers.base import ResponseMapper


def _body(response) -> dict:
    return json.loads(response.body)


@pytest.fixture
def arabic():
    token = set_current_culture("ar")
    yield
    reset_current_culture(token)


class TestHandleResult:
    def test_success_is_200_with_data(self, mapper: ResponseMapper):
        resp = mapper.handle_result(success({"id": 1}))
        assert resp.status_code == 200
        assert _body(resp) == {
            "success": True,
            "message": "Operation completed successfully",
            "errors": [],
            "data": {"id": 1},
        }

    def test_payload_free_success_omits_data(self, mapper: ResponseMapper):
        resp = mapper.handle_result(success(), with_data=False)
        assert resp.status_code == 200
        assert "data" not in _body(resp)

    def test_failure_with_message_is_400(self, mapper: ResponseMapper):
        resp = mapper.handle_result(failure("Tank is empty"))
        assert resp.status_code == 400
        body = _body(resp)
        assert body["success"] is False
        assert body["message"] == "Tank is empty"
        assert body["errors"] == []
        assert body["data"] is None

    def test_failure_without_message_uses_localized_error(self, mapper: ResponseMapper):
        resp = mapper.handle_result(failure(errors=["name is required"]))
        assert resp.status_code == 400
        body = _body(resp)
        assert body["message"] == "An error occurred while processing your request"
        assert body["errors"] == ["name is required"]

    def test_payload_free_failure_omits_data(self, mapper: ResponseMapper):
        resp = mapper.handle_result(failure("no"), with_data=False)
        assert _body(resp) == {"success": False, "message": "no", "errors": []}

    def test_success_message_follows_current_culture(self, mapper: ResponseMapper, arabic):
        resp = mapper.handle_result(success())
        assert _body(resp)["message"] == "تمت العملية بنجاح"


class TestHelpers:
    def test_not_found_default_message(self, mapper: ResponseMapper):
        resp = mapper.not_found()
        assert resp.status_code == 404
        assert _body(resp) == {
            "success": False,
            "message": "The requested resource was not found",
            "errors": [],
        }

    def test_not_found_custom_message(self, mapper: ResponseMapper):
        resp = mapper.not_found("Station 12 not found")
        assert resp.status_code == 404
        assert _body(resp)["message"] == "Station 12 not found"

    def test_unauthorized_default_message(self, mapper: ResponseMapper):
        resp = mapper.unauthorized()
        assert resp.status_code == 401
        assert _body(resp)["message"] == "You are not authorized to perform this action"

    def test_unauthorized_custom_message(self, mapper: ResponseMapper):
        resp = mapper.unauthorized("Token expired")
        assert resp.status_code == 401
        assert _body(resp)["success"] is False
        assert _body(resp)["message"] == "Token expired"

    def test_not_found_localized(self, mapper: ResponseMapper, arabic):
        assert _body(mapper.not_found())["message"] == "المورد المطلوب غير موجود"
