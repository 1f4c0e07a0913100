"""Shared test fixtures for the API test suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from petrohub.config.settings import ApiSettings
from petrohub.localization.localizer import StringLocalizer
from petrohub.main import create_app
from petrohub.routers.base import ResponseMapper


# ---------------------------------------------------------------------------
# Keep tests off the on-disk database
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _set_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Point any environment-loaded ApiSettings at an in-memory database."""
    monkeypatch.setenv("PETROHUB_DATABASE_URL", "sqlite://")
    monkeypatch.setenv("PETROHUB_ENVIRONMENT", "Testing")


# ---------------------------------------------------------------------------
# Settings and application fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> ApiSettings:
    """Test settings with an in-memory database."""
    return ApiSettings(
        database_url="sqlite://",
        environment="Testing",
    )


@pytest.fixture
def app(settings: ApiSettings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def localizer(settings: ApiSettings) -> StringLocalizer:
    return StringLocalizer.from_file(settings.resources_path, default_culture="en-US")


@pytest.fixture
def mapper(localizer: StringLocalizer) -> ResponseMapper:
    return ResponseMapper(localizer)


# ---------------------------------------------------------------------------
# Deterministic clock for audit stamping
# ---------------------------------------------------------------------------

class TickingClock:
    """Returns a strictly increasing UTC time on every call."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)) -> None:
        self._now = start or datetime(2026, 1, 1, tzinfo=timezone.utc)
        self._step = step
        self.calls = 0

    def __call__(self) -> datetime:
        self._now += self._step
        self.calls += 1
        return self._now


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()

