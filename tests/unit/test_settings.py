"""Unit tests for ApiSettings."""

from pathlib import Path

import pytest

from petrohub.config.settings import ApiSettings


class TestApiSettings:
    def test_defaults_are_correct(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("PETROHUB_DATABASE_URL", raising=False)
        monkeypatch.delenv("PETROHUB_ENVIRONMENT", raising=False)

        settings = ApiSettings()

        assert settings.title == "PetroHub API"
        assert settings.environment == "Production"
        assert settings.app_version == "1.0.0"
        assert settings.log_level == "INFO"
        assert settings.database_url == "sqlite:///./petrohub.db"
        assert settings.default_culture == "en-US"
        assert settings.supported_cultures == ["en-US", "ar", "hi"]
        assert settings.default_api_version == "1.0"
        assert settings.supported_api_versions == ["1.0"]
        assert settings.cors_origins == ["*"]
        assert Path(settings.resources_path).is_file()

    def test_env_prefix_is_petrohub(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PETROHUB_ENVIRONMENT", "Staging")
        monkeypatch.setenv("PETROHUB_APP_VERSION", "1.2.3")

        settings = ApiSettings()
        assert settings.environment == "Staging"
        assert settings.app_version == "1.2.3"

    def test_list_fields_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PETROHUB_SUPPORTED_API_VERSIONS", '["1.0","2.0"]')

        settings = ApiSettings()
        assert settings.supported_api_versions == ["1.0", "2.0"]

    def test_log_level_is_normalised(self):
        assert ApiSettings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_raises(self):
        with pytest.raises(Exception):
            ApiSettings(log_level="LOUD")

    def test_default_culture_must_be_supported(self):
        with pytest.raises(Exception):
            ApiSettings(default_culture="fr-FR")

    def test_docs_only_in_development_by_default(self):
        assert ApiSettings(environment="Development").show_docs is True
        assert ApiSettings(environment="Production").show_docs is False

    def test_docs_explicit_override(self):
        assert ApiSettings(environment="Production", docs_enabled=True).show_docs is True
        assert ApiSettings(environment="Development", docs_enabled=False).show_docs is False
