"""Unit tests for the message catalog loader and StringLocalizer."""

from pathlib import Path

import pytest

from petrohub.config.settings import DEFAULT_RESOURCES_PATH
from petrohub.localization.culture import reset_current_culture, set_current_culture
from petrohub.localization.localizer import StringLocalizer, load_catalog

_KEYS = ("Success", "Error", "NotFound", "Unauthorized")


# ---------------------------------------------------------------------------
# load_catalog
# ---------------------------------------------------------------------------


class TestLoadCatalog:
    def test_bundled_catalog_covers_supported_cultures(self):
        catalog = load_catalog(DEFAULT_RESOURCES_PATH)
        assert set(catalog) >= {"en-US", "ar", "hi"}
        for culture in ("en-US", "ar", "hi"):
            for key in _KEYS:
                assert catalog[culture][key]

    def test_missing_file_returns_empty(self, tmp_path: Path):
        assert load_catalog(str(tmp_path / "nope.yaml")) == {}

    def test_malformed_yaml_returns_empty(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("cultures: [unclosed", encoding="utf-8")
        assert load_catalog(str(path)) == {}

    def test_missing_cultures_key_returns_empty(self, tmp_path: Path):
        path = tmp_path / "other.yaml"
        path.write_text("messages:\n  Success: ok\n", encoding="utf-8")
        assert load_catalog(str(path)) == {}

    def test_non_mapping_culture_is_skipped(self, tmp_path: Path):
        path = tmp_path / "mixed.yaml"
        path.write_text(
            "cultures:\n  en-US:\n    Success: ok\n  fr: just a string\n", encoding="utf-8"
        )
        assert load_catalog(str(path)) == {"en-US": {"Success": "ok"}}


# ---------------------------------------------------------------------------
# StringLocalizer
# ---------------------------------------------------------------------------


@pytest.fixture
def small_localizer() -> StringLocalizer:
    return StringLocalizer(
        {
            "en-US": {"Success": "Done", "Error": "Failed"},
            "ar": {"Success": "تم"},
        },
        default_culture="en-US",
    )


class TestStringLocalizer:
    def test_uses_current_culture(self, small_localizer: StringLocalizer):
        token = set_current_culture("ar")
        try:
            assert small_localizer["Success"] == "تم"
        finally:
            reset_current_culture(token)

    def test_explicit_culture(self, small_localizer: StringLocalizer):
        assert small_localizer.get("Success", culture="ar") == "تم"

    def test_region_falls_back_to_language(self, small_localizer: StringLocalizer):
        assert small_localizer.get("Success", culture="ar-EG") == "تم"

    def test_missing_key_falls_back_to_default_culture(self, small_localizer: StringLocalizer):
        assert small_localizer.get("Error", culture="ar") == "Failed"

    def test_unknown_culture_falls_back_to_default(self, small_localizer: StringLocalizer):
        assert small_localizer.get("Success", culture="fr-FR") == "Done"

    def test_unknown_key_echoes_key(self, small_localizer: StringLocalizer):
        assert small_localizer.get("Missing", culture="en-US") == "Missing"

    def test_cultures(self, small_localizer: StringLocalizer):
        assert small_localizer.cultures == ["en-US", "ar"]

    def test_from_file(self):
        localizer = StringLocalizer.from_file(DEFAULT_RESOURCES_PATH)
        assert localizer.get("NotFound", culture="hi") == "अनुरोधित संसाधन नहीं मिला"
