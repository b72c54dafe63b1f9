from pathlib import Path

import pytest

from backend.ad_creator.config import PROJECT_ROOT, Settings
from backend.ad_creator.models import OperationType


def test_defaults_from_empty_env() -> None:
    s = Settings.from_env({})
    assert s.api_key is None
    assert s.demo_mode is False
    assert s.demo_delay_seconds == 0.5
    assert s.cors_allow_origins == ("*",)
    assert s.index_html_path == PROJECT_ROOT / "index.html"
    assert s.live_ready is False


def test_gemini_key_preferred_over_google_key() -> None:
    s = Settings.from_env({"GEMINI_API_KEY": " g-key ", "GOOGLE_API_KEY": "other"})
    assert s.api_key == "g-key"


def test_google_key_fallback() -> None:
    s = Settings.from_env({"GEMINI_API_KEY": "  ", "GOOGLE_API_KEY": "google-value"})
    assert s.api_key == "google-value"
    assert s.live_ready is True


@pytest.mark.parametrize("raw,expected", [("true", True), ("1", True), ("ON", True), ("no", False), ("", False)])
def test_pitch_mode_flag(raw: str, expected: bool) -> None:
    assert Settings.from_env({"PITCH_MODE": raw}).demo_mode is expected


def test_delay_and_origins() -> None:
    s = Settings.from_env(
        {
            "PITCH_MODE_DELAY_MS": "1200",
            "CORS_ALLOW_ORIGINS": "https://a.example, https://b.example",
            "INDEX_HTML_PATH": "/srv/site/index.html",
        }
    )
    assert s.demo_delay_seconds == 1.2
    assert s.cors_allow_origins == ("https://a.example", "https://b.example")
    assert s.index_html_path == Path("/srv/site/index.html")


@pytest.mark.parametrize("raw", ["soon", "-5"])
def test_bad_delay_rejected(raw: str) -> None:
    with pytest.raises(ValueError):
        Settings.from_env({"PITCH_MODE_DELAY_MS": raw})


def test_model_per_operation() -> None:
    s = Settings.from_env(
        {
            "GEMINI_TEXT_MODEL": "text-m",
            "GEMINI_VISION_MODEL": "vision-m",
            "GEMINI_IMAGE_MODEL": "imagen-4.0-generate-001",
        }
    )
    assert s.model_for(OperationType.PRODUCT_ANALYSIS) == "vision-m"
    assert s.model_for(OperationType.AD_COPY) == "text-m"
    assert s.model_for(OperationType.CAMPAIGN_TEXT) == "text-m"
    assert s.model_for(OperationType.AD_IMAGE_COMPOSITE) == "imagen-4.0-generate-001"
    assert s.model_for(OperationType.CAMPAIGN_VISUAL) == "imagen-4.0-generate-001"
