"""Unit tests for the core configuration module."""

import pytest
from pydantic import ValidationError

from core.config import Settings, get_settings


def test_settings_defaults():
    """Settings without environment overrides."""
    settings = Settings()

    assert settings.config_dir_name == ".zklense"
    assert settings.target_dir_name == "target"
    assert settings.compute_unit_limit == 500_000
    assert settings.compute_unit_price == 0
    assert settings.fee_sample_limit == 50
    assert settings.web_app_url == "http://localhost:3000"
    assert settings.viewer_host == "127.0.0.1"


def test_settings_with_env_vars(monkeypatch):
    monkeypatch.setenv("ZKLENSE_COMPUTE_UNIT_LIMIT", "200000")
    monkeypatch.setenv("ZKLENSE_COMPUTE_UNIT_PRICE", "25")
    monkeypatch.setenv("ZKLENSE_WEB_APP_URL", "https://viewer.example")

    settings = Settings()

    assert settings.compute_unit_limit == 200_000
    assert settings.compute_unit_price == 25
    assert settings.web_app_url == "https://viewer.example"


def test_settings_read_dotenv(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("ZKLENSE_LOG_LEVEL=DEBUG\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert Settings().log_level == "DEBUG"


def test_fee_sample_limit_is_bounded(monkeypatch):
    monkeypatch.setenv("ZKLENSE_FEE_SAMPLE_LIMIT", "51")
    with pytest.raises(ValidationError):
        Settings()


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("ZKLENSE_COMPUTE_UNIT_LIMIT", str(2**32)),
        ("ZKLENSE_COMPUTE_UNIT_PRICE", str(2**64)),
    ],
)
def test_compute_budget_settings_fit_wire_widths(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings()
