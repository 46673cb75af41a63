"""Unit tests for application settings configuration."""

from pathlib import Path

from storefront_admin.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_erpnext_url_is_normalised():
    settings = Settings(_env_file=None, erpnext_api_url="  https://erp.example.com/  ")
    assert settings.erpnext_api_url == "https://erp.example.com"


def test_page_size_options_are_cleaned():
    settings = Settings(_env_file=None, page_size_options=[100, 0, 20, 20, -5], default_page_size=30)
    assert settings.page_size_options == [20, 100]
    assert settings.default_page_size == 20


def test_page_size_options_fall_back_when_empty():
    settings = Settings(_env_file=None, page_size_options=[0])
    assert settings.page_size_options == [20, 50, 100]


def test_debounce_in_seconds(monkeypatch):
    monkeypatch.setenv("FILTER_DEBOUNCE_MS", "450")
    assert Settings(_env_file=None).filter_debounce_seconds == 0.45
