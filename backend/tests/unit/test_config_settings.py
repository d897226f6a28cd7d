"""Unit tests for application settings configuration."""

from pathlib import Path

from recipe_api.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_mail_is_skipped_by_default():
    settings = Settings(_env_file=None)
    assert settings.mail_host == "skip"
    assert settings.notifications_enabled is False


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("DB_POPULATE", "true")
    monkeypatch.setenv("AUTH_TOKENS", '{"secret": "admin"}')

    settings = Settings(_env_file=None)

    assert settings.db_populate is True
    assert settings.auth_tokens == {"secret": "admin"}
