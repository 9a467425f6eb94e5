import pytest
from pydantic import ValidationError

from pack.config.settings import Settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.API_V1_PREFIX == "/api/v1"
    assert settings.MAX_FILE_SIZE == 10 * 1024 * 1024
    assert settings.MAX_REQUEST_SIZE == 10 * 1024 * 1024
    assert settings.max_request_size_label == "10.00 MB"


def test_data_sizes_from_environment(monkeypatch):
    monkeypatch.setenv("MAX_FILE_SIZE", "512KB")
    monkeypatch.setenv("MAX_REQUEST_SIZE", "20MB")

    settings = Settings(_env_file=None)

    assert settings.MAX_FILE_SIZE == 512 * 1024
    assert settings.MAX_REQUEST_SIZE == 20 * 1024 * 1024
    assert settings.max_file_size_label == "0.50 MB"


def test_invalid_data_size(monkeypatch):
    monkeypatch.setenv("MAX_FILE_SIZE", "lots")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_log_settings_are_normalized(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "TEXT")

    settings = Settings(_env_file=None)

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_FORMAT == "text"


def test_database_url():
    settings = Settings(_env_file=None, POSTGRES_USERNAME="u", POSTGRES_PASSWORD="p", POSTGRES_HOST="db", POSTGRES_DB="res")
    assert settings.DATABASE_URL == "postgresql+psycopg://u:p@db:5432/res"

    override = Settings(_env_file=None, DATABASE_URL_OVERRIDE="sqlite+aiosqlite://")
    assert override.DATABASE_URL == "sqlite+aiosqlite://"
