import logging
import pytest
from pydantic import ValidationError
from carestore.core.config import Settings


def test_log_level_is_normalized(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert Settings().LOG_LEVEL == "WARNING"
    assert getattr(logging, Settings().LOG_LEVEL) == logging.WARNING


def test_blank_log_level_means_unset(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "")
    assert Settings().LOG_LEVEL is None


def test_unknown_log_level_is_rejected(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        Settings()


def test_database_url_must_use_aiosqlite(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://localhost/x")
    with pytest.raises(ValidationError):
        Settings()
