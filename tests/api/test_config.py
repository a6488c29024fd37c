"""
Tests for API configuration loading.
"""

import pytest
from pydantic import ValidationError

from api.config import APIConfig


def test_defaults(monkeypatch):
    for name in ("PORT", "STORAGE_BACKEND", "LOG_LEVEL", "DEBUG"):
        monkeypatch.delenv(name, raising=False)
    settings = APIConfig(_env_file=None)
    assert settings.port == 3000
    assert settings.storage_backend == "memory"
    assert settings.validate_isbn_checksum is False
    assert settings.allow_origins == ["*"]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("STORAGE_BACKEND", "SQLite")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///tmp/books.db")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = APIConfig(_env_file=None)
    assert settings.port == 8080
    assert settings.storage_backend == "sqlite"
    assert settings.database_url == "sqlite:///tmp/books.db"
    assert settings.log_level == "DEBUG"


def test_cors_origins_split():
    settings = APIConfig(_env_file=None, cors_origins="http://a.test, http://b.test,")
    assert settings.allow_origins == ["http://a.test", "http://b.test"]


@pytest.mark.parametrize("field,value", [
    ("storage_backend", "mongodb"),
    ("log_level", "VERBOSE"),
    ("log_format", "xml"),
])
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValidationError):
        APIConfig(_env_file=None, **{field: value})
