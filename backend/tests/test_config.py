"""
Tests for shortscript.core.config
"""

import pytest
from pydantic import ValidationError

from shortscript.core.config import Settings


def test_missing_api_key_fails_fast(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    with pytest.raises(ValidationError, match="GEMINI_API_KEY"):
        Settings(_env_file=None)


def test_blank_api_key_fails_fast(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "   ")

    with pytest.raises(ValidationError, match="GEMINI_API_KEY is not set"):
        Settings(_env_file=None)


def test_defaults(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "abc")

    settings = Settings(_env_file=None)

    assert settings.PORT == 5000
    assert settings.FETCH_TIMEOUT_SECONDS == 15.0
    assert settings.MAX_ARTICLE_CHARS == 8000
    assert settings.GENERATION_MAX_OUTPUT_TOKENS == 1200
    assert settings.BACKEND_CORS_ORIGINS == ["*"]
    assert settings.GENERATION_MAX_ATTEMPTS == 1


def test_port_from_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    monkeypatch.setenv("PORT", "8080")

    assert Settings(_env_file=None).PORT == 8080


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("http://a.com, http://b.com", ["http://a.com", "http://b.com"]),
        ('["http://a.com"]', ["http://a.com"]),
    ],
)
def test_cors_origins_parsing(monkeypatch, raw, expected):
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    monkeypatch.setenv("BACKEND_CORS_ORIGINS", raw)

    assert Settings(_env_file=None).BACKEND_CORS_ORIGINS == expected


def test_max_attempts_must_be_positive(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    monkeypatch.setenv("GENERATION_MAX_ATTEMPTS", "0")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
