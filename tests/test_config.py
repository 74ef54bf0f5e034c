"""Tests for environment-driven settings."""

from recruit_memory.config import DEFAULT_MAX_UPLOAD_BYTES, Settings


def test_defaults(monkeypatch):
    for name in ["OPENAI_API_KEY", "EMBEDDING_MODEL", "SESSION_RECENCY_HOURS", "MAX_UPLOAD_BYTES"]:
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env(dotenv=False)

    assert settings.openai_api_key is None
    assert settings.embedding_model == "text-embedding-3-small"
    assert settings.embedding_max_chars == 8000
    assert settings.query_cache_ttl_minutes == 10
    assert settings.vision_model == "gpt-4o"
    assert settings.vision_max_tokens == 4000
    assert settings.max_upload_bytes == DEFAULT_MAX_UPLOAD_BYTES == 20 * 1024 * 1024
    assert settings.session_recency_hours == 24


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("EMBEDDING_MODEL", "text-embedding-3-large")
    monkeypatch.setenv("SESSION_RECENCY_HOURS", "6")
    monkeypatch.setenv("MAX_UPLOAD_BYTES", "1024")

    settings = Settings.from_env(dotenv=False)

    assert settings.openai_api_key == "sk-test"
    assert settings.embedding_model == "text-embedding-3-large"
    assert settings.session_recency_hours == 6
    assert settings.max_upload_bytes == 1024


def test_empty_values_are_ignored(monkeypatch):
    monkeypatch.setenv("EMBEDDING_MODEL", "")

    assert Settings.from_env(dotenv=False).embedding_model == "text-embedding-3-small"
