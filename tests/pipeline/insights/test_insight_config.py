"""Configuration-related tests for the insight client."""

from pathlib import Path

import pytest

import campaign_analyzer.config as project_config
from campaign_analyzer.exceptions import ConfigurationError
from campaign_analyzer.pipeline.insights import GeminiConfig

ENV_KEYS = (
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "GEMINI_API_BASE",
    "MAX_RETRIES",
    "BACKOFF_FACTOR",
    "RETRY_SLEEP_ON_429",
    "REQUEST_TIMEOUT",
    "TARGET_RPM",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path: Path):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    # Point PROJECT_ROOT away from the real repo to avoid loading a real .env
    monkeypatch.setattr(project_config, "PROJECT_ROOT", tmp_path)
    return tmp_path


def test_missing_api_key_raises():
    with pytest.raises(ConfigurationError):
        GeminiConfig()


def test_defaults_and_endpoint(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "k")
    cfg = GeminiConfig()
    assert cfg.api_key == "k"
    assert cfg.model == "gemini-2.0-flash"
    assert cfg.endpoint == (
        "https://generativelanguage.googleapis.com/v1beta/models/"
        "gemini-2.0-flash:generateContent"
    )
    assert cfg.max_retries == 2 and cfg.target_rpm == 15


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "k")
    monkeypatch.setenv("GEMINI_API_BASE", "https://api.example.com/v1/")
    monkeypatch.setenv("GEMINI_MODEL", "custom")
    monkeypatch.setenv("MAX_RETRIES", "0")
    monkeypatch.setenv("BACKOFF_FACTOR", "1.5")
    monkeypatch.setenv("REQUEST_TIMEOUT", "5")
    cfg = GeminiConfig()
    assert cfg.endpoint == "https://api.example.com/v1/models/custom:generateContent"
    assert cfg.max_retries == 0
    assert cfg.backoff_factor == 1.5
    assert cfg.request_timeout == 5


def test_dotenv_file_is_loaded(monkeypatch, isolated_env: Path):
    # Registered with monkeypatch so the value written by load_dotenv is undone.
    monkeypatch.setenv("GEMINI_API_KEY", "placeholder")
    (isolated_env / ".env").write_text("GEMINI_API_KEY=from-file\n", encoding="utf-8")
    cfg = GeminiConfig()
    assert cfg.api_key == "from-file"


def test_invalid_numbers_raise_configuration_error(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "k")
    monkeypatch.setenv("MAX_RETRIES", "many")
    with pytest.raises(ConfigurationError):
        GeminiConfig()


def test_non_positive_rpm_is_rejected(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "k")
    monkeypatch.setenv("TARGET_RPM", "0")
    with pytest.raises(ConfigurationError):
        GeminiConfig()
