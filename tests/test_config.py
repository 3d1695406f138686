"""Tests for environment-driven configuration."""

import logging

import pytest

from longtts.config import (
    DEFAULT_TTS_MODEL,
    DEFAULT_VOICE,
    configure_logging,
    default_tts_model,
    default_voice,
    resolve_api_key,
)
from longtts.errors import MissingApiKeyError


def test_inline_key_wins_over_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "env-key")
    assert resolve_api_key("inline-key") == "inline-key"


def test_environment_key_used_when_no_inline_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "env-key")
    assert resolve_api_key(None) == "env-key"
    assert resolve_api_key("   ") == "env-key"


def test_missing_key_raises():
    with pytest.raises(MissingApiKeyError) as exc_info:
        resolve_api_key(None)
    assert exc_info.value.exit_code == 3


def test_model_and_voice_defaults(monkeypatch):
    assert default_tts_model() == DEFAULT_TTS_MODEL
    assert default_voice() == DEFAULT_VOICE
    monkeypatch.setenv("OPENAI_TTS_MODEL", "tts-1")
    monkeypatch.setenv("OPENAI_TTS_VOICE", "nova")
    assert default_tts_model() == "tts-1"
    assert default_voice() == "nova"


def test_configure_logging_levels(monkeypatch):
    assert configure_logging() == logging.WARNING

    monkeypatch.setenv("LOG_LEVEL", "info")
    assert configure_logging() == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING

    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert configure_logging() == logging.WARNING

    assert configure_logging(verbose=True) == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("openai").level == logging.DEBUG
