"""
Configuration module for longtts package.

Environment lookups, API key resolution and logging setup.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from rich.logging import RichHandler

from .errors import MissingApiKeyError
from .ui import console

ENV_API_KEY = "OPENAI_API_KEY"
ENV_TTS_MODEL = "OPENAI_TTS_MODEL"
ENV_TTS_VOICE = "OPENAI_TTS_VOICE"
ENV_LOG_LEVEL = "LOG_LEVEL"

DEFAULT_TTS_MODEL = "tts-1-hd"
DEFAULT_VOICE = "fable"
DEFAULT_AUDIO_FORMAT = "flac"
DEFAULT_MAX_TOKENS = 500

# Libraries that are chatty at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def load_environment() -> None:
    """Load a .env file (if any) into the process environment."""
    load_dotenv()


def default_tts_model() -> str:
    return os.getenv(ENV_TTS_MODEL, DEFAULT_TTS_MODEL)


def default_voice() -> str:
    return os.getenv(ENV_TTS_VOICE, DEFAULT_VOICE)


def resolve_api_key(cli_key: Optional[str] = None) -> str:
    """
    Return the API key to use, preferring the inline --apikey value.

    Raises:
        MissingApiKeyError: if neither --apikey nor OPENAI_API_KEY is set.
    """
    if cli_key and cli_key.strip():
        return cli_key.strip()
    env_key = (os.getenv(ENV_API_KEY) or "").strip()
    if not env_key:
        raise MissingApiKeyError()
    return env_key


def configure_logging(verbose: bool = False) -> int:
    """Configure root logging from LOG_LEVEL; --verbose forces DEBUG. Returns the level."""
    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.getenv(ENV_LOG_LEVEL, "WARNING").upper()
        level = getattr(logging, level_name, logging.WARNING)
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=True)],
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)

    return level
