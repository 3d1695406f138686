import pathlib
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


class FakeStreamResponse:
    """Stands in for the SDK's streamed speech response."""

    def __init__(self, payload: bytes):
        self.payload = payload

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def stream_to_file(self, path):
        Path(path).write_bytes(self.payload)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment and .env out of the tests."""
    for name in ("OPENAI_API_KEY", "OPENAI_TTS_MODEL", "OPENAI_TTS_VOICE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("longtts.cli.load_environment", lambda: None)


@pytest.fixture
def fake_client():
    """OpenAI client mock that records speech requests and writes the input text as audio."""
    client = MagicMock()
    client.requests = []

    def create(**params):
        client.requests.append(params)
        return FakeStreamResponse(f"audio:{params['input']}".encode("utf-8"))

    client.audio.speech.with_streaming_response.create.side_effect = create
    return client
