import json
import os
import sys

import pytest

# Ensure project root is importable during tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from prompt_relay.config import Settings, WorkspaceLayout


class FakeProvider:
    """Records calls; answers with a fixed status/body and optional audio."""

    def __init__(self, status=200, body=None, audio=b"RIFFfake", exc=None):
        self.status = status
        self.body = body if body is not None else json.dumps(
            {
                "choices": [{"message": {"content": "  the answer  "}}],
                "usage": {"total_tokens": 3, "prompt_tokens": 1, "completion_tokens": 2},
            }
        )
        self.audio = audio
        self.exc = exc
        self.posts = []
        self.speech_calls = []

    def post_json(self, kind, payload):
        self.posts.append((kind, payload))
        if self.exc is not None:
            raise self.exc
        return self.status, self.body

    def synthesize_speech(self, text):
        self.speech_calls.append(text)
        return self.audio


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    # setenv first so teardown removes whatever .env loading adds
    for name in ("OPENAI_API_KEY", "openai", "OPENAI_BASE_URL", "OPENAI_TIMEOUT"):
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    yield


@pytest.fixture
def layout(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return WorkspaceLayout(root=str(tmp_path))


@pytest.fixture
def settings():
    return Settings(api_key="sk-test")


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def provider_factory():
    return FakeProvider
