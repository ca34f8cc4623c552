import os
import tempfile
from dataclasses import replace

import pytest

# Environment must be settled before the app module reads settings
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="chat-relay-logs-"))
for _key in ("FRONTEND_URL", "NODE_ENV", "PERPLEXITY_API_KEY", "ENABLE_AUDIT_LOGGING"):
    os.environ.pop(_key, None)

from fastapi.testclient import TestClient  # noqa: E402

from chat_relay.api.dependencies import get_chat_service  # noqa: E402
from chat_relay.api.main import app  # noqa: E402
from chat_relay.core.config import get_settings  # noqa: E402
from chat_relay.llm.client import CompletionSuccess  # noqa: E402
from chat_relay.services.chat_service import ChatService  # noqa: E402

USAGE = {"prompt_tokens": 12, "completion_tokens": 3, "total_tokens": 15}


class FakeUpstream:
    """Stands in for PerplexityClient and records every call."""

    def __init__(self, result):
        self.result = result
        self.calls = []

    async def complete(self, message, model):
        self.calls.append((message, model))
        return self.result

    async def close(self):
        pass


def make_settings(**overrides):
    values = {"perplexity_api_key": "test-key", "node_env": None}
    values.update(overrides)
    return replace(get_settings(), **values)


@pytest.fixture
def relay_settings():
    return make_settings()


@pytest.fixture
def upstream():
    return FakeUpstream(CompletionSuccess(reply="Hello!", usage=dict(USAGE)))


@pytest.fixture
def client(monkeypatch, relay_settings, upstream):
    monkeypatch.setattr(app.state, "settings", relay_settings)
    app.dependency_overrides[get_chat_service] = lambda: ChatService(relay_settings, upstream)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
