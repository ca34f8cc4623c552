"""
End-to-end chat requests through the real openai SDK, with the upstream
replaced by an httpx.MockTransport.
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient
from openai import AsyncOpenAI

from chat_relay.api.dependencies import get_chat_service
from chat_relay.api.main import app
from chat_relay.llm.catalog import DEFAULT_MODEL
from chat_relay.llm.client import PerplexityClient
from chat_relay.services.chat_service import ChatService

from tests.conftest import make_settings

UPSTREAM_BASE_URL = "https://api.perplexity.ai"


class Upstream:
    """Canned upstream answer; records the requests the SDK sends."""

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = body
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)


def completion_body(content="hi", **extra):
    body = {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}
    body.update(extra)
    return body


@pytest.fixture
def dev_settings():
    return make_settings(node_env="development")


@pytest.fixture
def relay(monkeypatch, dev_settings):
    """Returns a function that starts a TestClient in front of the given upstream."""
    clients = []

    def start(upstream):
        sdk = AsyncOpenAI(
            api_key="test-key",
            base_url=UPSTREAM_BASE_URL,
            max_retries=0,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(upstream)),
        )
        service = ChatService(dev_settings, PerplexityClient(sdk))
        app.dependency_overrides[get_chat_service] = lambda: service
        test_client = TestClient(app)
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    monkeypatch.setattr(app.state, "settings", dev_settings)
    yield start
    for test_client in clients:
        test_client.__exit__(None, None, None)
    app.dependency_overrides.clear()


def test_request_reaches_upstream_with_fixed_parameters(relay):
    upstream = Upstream(body=completion_body("Hello!"))

    response = relay(upstream).post("/api/chat", json={"message": "  hi  "})

    assert response.status_code == 200
    assert response.json()["reply"] == "Hello!"
    sent = upstream.requests[0]
    assert sent.url == f"{UPSTREAM_BASE_URL}/chat/completions"
    assert sent.headers["authorization"] == "Bearer test-key"
    assert json.loads(sent.content) == {
        "model": DEFAULT_MODEL,
        "messages": [
            {
                "role": "system",
                "content": "You are a helpful AI assistant. "
                           "Provide accurate, informative, and concise responses.",
            },
            {"role": "user", "content": "hi"},
        ],
        "max_tokens": 2048,
        "temperature": 0.7,
        "stream": False,
    }


def test_usage_is_passed_through_verbatim(relay):
    usage = {
        "prompt_tokens": 4,
        "completion_tokens": 2,
        "total_tokens": 6,
        "citation_tokens": None,
        "search_context_size": "low",
    }
    upstream = Upstream(body=completion_body(usage=usage))

    response = relay(upstream).post("/api/chat", json={"message": "hi"})

    assert response.status_code == 200
    assert response.json()["usage"] == usage


def test_malformed_usage_is_passed_through(relay):
    upstream = Upstream(body=completion_body(usage="n/a"))

    response = relay(upstream).post("/api/chat", json={"message": "hi"})

    assert response.status_code == 200
    body = response.json()
    assert body["reply"] == "hi"
    assert body["usage"] == "n/a"


def test_missing_usage_is_omitted(relay):
    upstream = Upstream(body=completion_body())

    response = relay(upstream).post("/api/chat", json={"message": "hi"})

    assert response.status_code == 200
    assert "usage" not in response.json()


def test_unusable_reply_gets_chat_error_envelope(relay):
    upstream = Upstream(body=completion_body(content={"text": "not a string"}))

    response = relay(upstream).post("/api/chat", json={"message": "hi"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Internal server error while processing your request"
    assert body["success"] is False
    assert body["message"]


def test_empty_reply_gets_chat_error_envelope(relay):
    upstream = Upstream(body=completion_body(content=""))

    response = relay(upstream).post("/api/chat", json={"message": "hi"})

    assert response.status_code == 500
    assert response.json()["message"] == "No response content received from Perplexity API"


@pytest.mark.parametrize(
    "status_code, expected_status, expected_error",
    [
        (401, 401, "Invalid Perplexity API key"),
        (429, 429, "API rate limit exceeded. Please try again later."),
        (400, 400, "Invalid request to Perplexity API"),
    ],
)
def test_upstream_status_is_translated(relay, status_code, expected_status, expected_error):
    upstream = Upstream(status_code=status_code, body={"error": {"message": "nope"}})

    response = relay(upstream).post("/api/chat", json={"message": "hi"})

    assert response.status_code == expected_status
    assert response.json() == {"error": expected_error, "success": False}
    assert len(upstream.requests) == 1


def test_upstream_server_error_exposes_message_in_development(relay):
    upstream = Upstream(status_code=502, body={"error": {"message": "bad gateway"}})

    response = relay(upstream).post("/api/chat", json={"message": "hi"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Internal server error while processing your request"
    assert "bad gateway" in body["message"]
    assert len(upstream.requests) == 1
