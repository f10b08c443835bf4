"""Tests for the generative model HTTP client."""

import json

import httpx
import pytest

from stockmaster.api.gemini_client import GeminiClient
from stockmaster.utils.config import get_config
from stockmaster.utils.exceptions import AIServiceError, ConfigurationError, RateLimitError


def candidate(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def fast_retries(monkeypatch):
    config = get_config()
    monkeypatch.setattr(config.api, "max_retries", 3)
    monkeypatch.setattr(config.api, "retry_delay", 0)


@pytest.fixture
def make_client():
    """GeminiClient whose transport is served by ``handler``."""
    clients = []

    def _make(handler):
        client = GeminiClient(api_key="test-key", model="test-model")
        real = client.client
        real.close()
        client.client = httpx.Client(
            base_url=client.base_url,
            headers=real.headers,
            transport=httpx.MockTransport(handler)
        )
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()


class TestGeminiClient:

    def test_missing_key(self, monkeypatch):
        monkeypatch.setattr(get_config().env, "gemini_api_key", None)

        with pytest.raises(ConfigurationError):
            GeminiClient()

    def test_generate_text(self, make_client):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["key"] = request.headers["x-goog-api-key"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=candidate("All good."))

        client = make_client(handler)

        assert client.generate_text("Summarize") == "All good."
        assert seen["path"] == "/v1beta/models/test-model:generateContent"
        assert seen["key"] == "test-key"
        assert seen["body"]["contents"][0]["parts"][0]["text"] == "Summarize"
        assert "generationConfig" not in seen["body"]

    def test_response_schema(self, make_client):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=candidate('{"intent": "UNKNOWN"}'))

        client = make_client(handler)
        client.generate_text("Classify", response_schema={"type": "OBJECT"})

        generation = seen["body"]["generationConfig"]
        assert generation["responseMimeType"] == "application/json"
        assert generation["responseSchema"] == {"type": "OBJECT"}

    def test_rate_limited(self, make_client):
        client = make_client(lambda request: httpx.Response(429, text="quota"))

        with pytest.raises(RateLimitError):
            client.generate_text("hi")

    def test_server_error(self, make_client):
        client = make_client(lambda request: httpx.Response(500, text="oops"))

        with pytest.raises(AIServiceError, match="HTTP 500"):
            client.generate_text("hi")

    @pytest.mark.parametrize("body", [{}, {"candidates": []}, candidate("")])
    def test_bad_shape(self, make_client, body):
        client = make_client(lambda request: httpx.Response(200, json=body))

        with pytest.raises(AIServiceError):
            client.generate_text("hi")

    def test_retries_network_errors(self, make_client, fast_retries):
        attempts = {"n": 0}

        def handler(request):
            attempts["n"] += 1
            if attempts["n"] < 3:
                raise httpx.ConnectError("unreachable", request=request)
            return httpx.Response(200, json=candidate("finally"))

        client = make_client(handler)

        assert client.generate_text("hi") == "finally"
        assert attempts["n"] == 3

    def test_gives_up_after_max_retries(self, make_client, fast_retries):
        attempts = {"n": 0}

        def handler(request):
            attempts["n"] += 1
            raise httpx.ReadTimeout("slow", request=request)

        client = make_client(handler)

        with pytest.raises(AIServiceError):
            client.generate_text("hi")
        assert attempts["n"] == 3
