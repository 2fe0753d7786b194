import json
from typing import Callable, List

import httpx
import pytest

from config.settings import get_settings
from relay.providers import openai_chat


TEST_API_KEY = "sk-test-secret-value"


@pytest.fixture(autouse=True)
def no_network(monkeypatch):
    """Prevent accidental network calls in unit tests by stubbing socket.create_connection."""

    import socket

    def fake_create_connection(*a, **k):
        raise RuntimeError("Network calls disabled in tests")

    monkeypatch.setattr(socket, "create_connection", fake_create_connection)


@pytest.fixture(autouse=True)
def settings_env(monkeypatch):
    monkeypatch.setenv("PROVIDER", "openai")
    monkeypatch.setenv("OPENAI_API_KEY", TEST_API_KEY)
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o")
    monkeypatch.setenv("OPENAI_BASE_URL", "https://provider.test/v1")
    monkeypatch.setenv("PROVIDER_MAX_RETRIES", "1")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeProvider:
    """Records outbound chat-completion requests and answers them from ``respond``."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.respond: Callable[[httpx.Request], httpx.Response] = self.echo_last

    @staticmethod
    def completion(content) -> dict:
        return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}

    def echo_last(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        return httpx.Response(200, json=self.completion(f"echo: {body['messages'][-1]['content']}"))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    @property
    def payloads(self) -> List[dict]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def provider(monkeypatch) -> FakeProvider:
    fake = FakeProvider()

    def make_client(timeout):
        return httpx.Client(transport=httpx.MockTransport(fake.handler), timeout=timeout)

    monkeypatch.setattr(openai_chat, "_make_client", make_client)
    return fake
