from types import SimpleNamespace

import pytest

from insight_core.strategy import groq_summarizer, openai_summarizer
from insight_core.strategy.narrative import groq_prompt, gpt_prompt


class FakeClient:
    def __init__(self, reply="Solid balance sheet. HOLD.", error=None):
        self.requests = []
        self._reply = reply
        self._error = error
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.requests.append(kwargs)
        if self._error:
            raise self._error
        message = SimpleNamespace(content=self._reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def factory():
    made = []

    def build(client):
        def _factory(api_key, base_url=None):
            made.append({"api_key": api_key, "base_url": base_url})
            return client
        _factory.made = made
        return _factory

    return build


def test_prompts_mention_symbol():
    assert "AAPL" in gpt_prompt("AAPL")
    assert "retrieval-based" in gpt_prompt("AAPL")
    assert "AAPL stock" in groq_prompt("AAPL")
    assert "5. Investment Recommendation" in groq_prompt("AAPL")


def test_groq_uses_openai_compatible_endpoint(monkeypatch, factory):
    monkeypatch.setenv("GROQ_API_KEY", "gsk-test")
    client = FakeClient()
    make = factory(client)
    text = groq_summarizer(client_factory=make).summarize("MSFT")

    assert text == "Solid balance sheet. HOLD."
    assert make.made == [{"api_key": "gsk-test", "base_url": "https://api.groq.com/openai/v1"}]
    req = client.requests[0]
    assert req["model"] == "llama-3.3-70b-versatile"
    assert req["temperature"] == 0.7
    assert req["max_tokens"] == 4096
    assert "MSFT" in req["messages"][0]["content"]


def test_openai_summarizer_defaults(monkeypatch, factory):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    client = FakeClient()
    make = factory(client)
    summarizer = openai_summarizer(client_factory=make)
    assert summarizer.available
    summarizer.summarize("AAPL", context="current=105.00")

    assert make.made[0]["base_url"] is None
    req = client.requests[0]
    assert req["model"] == "gpt-3.5-turbo"
    assert "temperature" not in req
    assert req["messages"][1]["content"].endswith("current=105.00")


def test_missing_key_returns_none_without_client(factory):
    make = factory(FakeClient())
    summarizer = openai_summarizer(client_factory=make)
    assert not summarizer.available
    assert summarizer.summarize("AAPL") is None
    assert make.made == []


def test_api_failure_returns_none(monkeypatch, factory):
    monkeypatch.setenv("GROQ_API_KEY", "gsk-test")
    make = factory(FakeClient(error=RuntimeError("rate limited")))
    assert groq_summarizer(client_factory=make).summarize("AAPL") is None


def test_empty_reply_returns_none(monkeypatch, factory):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    make = factory(FakeClient(reply=""))
    assert openai_summarizer(client_factory=make).summarize("AAPL") is None
