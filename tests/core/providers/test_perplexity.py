"""Tests for the Perplexity adapter."""

import pytest

from wordgate.core.providers import PerplexityAdapter
from wordgate.core.providers.models import LanguageRequest
from wordgate.core.resilience import ErrorKind

ANSWER = {
    "text": "Serendipity means a happy accident.",
    "sources": [{"title": "Dictionary", "url": "https://dict.example/serendipity"}],
    "tokens": {"total": 42, "prompt": 10, "completion": 32},
    "model": "sonar-small-online",
}


class TestQuery:
    """Tests for the query endpoint."""

    @pytest.mark.asyncio
    async def test_sends_defaults_and_parses_answer(self, make_adapter, transport, ok):
        transport.queue(ok(ANSWER))
        adapter = make_adapter(PerplexityAdapter, "perplexity")

        outcome = await adapter.query(LanguageRequest(query="What is serendipity?"))

        assert outcome.success
        answer = outcome.data
        assert answer.text == ANSWER["text"]
        assert answer.sources[0].url == "https://dict.example/serendipity"
        assert answer.sources[0].snippet == ""
        assert answer.tokens.total == 42

        sent = transport.last
        assert sent.url == "https://api.perplexity.ai/api/query"
        assert sent.headers["Authorization"] == "Bearer test-key"
        assert sent.json == {
            "query": "What is serendipity?",
            "model": "sonar-small-online",
            "max_tokens": 500,
            "temperature": 0.7,
            "context_items": [],
        }

    @pytest.mark.asyncio
    async def test_explicit_parameters(self, make_adapter, transport, ok):
        transport.queue(ok(ANSWER))
        adapter = make_adapter(PerplexityAdapter, "perplexity")

        await adapter.query(
            LanguageRequest(
                query="q", max_tokens=50, temperature=0.0, context_items=["poetry"]
            )
        )

        assert transport.last.json["max_tokens"] == 50
        assert transport.last.json["temperature"] == 0.0
        assert transport.last.json["context_items"] == ["poetry"]

    @pytest.mark.asyncio
    async def test_rate_limited_after_retries(self, make_adapter, transport, error):
        transport.queue(error(429, {"error": {"message": "Too many requests"}}))
        adapter = make_adapter(PerplexityAdapter, "perplexity")

        outcome = await adapter.query(LanguageRequest(query="q"))

        assert outcome.kind == ErrorKind.RATE_LIMITED
        assert outcome.error.message == "Too many requests"
        assert not outcome.fallback
        assert transport.calls == 3


class TestGetSources:
    @pytest.mark.asyncio
    async def test_quotes_query_id(self, make_adapter, transport, ok):
        transport.queue(ok([{"url": "https://a.example"}]))
        adapter = make_adapter(PerplexityAdapter, "perplexity")

        outcome = await adapter.get_sources("abc/123")

        assert outcome.data == [{"url": "https://a.example"}]
        assert transport.last.method == "GET"
        assert transport.last.url == "https://api.perplexity.ai/api/sources/abc%2F123"
