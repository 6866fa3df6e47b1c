"""Shared fixtures for provider adapter tests.

Provides a scripted fake transport, adapter factories wired to it, and
response payload builders for each provider.
"""

from dataclasses import replace
from typing import Any, List, Optional

import pytest

from wordgate.config import FallbackConfig, WordgateConfig
from wordgate.core.resilience import (
    BreakerRegistry,
    TransportRequest,
    TransportResponse,
)

# ---------------------------------------------------------------------------
# Fake transport
# ---------------------------------------------------------------------------


class FakeTransport:
    """Transport that records requests and plays back queued responses.

    Queue entries are TransportResponses or exceptions to raise. The last
    entry repeats once the queue is exhausted.
    """

    def __init__(self, *responses: Any):
        self.responses: List[Any] = list(responses) or [TransportResponse(status=200, body={})]
        self.requests: List[TransportRequest] = []

    def queue(self, *responses: Any) -> None:
        self.responses = list(responses)

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def last(self) -> TransportRequest:
        return self.requests[-1]

    async def __call__(self, request: TransportRequest) -> TransportResponse:
        index = min(len(self.requests), len(self.responses) - 1)
        self.requests.append(request)
        result = self.responses[index]
        if isinstance(result, BaseException):
            raise result
        return result


class NoSleep:
    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def fake_sleep():
    return NoSleep()


@pytest.fixture
def ok():
    """Factory fixture: ``ok(body, status=200)``."""

    def _make(body: Any, status: int = 200) -> TransportResponse:
        return TransportResponse(status=status, body=body)

    return _make


@pytest.fixture
def error():
    """Factory fixture: ``error(status, body=None)``."""

    def _make(status: int, body: Any = None) -> TransportResponse:
        return TransportResponse(status=status, body=body)

    return _make


# ---------------------------------------------------------------------------
# Adapter factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_adapter(transport, fake_sleep):
    """Factory fixture building an adapter with a test credential.

    Usage: ``make_adapter(GrokAdapter, "grok", credential=None, fallback=...)``
    """

    def _make(
        adapter_cls,
        name: str,
        *,
        credential: Optional[str] = "test-key",
        fallback: Optional[FallbackConfig] = None,
        registry: Optional[BreakerRegistry] = None,
        **config_overrides: Any,
    ):
        config = replace(
            WordgateConfig().service_config(name),
            credential=credential,
            **config_overrides,
        )
        return adapter_cls(
            config,
            registry=registry,
            transport=transport,
            fallback=fallback,
            sleep_func=fake_sleep,
        )

    return _make


# ---------------------------------------------------------------------------
# Provider payloads
# ---------------------------------------------------------------------------


def suggestion_payload(word: str = "serendipity") -> dict:
    return {
        "suggestions": [
            {
                "word": "fortuity",
                "type": "synonym",
                "score": 0.92,
                "definition": "A chance occurrence",
                "examples": ["It was pure fortuity."],
            }
        ],
        "metadata": {"model": "grok-1", "requestedWord": word, "totalResults": 1},
    }


def anthropic_payload(text: str) -> dict:
    return {
        "id": "msg_01",
        "type": "message",
        "model": "claude-3-7-sonnet",
        "content": [{"type": "text", "text": text}],
        "usage": {"input_tokens": 12, "output_tokens": 30},
    }


@pytest.fixture
def suggestions_body():
    return suggestion_payload


@pytest.fixture
def anthropic_body():
    return anthropic_payload
