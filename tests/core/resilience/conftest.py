"""Shared fixtures for resilience tests.

Provides an injectable clock and sleep so breaker timing and retry backoff
are tested without real waiting, plus a scripted request function that
plays back queued attempt results.
"""

from typing import Any, List

import pytest

from wordgate.core.resilience import (
    CallOutcome,
    CircuitBreaker,
    CircuitBreakerConfig,
    NullObserver,
    TransportResponse,
)


class FakeClock:
    """Manually advanced wall clock in epoch milliseconds."""

    def __init__(self, start: float = 1_700_000_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class FakeSleep:
    """Async sleep that records requested delays instead of waiting."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class ScriptedRequest:
    """Request function returning queued results, one per attempt.

    Exceptions in the script are raised instead of returned. The last
    result repeats once the script is exhausted.
    """

    def __init__(self, *results: Any):
        self.results = list(results)
        self.calls = 0

    async def __call__(self) -> Any:
        index = min(self.calls, len(self.results) - 1)
        self.calls += 1
        result = self.results[index]
        if isinstance(result, BaseException):
            raise result
        return result


class RecordingObserver(NullObserver):
    """Observer that records every event it receives."""

    def __init__(self):
        self.transitions: List[tuple] = []
        self.outcomes: List[tuple] = []
        self.retries: List[tuple] = []
        self.rejections: List[tuple] = []
        self.fallbacks: List[tuple] = []

    def on_state_change(self, name, from_state, to_state):
        self.transitions.append((name, from_state, to_state))

    def on_outcome(self, name, outcome):
        self.outcomes.append((name, outcome))

    def on_retry(self, name, attempt, error, delay_ms):
        self.retries.append((name, attempt, error.kind, delay_ms))

    def on_rejected(self, name, error):
        self.rejections.append((name, error))

    def on_fallback(self, name, capability, cause):
        self.fallbacks.append((name, capability, cause.kind))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def scripted():
    """Factory fixture: ``scripted(result, ...)`` builds a ScriptedRequest."""
    return ScriptedRequest


@pytest.fixture
def response():
    """Factory fixture: ``response(status, body=None, headers=None)``."""

    def _make(status: int, body: Any = None, headers: Any = None) -> TransportResponse:
        return TransportResponse(status=status, body=body, headers=headers or {})

    return _make


@pytest.fixture
def make_breaker(clock, observer):
    """Factory fixture for breakers wired to the fake clock and recording observer."""

    def _make(
        name: str = "test-service",
        failure_threshold: int = 3,
        success_threshold: int = 2,
        open_duration_ms: int = 30000,
        **kwargs: Any,
    ) -> CircuitBreaker:
        return CircuitBreaker(
            name,
            CircuitBreakerConfig(
                failure_threshold=failure_threshold,
                success_threshold=success_threshold,
                open_duration_ms=open_duration_ms,
            ),
            clock=clock,
            observer=kwargs.pop("observer", observer),
            **kwargs,
        )

    return _make


async def succeed() -> CallOutcome[Any]:
    return CallOutcome.ok("ok")


@pytest.fixture
def ok_op():
    """Zero-argument coroutine function returning a successful outcome."""
    return succeed
