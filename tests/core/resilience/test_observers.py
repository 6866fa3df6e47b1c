"""Tests for resilience observers."""

import logging

import pytest

from wordgate.core.resilience import (
    CallOutcome,
    CircuitState,
    CompositeObserver,
    ErrorKind,
    LoggingObserver,
    NullObserver,
    StandardError,
)

AUDIT_LOGGER = "wordgate.core.observability.audit.audit"


def _error(kind=ErrorKind.BAD_GATEWAY, message="bad gateway"):
    return StandardError(kind=kind, message=message, retryable=True)


class TestLoggingObserver:
    """Tests for log lines and audit events."""

    def test_open_transition_logged_as_warning(self, caplog):
        observer = LoggingObserver()
        with caplog.at_level(logging.INFO, logger="wordgate"):
            observer.on_state_change("grok", CircuitState.CLOSED, CircuitState.OPEN)

        records = [r for r in caplog.records if "Circuit state changed" in r.getMessage()]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert "closed -> open" in records[0].getMessage()

    def test_state_change_emits_audit_event(self, caplog):
        observer = LoggingObserver()
        with caplog.at_level(logging.INFO, logger=AUDIT_LOGGER):
            observer.on_state_change("grok", CircuitState.OPEN, CircuitState.HALF_OPEN)

        audits = [r.audit for r in caplog.records if hasattr(r, "audit")]
        assert audits[-1]["event_type"] == "circuit_state_change"
        assert audits[-1]["details"] == {
            "provider": "grok",
            "old_state": "open",
            "new_state": "half_open",
        }

    def test_retry_emits_audit_event(self, caplog):
        observer = LoggingObserver()
        with caplog.at_level(logging.INFO, logger=AUDIT_LOGGER):
            observer.on_retry("perplexity", 0, _error(), 1000)

        audit = [r.audit for r in caplog.records if hasattr(r, "audit")][-1]
        assert audit["event_type"] == "retry_attempt"
        assert audit["details"]["attempt"] == 1
        assert audit["details"]["error_type"] == "BAD_GATEWAY"
        assert audit["details"]["delay_ms"] == 1000

    def test_circuit_open_outcome_not_logged_as_incident(self, caplog):
        observer = LoggingObserver()
        rejection = CallOutcome.fail(
            StandardError(kind=ErrorKind.CIRCUIT_OPEN, message="Circuit breaker is OPEN")
        )
        with caplog.at_level(logging.DEBUG, logger="wordgate"):
            observer.on_outcome("grok", rejection)
            observer.on_rejected("grok", rejection.error)

        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    def test_failed_outcome_logged(self, caplog):
        observer = LoggingObserver()
        with caplog.at_level(logging.WARNING, logger="wordgate"):
            observer.on_outcome("grok", CallOutcome.fail(_error(message="upstream")))

        assert any("upstream" in r.getMessage() for r in caplog.records)

    def test_success_outcome_is_silent(self, caplog):
        observer = LoggingObserver()
        with caplog.at_level(logging.DEBUG, logger="wordgate"):
            observer.on_outcome("grok", CallOutcome.ok("fine"))
        assert caplog.records == []


class TestCompositeObserver:
    """Tests for fan-out to several observers."""

    def test_fans_out_every_event(self, observer):
        second = type(observer)()
        composite = CompositeObserver(observer, second)

        composite.on_state_change("grok", CircuitState.CLOSED, CircuitState.OPEN)
        composite.on_outcome("grok", CallOutcome.ok(None))
        composite.on_retry("grok", 0, _error(), 500)
        composite.on_rejected("grok", _error(ErrorKind.CIRCUIT_OPEN))
        composite.on_fallback("grok", "suggestions", _error())

        for recorder in (observer, second):
            assert len(recorder.transitions) == 1
            assert len(recorder.outcomes) == 1
            assert len(recorder.retries) == 1
            assert len(recorder.rejections) == 1
            assert recorder.fallbacks == [("grok", "suggestions", ErrorKind.BAD_GATEWAY)]

    def test_failing_observer_does_not_block_others(self, observer):
        class Broken(NullObserver):
            def on_outcome(self, name, outcome):
                raise RuntimeError("exporter offline")

        composite = CompositeObserver(Broken(), observer)
        composite.on_outcome("grok", CallOutcome.ok(None))

        assert len(observer.outcomes) == 1


class TestObserverIsolation:
    """A raising observer never changes breaker behavior."""

    @pytest.mark.asyncio
    async def test_breaker_survives_broken_observer(self, make_breaker):
        class Broken(NullObserver):
            def on_state_change(self, name, from_state, to_state):
                raise RuntimeError("nope")

            def on_outcome(self, name, outcome):
                raise RuntimeError("nope")

        breaker = make_breaker(failure_threshold=1, observer=Broken())

        async def fail():
            return CallOutcome.fail(_error())

        outcome = await breaker.execute(fail)

        assert outcome.kind == ErrorKind.BAD_GATEWAY
        assert breaker.state == CircuitState.OPEN
