"""Structured observer interface for resilience events.

The circuit breaker and resilient client never log or export metrics
themselves; they report events to a ResilienceObserver. Observers are
side-effecting hooks only and have no say in the state machine.
"""

import logging
from typing import Any, Callable, Optional, Protocol

from wordgate.core.observability.audit import audit_log
from wordgate.core.resilience.models import (
    CallOutcome,
    CircuitState,
    ErrorKind,
    StandardError,
)

logger = logging.getLogger(__name__)


class ResilienceObserver(Protocol):
    """Receives resilience events for one or more dependencies."""

    def on_state_change(
        self, name: str, from_state: CircuitState, to_state: CircuitState
    ) -> None: ...

    def on_outcome(self, name: str, outcome: CallOutcome[Any]) -> None: ...

    def on_retry(
        self, name: str, attempt: int, error: StandardError, delay_ms: int
    ) -> None: ...

    def on_rejected(self, name: str, error: StandardError) -> None: ...

    def on_fallback(self, name: str, capability: str, cause: StandardError) -> None: ...


class NullObserver:
    """Observer that ignores every event. Subclass and override what you need."""

    def on_state_change(
        self, name: str, from_state: CircuitState, to_state: CircuitState
    ) -> None:
        pass

    def on_outcome(self, name: str, outcome: CallOutcome[Any]) -> None:
        pass

    def on_retry(
        self, name: str, attempt: int, error: StandardError, delay_ms: int
    ) -> None:
        pass

    def on_rejected(self, name: str, error: StandardError) -> None:
        pass

    def on_fallback(self, name: str, capability: str, cause: StandardError) -> None:
        pass


class LoggingObserver(NullObserver):
    """Writes resilience events to the standard logger and the audit log.

    Circuit-open rejections are logged at DEBUG: they are a consequence of an
    incident that was already reported when the circuit tripped.
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        self._logger = log or logger

    def on_state_change(
        self, name: str, from_state: CircuitState, to_state: CircuitState
    ) -> None:
        level = logging.WARNING if to_state == CircuitState.OPEN else logging.INFO
        self._logger.log(
            level,
            "Circuit state changed for %s: %s -> %s",
            name,
            from_state.value,
            to_state.value,
        )
        audit_log(
            "circuit_state_change",
            provider=name,
            old_state=from_state.value,
            new_state=to_state.value,
        )

    def on_outcome(self, name: str, outcome: CallOutcome[Any]) -> None:
        if outcome.success or outcome.error is None:
            return
        if outcome.error.kind == ErrorKind.CIRCUIT_OPEN:
            return
        self._logger.warning(
            "[%s] call failed: %s (%s)",
            name,
            outcome.error.message,
            outcome.error.kind.value,
        )

    def on_retry(
        self, name: str, attempt: int, error: StandardError, delay_ms: int
    ) -> None:
        self._logger.info(
            "[%s] retrying after %s in %dms (attempt %d)",
            name,
            error.kind.value,
            delay_ms,
            attempt + 1,
        )
        audit_log(
            "retry_attempt",
            provider=name,
            attempt=attempt + 1,
            error_type=error.kind.value,
            delay_ms=delay_ms,
            error_message=error.message[:200],
        )

    def on_rejected(self, name: str, error: StandardError) -> None:
        self._logger.debug("[%s] rejected: %s", name, error.message)


class CompositeObserver(NullObserver):
    """Fans every event out to several observers."""

    def __init__(self, *observers: ResilienceObserver):
        self.observers = list(observers)

    def on_state_change(
        self, name: str, from_state: CircuitState, to_state: CircuitState
    ) -> None:
        for observer in self.observers:
            notify(observer.on_state_change, name, from_state, to_state)

    def on_outcome(self, name: str, outcome: CallOutcome[Any]) -> None:
        for observer in self.observers:
            notify(observer.on_outcome, name, outcome)

    def on_retry(
        self, name: str, attempt: int, error: StandardError, delay_ms: int
    ) -> None:
        for observer in self.observers:
            notify(observer.on_retry, name, attempt, error, delay_ms)

    def on_rejected(self, name: str, error: StandardError) -> None:
        for observer in self.observers:
            notify(observer.on_rejected, name, error)

    def on_fallback(self, name: str, capability: str, cause: StandardError) -> None:
        for observer in self.observers:
            notify(observer.on_fallback, name, capability, cause)


def notify(callback: Callable[..., Any], *args: Any) -> None:
    """Invoke an observer callback, logging rather than propagating its errors."""
    try:
        callback(*args)
    except Exception:
        logger.warning("Resilience observer %r failed", callback, exc_info=True)
