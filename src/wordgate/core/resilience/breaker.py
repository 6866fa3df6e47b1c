"""Circuit breaker for one external dependency.

States:
- CLOSED: Normal operation. Consecutive failed calls are counted; any
  success resets the count to zero. Reaching ``failure_threshold`` opens
  the circuit.
- OPEN: Calls are rejected without invoking the operation until
  ``open_duration_ms`` has elapsed. The first call after that moves the
  circuit to HALF_OPEN and is let through as a probe.
- HALF_OPEN: Consecutive successes are counted; reaching
  ``success_threshold`` closes the circuit. A single failure re-opens it.

The breaker sees exactly one outcome per logical call. Retries happen
inside the operation it wraps (see ResilientClient).

Usage:
    breaker = CircuitBreaker("perplexity", CircuitBreakerConfig(failure_threshold=3))
    outcome = await breaker.execute(lambda: client_attempt())
"""

import asyncio
import logging
import threading
from typing import Any, Awaitable, Callable, Optional

from wordgate.core.resilience.classifier import classify_exception
from wordgate.core.resilience.models import (
    CallOutcome,
    CircuitBreakerConfig,
    CircuitState,
    CircuitStatus,
    Clock,
    ErrorKind,
    StandardError,
    wall_clock_ms,
)
from wordgate.core.resilience.observers import ResilienceObserver, notify

logger = logging.getLogger(__name__)

StateChangeCallback = Callable[[CircuitState, CircuitState], None]
Transition = tuple[CircuitState, CircuitState]


class CircuitBreaker:
    """Per-dependency circuit breaker.

    Thread-safe: counters and transitions are mutated under a lock that is
    never held across an ``await``, so two concurrent callers cannot both
    drive the same transition.
    """

    def __init__(
        self,
        name: str,
        config: Optional[CircuitBreakerConfig] = None,
        *,
        clock: Optional[Clock] = None,
        on_state_change: Optional[StateChangeCallback] = None,
        observer: Optional[ResilienceObserver] = None,
    ):
        self.name = name
        self.config = config or CircuitBreakerConfig()
        self.on_state_change = on_state_change
        self.observer = observer
        self._clock: Clock = clock or wall_clock_ms

        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._success_count = 0
        self._next_attempt_at: Optional[float] = None
        self._last_error: Optional[StandardError] = None
        # Bumped on every transition and reset; outcomes carry the value
        # from their admission.
        self._generation = 0
        self._lock = threading.RLock()

    @property
    def state(self) -> CircuitState:
        """Current state. Reading it never triggers a transition."""
        with self._lock:
            return self._state

    @property
    def failure_count(self) -> int:
        with self._lock:
            return self._failure_count

    @property
    def success_count(self) -> int:
        with self._lock:
            return self._success_count

    @property
    def last_error(self) -> Optional[StandardError]:
        with self._lock:
            return self._last_error

    def is_available(self) -> bool:
        """True unless the circuit is OPEN with time left on the clock."""
        with self._lock:
            if self._state != CircuitState.OPEN:
                return True
            return self._remaining_ms() <= 0

    async def execute(
        self,
        op: Callable[[], Awaitable[CallOutcome[Any]]],
    ) -> CallOutcome[Any]:
        """Run ``op`` through the breaker and record its single outcome.

        Args:
            op: Zero-argument coroutine function returning a CallOutcome.

        Returns:
            The operation's outcome, or a CIRCUIT_OPEN failure if the circuit
            rejected the call without invoking ``op``.
        """
        rejection, transitions, generation = self._admit()
        self._emit(transitions)
        if rejection is not None:
            outcome: CallOutcome[Any] = CallOutcome.fail(rejection)
            if self.observer is not None:
                notify(self.observer.on_rejected, self.name, rejection)
                notify(self.observer.on_outcome, self.name, outcome)
            return outcome

        try:
            outcome = await op()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.debug("[%s] operation raised %s", self.name, type(e).__name__)
            outcome = CallOutcome.fail(classify_exception(e))

        if outcome.success:
            self.record_success(generation=generation)
        else:
            self.record_failure(outcome.error, generation=generation)

        if self.observer is not None:
            notify(self.observer.on_outcome, self.name, outcome)
        return outcome

    def record_success(self, *, generation: Optional[int] = None) -> None:
        """Record one successful logical call.

        Args:
            generation: Admission generation of the call. A call admitted
                before the latest transition or reset is ignored.
        """
        with self._lock:
            transitions: list[Transition] = []
            if generation is not None and generation != self._generation:
                logger.debug("[%s] ignoring success from an earlier state", self.name)
            elif self._state == CircuitState.CLOSED:
                self._failure_count = 0
            elif self._state == CircuitState.HALF_OPEN:
                self._success_count += 1
                if self._success_count >= self.config.success_threshold:
                    transitions.append(self._transition(CircuitState.CLOSED))
        self._emit(transitions)

    def record_failure(
        self,
        error: Optional[StandardError] = None,
        *,
        generation: Optional[int] = None,
    ) -> None:
        """Record one failed logical call.

        A failure from an earlier generation only updates ``last_error``.
        """
        with self._lock:
            transitions: list[Transition] = []
            if error is not None:
                self._last_error = error
            if generation is not None and generation != self._generation:
                logger.debug("[%s] ignoring failure from an earlier state", self.name)
            elif self._state == CircuitState.CLOSED:
                self._failure_count += 1
                if self._failure_count >= self.config.failure_threshold:
                    transitions.append(self._transition(CircuitState.OPEN))
            elif self._state == CircuitState.HALF_OPEN:
                transitions.append(self._transition(CircuitState.OPEN))
        self._emit(transitions)

    def get_status(self) -> CircuitStatus:
        """Return a snapshot of counters and timing."""
        with self._lock:
            return CircuitStatus(
                name=self.name,
                state=self._state,
                failure_count=self._failure_count,
                success_count=self._success_count,
                next_attempt_at=self._next_attempt_at,
                remaining_ms=self._remaining_ms(),
                last_error=self._last_error,
            )

    def reset(self) -> None:
        """Force the circuit CLOSED and clear all counters."""
        with self._lock:
            transitions: list[Transition] = []
            if self._state != CircuitState.CLOSED:
                transitions.append(self._transition(CircuitState.CLOSED))
            self._failure_count = 0
            self._success_count = 0
            self._next_attempt_at = None
            self._last_error = None
            self._generation += 1
        logger.info("[%s] circuit breaker manually reset", self.name)
        self._emit(transitions)

    def _admit(self) -> tuple[Optional[StandardError], list[Transition], int]:
        """Decide whether a call may proceed (under lock).

        Returns ``(rejection, transitions, generation)``; ``generation`` tags
        the admitted call.
        """
        with self._lock:
            if self._state != CircuitState.OPEN:
                return None, [], self._generation
            remaining = self._remaining_ms()
            if remaining > 0:
                return self._rejection(remaining), [], self._generation
            transition = self._transition(CircuitState.HALF_OPEN)
            return None, [transition], self._generation

    def _rejection(self, remaining_ms: float) -> StandardError:
        message = f"Circuit breaker is OPEN for {self.name}; retry in {int(remaining_ms)}ms"
        if self._last_error is not None:
            message += f". Last error: {self._last_error.message}"
        return StandardError(
            kind=ErrorKind.CIRCUIT_OPEN,
            message=message,
            retryable=False,
            details={
                "breaker": self.name,
                "retry_after_ms": remaining_ms,
                "last_error": self._last_error.to_dict() if self._last_error else None,
            },
        )

    def _transition(self, to_state: CircuitState) -> Transition:
        """Move to ``to_state`` and reset counters for it (under lock)."""
        from_state = self._state
        self._state = to_state
        self._generation += 1
        if to_state == CircuitState.OPEN:
            self._next_attempt_at = self._clock() + self.config.open_duration_ms
            self._success_count = 0
        elif to_state == CircuitState.HALF_OPEN:
            self._failure_count = 0
            self._success_count = 0
        else:
            self._failure_count = 0
            self._success_count = 0
            self._next_attempt_at = None
        return from_state, to_state

    def _remaining_ms(self) -> float:
        if self._next_attempt_at is None:
            return 0.0
        return max(0.0, self._next_attempt_at - self._clock())

    def _emit(self, transitions: list[Transition]) -> None:
        for from_state, to_state in transitions:
            if self.on_state_change is not None:
                notify(self.on_state_change, from_state, to_state)
            if self.observer is not None:
                notify(self.observer.on_state_change, self.name, from_state, to_state)
