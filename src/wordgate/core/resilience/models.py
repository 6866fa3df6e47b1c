"""Resilience data models, enums, and protocols.

Defines the core types used across the resilience sub-package:
- CircuitState and ErrorKind enums
- StandardError, the closed error taxonomy every failure is normalized into
- CallOutcome, the result of one logical call
- RetryPolicy and CircuitBreakerConfig value objects
- CircuitStatus for observability
- SleepFunc and Clock protocols for injectable time
"""

import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, Protocol, TypeVar

T = TypeVar("T")


class CircuitState(str, Enum):
    """Circuit breaker states."""

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class ErrorKind(str, Enum):
    """Standardized error kinds for every outbound-call failure."""

    CIRCUIT_OPEN = "CIRCUIT_OPEN"
    NETWORK_ERROR = "NETWORK_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMITED = "RATE_LIMITED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    BAD_GATEWAY = "BAD_GATEWAY"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    GATEWAY_TIMEOUT = "GATEWAY_TIMEOUT"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


@dataclass(frozen=True)
class StandardError:
    """A failure normalized into the closed error taxonomy.

    Attributes:
        kind: Error kind from the taxonomy
        message: Human-readable description
        retryable: Whether the failure is transient and safe to retry
        http_status: HTTP status code, if the failure came from a response
        details: Additional context (url, method, provider payload, ...)
    """

    kind: ErrorKind
    message: str
    retryable: bool = False
    http_status: Optional[int] = None
    details: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "kind": self.kind.value,
            "message": self.message,
            "retryable": self.retryable,
        }
        if self.http_status is not None:
            result["http_status"] = self.http_status
        if self.details:
            result["details"] = self.details
        return result


@dataclass
class CallOutcome(Generic[T]):
    """Result of one logical call.

    Either a success carrying ``data`` and ``status``, or a failure carrying a
    ``StandardError``. A degraded outcome is a success whose ``data`` is a
    fallback payload; ``fallback`` is True and ``error`` holds the cause.
    """

    success: bool
    data: Optional[T] = None
    status: int = 0
    error: Optional[StandardError] = None
    fallback: bool = False

    @classmethod
    def ok(cls, data: Optional[T], status: int = 200) -> "CallOutcome[T]":
        return cls(success=True, data=data, status=status)

    @classmethod
    def fail(cls, error: StandardError) -> "CallOutcome[T]":
        return cls(success=False, status=error.http_status or 0, error=error)

    @classmethod
    def degraded(cls, data: T, cause: Optional[StandardError]) -> "CallOutcome[T]":
        return cls(success=True, data=data, status=200, error=cause, fallback=True)

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> Optional[T]:
        """Return the payload or raise the matching ServiceCallError.

        Degraded outcomes unwrap to their fallback payload.
        """
        if self.success:
            return self.data
        from wordgate.core.errors.service import error_for_outcome

        raise error_for_outcome(self)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "success": self.success,
            "status": self.status,
            "fallback": self.fallback,
            "data": self.data,
        }
        if self.error is not None:
            result["error"] = self.error.to_dict()
        return result


def _ensure(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded linear backoff for retryable failures.

    Attributes:
        max_retries: Retries after the first attempt (>= 0)
        base_backoff_ms: Delay unit in milliseconds (> 0)
    """

    max_retries: int = 2
    base_backoff_ms: int = 1000

    def __post_init__(self) -> None:
        _ensure(self.max_retries >= 0, f"max_retries must be >= 0, got {self.max_retries}")
        _ensure(
            self.base_backoff_ms > 0,
            f"base_backoff_ms must be > 0, got {self.base_backoff_ms}",
        )

    def backoff_ms(self, retries_left: int) -> int:
        """Delay before the next attempt when ``retries_left`` retries remain.

        Grows linearly: the first retry waits one unit, the second two units.
        """
        multiplier = max(1, self.max_retries - retries_left + 1)
        return self.base_backoff_ms * multiplier


@dataclass(frozen=True)
class CircuitBreakerConfig:
    """Thresholds for one circuit breaker.

    Attributes:
        failure_threshold: Consecutive failed calls that open the circuit (>= 1)
        success_threshold: Consecutive half-open successes that close it (>= 1)
        open_duration_ms: Time spent OPEN before a probe is allowed (> 0)
    """

    failure_threshold: int = 3
    success_threshold: int = 2
    open_duration_ms: int = 30000

    def __post_init__(self) -> None:
        _ensure(
            self.failure_threshold >= 1,
            f"failure_threshold must be >= 1, got {self.failure_threshold}",
        )
        _ensure(
            self.success_threshold >= 1,
            f"success_threshold must be >= 1, got {self.success_threshold}",
        )
        _ensure(
            self.open_duration_ms > 0,
            f"open_duration_ms must be > 0, got {self.open_duration_ms}",
        )


@dataclass
class CircuitStatus:
    """Snapshot of a circuit breaker for observability."""

    name: str
    state: CircuitState
    failure_count: int
    success_count: int
    next_attempt_at: Optional[float]
    remaining_ms: float
    last_error: Optional[StandardError] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "state": self.state.value,
            "failure_count": self.failure_count,
            "success_count": self.success_count,
            "next_attempt_at": self.next_attempt_at,
            "remaining_ms": self.remaining_ms,
            "last_error": self.last_error.to_dict() if self.last_error else None,
        }


@dataclass
class TransportRequest:
    """One physical HTTP request handed to the transport."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    json: Any = None
    params: Optional[dict[str, Any]] = None
    timeout_ms: int = 15000

    def describe(self) -> dict[str, Any]:
        return {"method": self.method.upper(), "url": self.url}


@dataclass
class TransportResponse:
    """Raw response returned by the transport, for any status code."""

    status: int
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return self.status >= 400

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class SleepFunc(Protocol):
    """Protocol for injectable sleep function."""

    async def __call__(self, seconds: float) -> None: ...


class Clock(Protocol):
    """Protocol for an injectable wall clock returning epoch milliseconds."""

    def __call__(self) -> float: ...


def wall_clock_ms() -> float:
    """Current wall-clock time in epoch milliseconds."""
    return time.time() * 1000.0
