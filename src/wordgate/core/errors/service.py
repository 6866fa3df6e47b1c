"""Service call error classes.

The call path itself never raises for dependency failures; these exist for
callers that prefer exceptions and opt in via ``CallOutcome.unwrap()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from wordgate.core.resilience.models import ErrorKind, StandardError

if TYPE_CHECKING:
    from wordgate.core.resilience.models import CallOutcome


class ServiceCallError(Exception):
    """Base exception for a failed logical call.

    Attributes:
        error: The StandardError describing the failure
        kind: Shortcut for ``error.kind``
        retryable: Shortcut for ``error.retryable``
    """

    def __init__(self, error: StandardError):
        self.error = error
        self.kind = error.kind
        self.retryable = error.retryable
        super().__init__(f"[{error.kind.value}] {error.message}")


class CircuitOpenError(ServiceCallError):
    """The dependency's circuit is open and the call was not attempted.

    Attributes:
        retry_after_ms: Milliseconds until the circuit admits a probe call
    """

    def __init__(self, error: StandardError):
        super().__init__(error)
        details = error.details or {}
        self.retry_after_ms: Optional[float] = details.get("retry_after_ms")


class RetryableServiceError(ServiceCallError):
    """A transient failure that outlasted every retry."""


class ServiceConfigurationError(ServiceCallError):
    """The adapter is missing credentials and refused to call out.

    Attributes:
        missing: Names of the missing settings (environment variables)
    """

    def __init__(self, error: StandardError):
        super().__init__(error)
        details = error.details or {}
        self.missing: list[str] = list(details.get("missing", []))


def error_for_outcome(outcome: "CallOutcome[Any]") -> ServiceCallError:
    """Build the exception matching a failed outcome."""
    error = outcome.error or StandardError(
        kind=ErrorKind.UNKNOWN_ERROR,
        message="Call failed without an error description",
    )
    if error.kind == ErrorKind.CIRCUIT_OPEN:
        return CircuitOpenError(error)
    if error.kind == ErrorKind.UNAUTHORIZED and (error.details or {}).get("missing"):
        return ServiceConfigurationError(error)
    if error.retryable:
        return RetryableServiceError(error)
    return ServiceCallError(error)
