"""Resilient outbound-call layer.

Centralized resilience utilities for external service adapters including:
- Error classification into the StandardError taxonomy
- CircuitBreaker state machine per dependency
- ResilientClient retry/backoff orchestration
- BreakerRegistry for sharing breakers between adapters
- Observer interface for logging and metrics
"""

from wordgate.core.resilience.breaker import CircuitBreaker
from wordgate.core.resilience.classifier import (
    RETRYABLE_KINDS,
    STATUS_KINDS,
    classify_exception,
    classify_response,
    classify_status,
    is_retryable,
)
from wordgate.core.resilience.config import (
    SERVICE_RESILIENCE,
    ServiceResilienceConfig,
    get_service_resilience,
)
from wordgate.core.resilience.execution import ResilientClient
from wordgate.core.resilience.models import (
    CallOutcome,
    CircuitBreakerConfig,
    CircuitState,
    CircuitStatus,
    Clock,
    ErrorKind,
    RetryPolicy,
    SleepFunc,
    StandardError,
    TransportRequest,
    TransportResponse,
)
from wordgate.core.resilience.observers import (
    CompositeObserver,
    LoggingObserver,
    NullObserver,
    ResilienceObserver,
)
from wordgate.core.resilience.registry import BreakerRegistry

__all__ = [
    # Models & enums
    "CallOutcome",
    "CircuitBreakerConfig",
    "CircuitState",
    "CircuitStatus",
    "Clock",
    "ErrorKind",
    "RetryPolicy",
    "SleepFunc",
    "StandardError",
    "TransportRequest",
    "TransportResponse",
    # Classification
    "RETRYABLE_KINDS",
    "STATUS_KINDS",
    "classify_exception",
    "classify_response",
    "classify_status",
    "is_retryable",
    # Config
    "SERVICE_RESILIENCE",
    "ServiceResilienceConfig",
    "get_service_resilience",
    # Breaker, client, registry
    "CircuitBreaker",
    "ResilientClient",
    "BreakerRegistry",
    # Observers
    "ResilienceObserver",
    "NullObserver",
    "LoggingObserver",
    "CompositeObserver",
]
