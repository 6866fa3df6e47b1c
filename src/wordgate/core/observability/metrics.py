"""Prometheus metrics for the resilient call layer.

MetricsObserver plugs into the ResilienceObserver interface and exports
call outcomes, retries, rejections, and circuit state as Prometheus series.
"""

import logging
import threading
from typing import Any, Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, generate_latest

from wordgate.core.resilience.models import (
    CallOutcome,
    CircuitState,
    StandardError,
)
from wordgate.core.resilience.observers import NullObserver

logger = logging.getLogger(__name__)

CIRCUIT_STATE_VALUES: dict[CircuitState, int] = {
    CircuitState.CLOSED: 0,
    CircuitState.HALF_OPEN: 1,
    CircuitState.OPEN: 2,
}


class MetricsObserver(NullObserver):
    """Exports resilience events as Prometheus metrics.

    Series:
        <ns>_calls_total{service, result, kind}
        <ns>_retries_total{service, kind}
        <ns>_circuit_rejections_total{service}
        <ns>_fallbacks_total{service, capability, kind}
        <ns>_circuit_state{service}   0=closed, 1=half_open, 2=open
    """

    def __init__(
        self,
        registry: Optional[CollectorRegistry] = None,
        namespace: str = "wordgate",
    ):
        self.registry = registry if registry is not None else CollectorRegistry()
        self.namespace = namespace
        self.calls = Counter(
            "calls_total",
            "Logical outbound calls by result",
            ["service", "result", "kind"],
            namespace=namespace,
            registry=self.registry,
        )
        self.retries = Counter(
            "retries_total",
            "Physical retry attempts by error kind",
            ["service", "kind"],
            namespace=namespace,
            registry=self.registry,
        )
        self.rejections = Counter(
            "circuit_rejections_total",
            "Calls rejected by an open circuit",
            ["service"],
            namespace=namespace,
            registry=self.registry,
        )
        self.fallbacks = Counter(
            "fallbacks_total",
            "Degraded responses served from a fallback payload",
            ["service", "capability", "kind"],
            namespace=namespace,
            registry=self.registry,
        )
        self.circuit_state = Gauge(
            "circuit_state",
            "Circuit breaker state (0=closed, 1=half_open, 2=open)",
            ["service"],
            namespace=namespace,
            registry=self.registry,
        )

    def on_state_change(
        self, name: str, from_state: CircuitState, to_state: CircuitState
    ) -> None:
        self.circuit_state.labels(service=name).set(CIRCUIT_STATE_VALUES[to_state])

    def on_outcome(self, name: str, outcome: CallOutcome[Any]) -> None:
        if outcome.success:
            result = "success"
            kind = "none"
        else:
            result = "failure"
            kind = outcome.error.kind.value if outcome.error else "UNKNOWN_ERROR"
        self.calls.labels(service=name, result=result, kind=kind).inc()

    def on_retry(
        self, name: str, attempt: int, error: StandardError, delay_ms: int
    ) -> None:
        self.retries.labels(service=name, kind=error.kind.value).inc()

    def on_rejected(self, name: str, error: StandardError) -> None:
        self.rejections.labels(service=name).inc()

    def on_fallback(self, name: str, capability: str, cause: StandardError) -> None:
        self.fallbacks.labels(service=name, capability=capability, kind=cause.kind.value).inc()

    def render(self) -> str:
        """Render the registry in the Prometheus text exposition format."""
        return generate_latest(self.registry).decode("utf-8")


_metrics_observer: Optional[MetricsObserver] = None
_metrics_lock = threading.Lock()


def get_metrics_observer() -> MetricsObserver:
    """Get the process-wide MetricsObserver bound to the default Prometheus registry.

    Thread-safe via double-checked locking.
    """
    global _metrics_observer
    if _metrics_observer is None:
        with _metrics_lock:
            if _metrics_observer is None:
                _metrics_observer = MetricsObserver(registry=REGISTRY)
    return _metrics_observer
