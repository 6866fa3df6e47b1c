"""BreakerRegistry: one circuit breaker per external dependency.

The registry is constructed explicitly and handed to the adapters that
share it; there is no module-level singleton. Breakers are created lazily
on first use and live for the lifetime of the registry.
"""

import logging
import threading
from typing import Optional

from wordgate.core.resilience.breaker import CircuitBreaker
from wordgate.core.resilience.config import get_service_resilience
from wordgate.core.resilience.models import (
    CircuitBreakerConfig,
    CircuitStatus,
    Clock,
)
from wordgate.core.resilience.observers import ResilienceObserver

logger = logging.getLogger(__name__)


class BreakerRegistry:
    """Holds the shared circuit breaker for each dependency name.

    Thread-safe via threading.Lock around creation and lookup.
    """

    def __init__(
        self,
        *,
        observer: Optional[ResilienceObserver] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.observer = observer
        self._clock = clock
        self._breakers: dict[str, CircuitBreaker] = {}
        self._lock = threading.Lock()

    def get_or_create(
        self,
        name: str,
        config: Optional[CircuitBreakerConfig] = None,
    ) -> CircuitBreaker:
        """Get the breaker for ``name``, creating it on first use.

        A config passed for a name that already has a breaker is ignored:
        the live breaker and its counters are kept.
        """
        with self._lock:
            breaker = self._breakers.get(name)
            if breaker is None:
                breaker = CircuitBreaker(
                    name,
                    config or get_service_resilience(name).circuit_breaker,
                    clock=self._clock,
                    observer=self.observer,
                )
                self._breakers[name] = breaker
                logger.debug("Created circuit breaker for %s", name)
            elif config is not None and config != breaker.config:
                logger.debug(
                    "Circuit breaker for %s already exists; keeping its config", name
                )
            return breaker

    def get(self, name: str) -> Optional[CircuitBreaker]:
        with self._lock:
            return self._breakers.get(name)

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._breakers)

    def statuses(self) -> dict[str, CircuitStatus]:
        """Get status for all known dependencies."""
        with self._lock:
            breakers = dict(self._breakers)
        return {name: breaker.get_status() for name, breaker in sorted(breakers.items())}

    def reset(self, name: str) -> bool:
        """Reset one breaker. Returns False if no breaker exists for ``name``."""
        breaker = self.get(name)
        if breaker is None:
            return False
        breaker.reset()
        return True

    def reset_all(self) -> None:
        with self._lock:
            breakers = list(self._breakers.values())
        for breaker in breakers:
            breaker.reset()
