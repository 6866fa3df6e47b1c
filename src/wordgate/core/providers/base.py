"""Base class for external service adapters.

A ServiceAdapter owns one dependency's view of the resilience layer:

- a CircuitBreaker shared through a BreakerRegistry (keyed by service name)
- a ResilientClient applying the service's retry policy and timeout
- a transport performing the physical HTTP requests

Missing credentials short-circuit before the client and breaker are
touched: a configuration gap is not a transient fault and must never
consume failure budget.

Example usage:
    class GrokAdapter(ServiceAdapter):
        async def get_word_info(self, word: str) -> CallOutcome[Any]:
            return await self._get(f"/api/wordinfo/{quote(word, safe='')}")
"""

import logging
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from wordgate.config.domains import FallbackConfig
from wordgate.config.services import ServiceConfig
from wordgate.core.observability.audit import audit_log, get_audit_logger
from wordgate.core.resilience import (
    BreakerRegistry,
    CallOutcome,
    CircuitStatus,
    Clock,
    ErrorKind,
    ResilienceObserver,
    ResilientClient,
    SleepFunc,
    StandardError,
    TransportRequest,
)
from wordgate.core.resilience.observers import notify
from wordgate.core.transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")


class ServiceAdapter:
    """Base adapter for one external provider.

    Subclasses add provider operations built on ``_get``/``_post``,
    ``_parse`` and ``_with_fallback``. Every public operation returns a
    CallOutcome; dependency failures are never raised.

    Attributes:
        config: Resolved service configuration
        registry: Registry holding the shared breaker
        breaker: This service's circuit breaker
        client: ResilientClient wrapping the breaker
        fallback: Fallback switches and payload sources
    """

    extra_headers: Dict[str, str] = {}

    def __init__(
        self,
        config: ServiceConfig,
        *,
        registry: Optional[BreakerRegistry] = None,
        transport: Optional[Transport] = None,
        observer: Optional[ResilienceObserver] = None,
        fallback: Optional[FallbackConfig] = None,
        sleep_func: Optional[SleepFunc] = None,
        clock: Optional[Clock] = None,
    ):
        self.config = config
        self.registry = registry or BreakerRegistry(observer=observer, clock=clock)
        self.breaker = self.registry.get_or_create(config.name, config.circuit_breaker)
        self.fallback = fallback or FallbackConfig()
        self.client = ResilientClient(
            self.breaker,
            config.retry_policy,
            timeout_ms=config.timeout_ms,
            sleep_func=sleep_func,
            observer=observer if observer is not None else self.registry.observer,
        )
        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpxTransport()

    @property
    def name(self) -> str:
        return self.config.name

    def is_configured(self) -> bool:
        return self.config.is_configured

    def missing_settings(self) -> list[str]:
        """Names of the environment variables this adapter still needs."""
        if self.config.is_configured:
            return []
        return [self.config.credential_env or f"{self.name}.credential"]

    def get_circuit_status(self) -> CircuitStatus:
        return self.breaker.get_status()

    def reset_circuit(self) -> None:
        """Manually close this service's circuit."""
        previous = self.breaker.state
        self.breaker.reset()
        audit_log("circuit_reset", provider=self.name, old_state=previous.value)

    async def aclose(self) -> None:
        """Close the transport if this adapter created it."""
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            await self._transport.aclose()

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.config.credential}"}

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            **self.config.default_headers,
            **self.extra_headers,
            **self._auth_headers(),
        }

    def _url(self, path: str) -> str:
        return f"{self.config.base_url}/{path.lstrip('/')}"

    def _missing_credentials(self) -> CallOutcome[Any]:
        missing = self.missing_settings()
        logger.warning(
            "No API key configured for %s (missing: %s)",
            self.config.display_name,
            ", ".join(missing),
        )
        get_audit_logger().config_missing(self.name, missing)
        return CallOutcome.fail(
            StandardError(
                kind=ErrorKind.UNAUTHORIZED,
                message=f"No API key provided for {self.config.display_name}",
                retryable=False,
                http_status=401,
                details={"service": self.name, "missing": missing},
            )
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        retries: Optional[int] = None,
    ) -> CallOutcome[Any]:
        """Run one logical call against ``path`` through the resilient client.

        Args:
            method: HTTP method
            path: Path relative to the service's base URL
            json: JSON request body
            params: Query parameters
            retries: Retries after the first attempt (default: the retry policy's)

        Returns:
            CallOutcome with the decoded response body on success
        """
        if not self.is_configured():
            return self._missing_credentials()

        request = TransportRequest(
            method=method,
            url=self._url(path),
            headers=self._headers(),
            json=json,
            params=params,
            timeout_ms=self.config.timeout_ms,
        )
        transport = self._transport
        return await self.client.call(lambda: transport(request), retries, request=request)

    async def _get(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        retries: Optional[int] = None,
    ) -> CallOutcome[Any]:
        return await self.request("GET", path, params=params, retries=retries)

    async def _post(
        self,
        path: str,
        json: Any,
        *,
        retries: Optional[int] = None,
    ) -> CallOutcome[Any]:
        return await self.request("POST", path, json=json, retries=retries)

    # ------------------------------------------------------------------
    # Response helpers
    # ------------------------------------------------------------------

    def _parse(self, outcome: CallOutcome[Any], model: Type[M]) -> CallOutcome[M]:
        """Validate a successful outcome's payload into ``model``."""
        if not outcome.success:
            return outcome
        try:
            parsed = model.model_validate(outcome.data)
        except ValidationError as e:
            logger.warning(
                "Invalid %s payload from %s: %d validation error(s)",
                model.__name__,
                self.config.display_name,
                e.error_count(),
            )
            return CallOutcome.fail(
                StandardError(
                    kind=ErrorKind.UNKNOWN_ERROR,
                    message=f"Unexpected response from {self.config.display_name}",
                    retryable=False,
                    details={
                        "service": self.name,
                        "validation_errors": [
                            {
                                "loc": [str(part) for part in err["loc"]],
                                "msg": err["msg"],
                                "type": err["type"],
                            }
                            for err in e.errors()
                        ],
                    },
                )
            )
        return CallOutcome.ok(parsed, outcome.status)

    def _with_fallback(
        self,
        outcome: CallOutcome[T],
        capability: str,
        factory: Callable[[], T],
    ) -> CallOutcome[T]:
        """Substitute a degraded payload when the live path is exhausted.

        Applies only when the call was rejected by an open circuit or failed
        with a retryable kind after its retries, and the capability's
        fallback is enabled.
        """
        error = outcome.error
        if outcome.success or error is None:
            return outcome
        if error.kind != ErrorKind.CIRCUIT_OPEN and not error.retryable:
            return outcome
        if not self.fallback.is_enabled(capability):
            return outcome

        logger.info(
            "Serving %s fallback for %s after %s",
            capability,
            self.name,
            error.kind.value,
        )
        get_audit_logger().fallback_used(
            self.name, capability, error.kind.value, message=error.message[:200]
        )
        if self.client.observer is not None:
            notify(self.client.observer.on_fallback, self.name, capability, error)
        return CallOutcome.degraded(factory(), error)
