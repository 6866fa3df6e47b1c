"""Retry-with-backoff orchestration around a single logical call.

Combines the circuit breaker, per-attempt timeout, and classified retry:

1. The breaker decides whether the logical call may proceed
2. Each physical attempt runs under a bounded timeout
3. Failures are classified; retryable ones are retried with linear backoff
4. The breaker records exactly one outcome for the whole logical call
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Union

from wordgate.core.resilience.breaker import CircuitBreaker
from wordgate.core.resilience.classifier import classify_exception, classify_response
from wordgate.core.resilience.models import (
    CallOutcome,
    RetryPolicy,
    SleepFunc,
    TransportRequest,
    TransportResponse,
)
from wordgate.core.resilience.observers import ResilienceObserver, notify

logger = logging.getLogger(__name__)

AttemptResult = Union[TransportResponse, CallOutcome[Any]]
RequestFunc = Callable[[], Awaitable[AttemptResult]]


class ResilientClient:
    """Runs logical calls through a circuit breaker with bounded retries.

    Internal retries are invisible to the breaker: a logical call that
    succeeds on its third attempt counts as one success, and one that
    exhausts its retries counts as one failure.

    Example:
        >>> client = ResilientClient(breaker, RetryPolicy(max_retries=2))
        >>> outcome = await client.call(lambda: transport(request))
    """

    def __init__(
        self,
        breaker: CircuitBreaker,
        retry_policy: Optional[RetryPolicy] = None,
        *,
        timeout_ms: Optional[int] = None,
        sleep_func: Optional[SleepFunc] = None,
        observer: Optional[ResilienceObserver] = None,
    ):
        self.breaker = breaker
        self.retry_policy = retry_policy or RetryPolicy()
        self.timeout_ms = timeout_ms
        self.observer = observer
        self._sleep: SleepFunc = sleep_func or asyncio.sleep
        self._inflight: set[asyncio.Task[CallOutcome[Any]]] = set()

    @property
    def name(self) -> str:
        return self.breaker.name

    async def call(
        self,
        request_fn: RequestFunc,
        retries: Optional[int] = None,
        *,
        request: Optional[TransportRequest] = None,
    ) -> CallOutcome[Any]:
        """Execute one logical call.

        Args:
            request_fn: Zero-argument coroutine function performing one
                physical attempt. Returns a TransportResponse (any status)
                or a CallOutcome.
            retries: Retries allowed after the first attempt. Defaults to
                the retry policy's ``max_retries``.
            request: The request being sent, used to enrich error details.

        Returns:
            CallOutcome for the logical call. Never raises for dependency
            failures.

        If the awaiting caller is cancelled the call keeps running to
        completion and still reports its outcome to the breaker.
        """
        if retries is None:
            retries = self.retry_policy.max_retries
        if retries < 0:
            raise ValueError(f"retries must be >= 0, got {retries}")

        task = asyncio.ensure_future(
            self.breaker.execute(lambda: self._attempt(request_fn, retries, request))
        )
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return await asyncio.shield(task)

    async def _attempt(
        self,
        request_fn: RequestFunc,
        retries: int,
        request: Optional[TransportRequest],
    ) -> CallOutcome[Any]:
        attempt = 0
        while True:
            outcome = await self._attempt_once(request_fn, request)
            error = outcome.error
            if outcome.success or error is None:
                return outcome
            if not error.retryable or retries <= 0:
                return outcome

            delay_ms = self.retry_policy.backoff_ms(retries)
            if self.observer is not None:
                notify(self.observer.on_retry, self.name, attempt, error, delay_ms)
            logger.debug(
                "[%s] %s, %d retries remaining, backing off %dms",
                self.name,
                error.kind.value,
                retries,
                delay_ms,
            )
            await self._sleep(delay_ms / 1000.0)
            retries -= 1
            attempt += 1

    async def _attempt_once(
        self,
        request_fn: RequestFunc,
        request: Optional[TransportRequest],
    ) -> CallOutcome[Any]:
        try:
            if self.timeout_ms is not None:
                result = await asyncio.wait_for(request_fn(), timeout=self.timeout_ms / 1000.0)
            else:
                result = await request_fn()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            return CallOutcome.fail(classify_exception(e, request))
        return self._to_outcome(result, request)

    @staticmethod
    def _to_outcome(
        result: Any,
        request: Optional[TransportRequest],
    ) -> CallOutcome[Any]:
        if isinstance(result, CallOutcome):
            return result
        if isinstance(result, TransportResponse):
            if result.is_error:
                return CallOutcome.fail(classify_response(result, request))
            return CallOutcome.ok(result.body, result.status)
        return CallOutcome.ok(result)
