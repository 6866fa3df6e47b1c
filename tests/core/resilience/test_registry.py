"""Tests for BreakerRegistry and per-service resilience defaults."""

import pytest

from wordgate.core.resilience import (
    SERVICE_RESILIENCE,
    BreakerRegistry,
    CircuitBreakerConfig,
    CircuitState,
    RetryPolicy,
    get_service_resilience,
)


class TestBreakerRegistry:
    """Tests for sharing one breaker per dependency name."""

    def test_get_or_create_returns_same_instance(self):
        registry = BreakerRegistry()
        first = registry.get_or_create("grok")
        second = registry.get_or_create("grok")
        assert first is second

    def test_distinct_names_get_distinct_breakers(self):
        registry = BreakerRegistry()
        assert registry.get_or_create("grok") is not registry.get_or_create("perplexity")

    def test_registries_are_independent(self):
        """No hidden global state between registries."""
        a = BreakerRegistry()
        b = BreakerRegistry()
        a.get_or_create("grok").record_failure()
        assert b.get_or_create("grok").failure_count == 0

    def test_uses_service_defaults_when_no_config(self):
        registry = BreakerRegistry()
        breaker = registry.get_or_create("replicate")
        assert breaker.config == SERVICE_RESILIENCE["replicate"].circuit_breaker

    def test_existing_breaker_keeps_its_config(self):
        registry = BreakerRegistry()
        original = registry.get_or_create("grok", CircuitBreakerConfig(failure_threshold=2))
        again = registry.get_or_create("grok", CircuitBreakerConfig(failure_threshold=9))
        assert again is original
        assert again.config.failure_threshold == 2

    def test_clock_and_observer_are_passed_to_breakers(self, clock, observer):
        registry = BreakerRegistry(observer=observer, clock=clock)
        breaker = registry.get_or_create("grok", CircuitBreakerConfig(failure_threshold=1))

        breaker.record_failure()

        assert breaker.get_status().next_attempt_at == clock() + 30000
        assert observer.transitions == [("grok", CircuitState.CLOSED, CircuitState.OPEN)]

    def test_get_and_names(self):
        registry = BreakerRegistry()
        assert registry.get("grok") is None
        registry.get_or_create("perplexity")
        registry.get_or_create("anthropic")
        assert registry.names() == ["anthropic", "perplexity"]

    def test_statuses(self):
        registry = BreakerRegistry()
        registry.get_or_create("grok", CircuitBreakerConfig(failure_threshold=1)).record_failure()
        registry.get_or_create("perplexity")

        statuses = registry.statuses()

        assert list(statuses) == ["grok", "perplexity"]
        assert statuses["grok"].state == CircuitState.OPEN
        assert statuses["perplexity"].state == CircuitState.CLOSED

    def test_reset_one(self):
        registry = BreakerRegistry()
        breaker = registry.get_or_create("grok", CircuitBreakerConfig(failure_threshold=1))
        breaker.record_failure()

        assert registry.reset("grok") is True
        assert breaker.state == CircuitState.CLOSED
        assert registry.reset("unknown") is False

    def test_reset_all(self):
        registry = BreakerRegistry()
        for name in ("grok", "perplexity"):
            registry.get_or_create(name, CircuitBreakerConfig(failure_threshold=1)).record_failure()

        registry.reset_all()

        assert all(s.state == CircuitState.CLOSED for s in registry.statuses().values())


class TestServiceResilience:
    """Tests for the per-service baseline settings."""

    def test_replicate_recovers_slowly(self):
        config = get_service_resilience("replicate")
        assert config.circuit_breaker.open_duration_ms == 60000
        assert config.retry_policy == RetryPolicy(max_retries=1, base_backoff_ms=2000)

    def test_anthropic_backoff(self):
        config = get_service_resilience("anthropic")
        assert config.retry_policy == RetryPolicy(max_retries=2, base_backoff_ms=1500)

    @pytest.mark.parametrize("name", ["perplexity", "grok", "something-else"])
    def test_defaults(self, name):
        config = get_service_resilience(name)
        assert config.circuit_breaker == CircuitBreakerConfig()
        assert config.retry_policy == RetryPolicy()
