"""Service-specific resilience defaults.

Maps service names to tuned breaker and retry settings and provides a
lookup function with sensible defaults. Values here are the baseline that
TOML and environment overrides are applied on top of.
"""

from dataclasses import dataclass, field

from wordgate.core.resilience.models import CircuitBreakerConfig, RetryPolicy


@dataclass(frozen=True)
class ServiceResilienceConfig:
    """Breaker and retry settings for one service."""

    circuit_breaker: CircuitBreakerConfig = field(default_factory=CircuitBreakerConfig)
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)


SERVICE_RESILIENCE: dict[str, ServiceResilienceConfig] = {
    "replicate": ServiceResilienceConfig(
        # Image generation is slow and expensive; give it longer to recover
        circuit_breaker=CircuitBreakerConfig(
            failure_threshold=3,
            success_threshold=2,
            open_duration_ms=60000,
        ),
        retry_policy=RetryPolicy(max_retries=1, base_backoff_ms=2000),
    ),
    "perplexity": ServiceResilienceConfig(),
    "grok": ServiceResilienceConfig(),
    "anthropic": ServiceResilienceConfig(
        circuit_breaker=CircuitBreakerConfig(
            failure_threshold=3,
            success_threshold=2,
            open_duration_ms=30000,
        ),
        retry_policy=RetryPolicy(max_retries=2, base_backoff_ms=1500),
    ),
}


def get_service_resilience(service_name: str) -> ServiceResilienceConfig:
    """Get resilience configuration for a service.

    Args:
        service_name: Name of the service (e.g., 'perplexity', 'grok')

    Returns:
        Service-specific config or the default config if the service is unknown
    """
    return SERVICE_RESILIENCE.get(service_name, ServiceResilienceConfig())
