"""Domain-specific configuration dataclasses.

Contains small, focused configuration classes for distinct concerns:
resilience overrides, fallback payloads, and metrics export.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

from wordgate.config.parsing import _parse_bool, _try_parse_bool, _try_parse_int
from wordgate.core.resilience.config import ServiceResilienceConfig

DEFAULT_FALLBACK_IMAGES = [
    "/fallback/language-1.svg",
    "/fallback/language-2.svg",
    "/fallback/language-3.svg",
]
DEFAULT_PLACEHOLDER_URL = "/fallback/image-placeholder.svg"

# field name -> minimum accepted value
_RESILIENCE_MINIMUMS: Dict[str, int] = {
    "failure_threshold": 1,
    "success_threshold": 1,
    "open_duration_ms": 1,
    "retry_count": 0,
    "base_backoff_ms": 1,
}


@dataclass
class ResilienceSettings:
    """Breaker and retry overrides.

    Every field is optional; None keeps the value from the layer below
    (the per-service baseline in ``SERVICE_RESILIENCE``).

    Attributes:
        failure_threshold: Consecutive failed calls that open a circuit
        success_threshold: Consecutive half-open successes that close it
        open_duration_ms: Time a circuit stays OPEN before a probe
        retry_count: Retries after the first attempt of a logical call
        base_backoff_ms: Linear backoff unit between retries
    """

    failure_threshold: Optional[int] = None
    success_threshold: Optional[int] = None
    open_duration_ms: Optional[int] = None
    retry_count: Optional[int] = None
    base_backoff_ms: Optional[int] = None

    @classmethod
    def from_toml_dict(
        cls,
        data: Dict[str, Any],
        warnings: Optional[List[str]] = None,
        *,
        source: str = "[resilience]",
    ) -> "ResilienceSettings":
        """Create settings from a TOML dict (typically [resilience] section).

        Invalid values are skipped and reported through ``warnings``.
        """
        sink: List[str] = warnings if warnings is not None else []
        values: Dict[str, Optional[int]] = {}
        for name, minimum in _RESILIENCE_MINIMUMS.items():
            if name in data:
                values[name] = _try_parse_int(
                    data[name],
                    name=f"{source}.{name}",
                    minimum=minimum,
                    warnings=sink,
                )
        return cls(**values)

    def overlay(self, other: "ResilienceSettings") -> "ResilienceSettings":
        """Return a copy with every non-None field of ``other`` applied."""
        updates = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if getattr(other, f.name) is not None
        }
        return replace(self, **updates)

    def apply_to(self, base: ServiceResilienceConfig) -> ServiceResilienceConfig:
        """Apply the overrides on top of a service's baseline config."""
        breaker_updates: Dict[str, int] = {}
        if self.failure_threshold is not None:
            breaker_updates["failure_threshold"] = self.failure_threshold
        if self.success_threshold is not None:
            breaker_updates["success_threshold"] = self.success_threshold
        if self.open_duration_ms is not None:
            breaker_updates["open_duration_ms"] = self.open_duration_ms

        retry_updates: Dict[str, int] = {}
        if self.retry_count is not None:
            retry_updates["max_retries"] = self.retry_count
        if self.base_backoff_ms is not None:
            retry_updates["base_backoff_ms"] = self.base_backoff_ms

        return ServiceResilienceConfig(
            circuit_breaker=replace(base.circuit_breaker, **breaker_updates),
            retry_policy=replace(base.retry_policy, **retry_updates),
        )

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


@dataclass
class FallbackConfig:
    """Configuration for degraded responses.

    Attributes:
        images: Serve a fallback image when image generation is unavailable
        suggestions: Serve offline word suggestions when Grok is unavailable
        local_images: Candidate fallback image URLs
        placeholder_url: Image URL used when no candidate is configured
    """

    images: bool = True
    suggestions: bool = True
    local_images: List[str] = field(default_factory=lambda: list(DEFAULT_FALLBACK_IMAGES))
    placeholder_url: str = DEFAULT_PLACEHOLDER_URL

    @classmethod
    def from_toml_dict(
        cls,
        data: Dict[str, Any],
        warnings: Optional[List[str]] = None,
        *,
        source: str = "[fallback]",
    ) -> "FallbackConfig":
        """Create config from TOML dict (typically [fallback] section).

        Invalid values are skipped and reported through ``warnings``; the
        default is kept for each of them.
        """
        sink: List[str] = warnings if warnings is not None else []
        config = cls()
        for name in ("images", "suggestions"):
            if name not in data:
                continue
            parsed = _try_parse_bool(data[name])
            if parsed is None:
                sink.append(
                    f"Ignoring {source}.{name}: expected a boolean, got {data[name]!r}"
                )
            else:
                setattr(config, name, parsed)

        if "local_images" in data:
            images = data["local_images"]
            if isinstance(images, list) and all(isinstance(item, str) for item in images):
                config.local_images = list(images)
            else:
                sink.append(
                    f"Ignoring {source}.local_images: expected a list of strings, "
                    f"got {images!r}"
                )

        if "placeholder_url" in data:
            placeholder = data["placeholder_url"]
            if isinstance(placeholder, str) and placeholder:
                config.placeholder_url = placeholder
            else:
                sink.append(
                    f"Ignoring {source}.placeholder_url: expected a non-empty string, "
                    f"got {placeholder!r}"
                )
        return config

    def is_enabled(self, capability: str) -> bool:
        """Whether a fallback is enabled for ``capability`` ('images' or 'suggestions')."""
        if capability == "images":
            return self.images
        if capability == "suggestions":
            return self.suggestions
        return False


@dataclass
class MetricsConfig:
    """Configuration for Prometheus metrics.

    Attributes:
        enabled: Attach a MetricsObserver to the breaker registry
        namespace: Metric name prefix
    """

    enabled: bool = False
    namespace: str = "wordgate"

    @classmethod
    def from_toml_dict(cls, data: Dict[str, Any]) -> "MetricsConfig":
        return cls(
            enabled=_parse_bool(data.get("enabled", False)),
            namespace=str(data.get("namespace", "wordgate")),
        )
