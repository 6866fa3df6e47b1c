"""Per-service settings and environment validation.

Each external provider has a static definition (display name, default URL,
credential variable, default timeout) and a resolved ``ServiceConfig``
produced by ``WordgateConfig.service_config()``.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from wordgate.config.domains import ResilienceSettings
from wordgate.config.parsing import _try_parse_int
from wordgate.core.resilience.models import CircuitBreakerConfig, RetryPolicy

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 15000


@dataclass(frozen=True)
class ServiceDefinition:
    """Static facts about one external provider."""

    name: str
    display_name: str
    base_url: str
    credential_env: str
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    default_model: Optional[str] = None
    url_env: Optional[str] = None
    model_env: Optional[str] = None


SERVICE_DEFINITIONS: Dict[str, ServiceDefinition] = {
    "replicate": ServiceDefinition(
        name="replicate",
        display_name="Replicate Flux",
        base_url="https://api.replicate.com",
        credential_env="REPLICATE_API_TOKEN",
        # Image generation takes longer
        timeout_ms=30000,
        default_model="black-forest-labs/flux-1.1-pro",
        model_env="REPLICATE_FLUX_MODEL",
    ),
    "perplexity": ServiceDefinition(
        name="perplexity",
        display_name="Perplexity AI",
        base_url="https://api.perplexity.ai",
        credential_env="PERPLEXITY_API_KEY",
        timeout_ms=20000,
        default_model="sonar-small-online",
        url_env="PERPLEXITY_API_URL",
    ),
    "grok": ServiceDefinition(
        name="grok",
        display_name="Grok AI",
        base_url="https://api.grok.ai",
        credential_env="GROK_API_KEY",
        timeout_ms=15000,
        default_model="grok-1",
        url_env="GROK_API_URL",
    ),
    "anthropic": ServiceDefinition(
        name="anthropic",
        display_name="Anthropic Claude",
        base_url="https://api.anthropic.com",
        credential_env="ANTHROPIC_API_KEY",
        timeout_ms=30000,
        default_model="claude-3-7-sonnet",
        url_env="ANTHROPIC_API_URL",
        model_env="ANTHROPIC_MODEL",
    ),
}

REQUIRED_ENV_VARS: Dict[str, tuple[str, ...]] = {
    "replicate": ("REPLICATE_API_TOKEN", "REPLICATE_FLUX_MODEL"),
    "perplexity": ("PERPLEXITY_API_KEY",),
    "grok": ("GROK_API_KEY",),
    "anthropic": ("ANTHROPIC_API_KEY",),
}
"""Environment variables each service needs to run against the live API."""


@dataclass
class ServiceSettings:
    """User overrides for one service, from TOML and environment.

    Attributes:
        base_url: API base URL override
        credential: API key or token
        timeout_ms: Per-attempt timeout override
        model: Model override
        resilience: Breaker/retry overrides for this service only
    """

    base_url: Optional[str] = None
    credential: Optional[str] = None
    timeout_ms: Optional[int] = None
    model: Optional[str] = None
    resilience: ResilienceSettings = field(default_factory=ResilienceSettings)

    @classmethod
    def from_toml_dict(
        cls,
        data: Dict[str, Any],
        warnings: Optional[List[str]] = None,
        *,
        source: str = "[services]",
    ) -> "ServiceSettings":
        """Create settings from a TOML dict (a [services.<name>] section)."""
        sink: List[str] = warnings if warnings is not None else []
        timeout_ms = None
        if "timeout_ms" in data:
            timeout_ms = _try_parse_int(
                data["timeout_ms"],
                name=f"{source}.timeout_ms",
                minimum=1,
                warnings=sink,
            )
        return cls(
            base_url=str(data["base_url"]) if data.get("base_url") else None,
            timeout_ms=timeout_ms,
            model=str(data["model"]) if data.get("model") else None,
            resilience=ResilienceSettings.from_toml_dict(data, sink, source=source),
        )


@dataclass
class ServiceConfig:
    """Resolved configuration owned by one ServiceAdapter.

    Attributes:
        name: Dependency name, also the breaker name (e.g. 'grok')
        display_name: Human-readable provider name
        base_url: API base URL without trailing slash
        credential: API key or token; None when not configured
        credential_env: Environment variable the credential is read from
        timeout_ms: Per-attempt timeout
        retry_policy: Retry/backoff policy
        circuit_breaker: Breaker thresholds
        default_headers: Headers sent with every request
        model: Model identifier sent to the provider
    """

    name: str
    base_url: str
    credential: Optional[str] = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    circuit_breaker: CircuitBreakerConfig = field(default_factory=CircuitBreakerConfig)
    default_headers: Dict[str, str] = field(default_factory=dict)
    model: Optional[str] = None
    display_name: str = ""
    credential_env: Optional[str] = None

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")
        if not self.display_name:
            self.display_name = self.name

    @property
    def is_configured(self) -> bool:
        return bool(self.credential)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the credential reduced to a presence flag."""
        return {
            "name": self.name,
            "display_name": self.display_name,
            "base_url": self.base_url,
            "configured": self.is_configured,
            "credential_env": self.credential_env,
            "timeout_ms": self.timeout_ms,
            "model": self.model,
            "retry_policy": {
                "max_retries": self.retry_policy.max_retries,
                "base_backoff_ms": self.retry_policy.base_backoff_ms,
            },
            "circuit_breaker": {
                "failure_threshold": self.circuit_breaker.failure_threshold,
                "success_threshold": self.circuit_breaker.success_threshold,
                "open_duration_ms": self.circuit_breaker.open_duration_ms,
            },
        }


@dataclass
class EnvValidation:
    """Result of checking one service's environment variables."""

    service: str
    valid: bool
    missing: List[str]


@dataclass
class EnvReport:
    """Result of checking several services' environment variables."""

    valid: bool
    missing: Dict[str, List[str]]


def validate_service_env(
    service: str,
    environ: Optional[Mapping[str, str]] = None,
) -> EnvValidation:
    """Check that a service's required environment variables are set.

    Args:
        service: Service name (key of REQUIRED_ENV_VARS)
        environ: Environment to inspect (default: os.environ)

    Raises:
        KeyError: If ``service`` is unknown
    """
    env = os.environ if environ is None else environ
    missing = [name for name in REQUIRED_ENV_VARS[service] if not env.get(name)]
    return EnvValidation(service=service, valid=not missing, missing=missing)


def validate_env(
    services: Optional[Iterable[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> EnvReport:
    """Check required environment variables for several services.

    Missing variables are logged as warnings; nothing here is fatal.
    """
    missing: Dict[str, List[str]] = {}
    for service in services if services is not None else REQUIRED_ENV_VARS:
        result = validate_service_env(service, environ)
        if not result.valid:
            missing[service] = result.missing

    for service, names in missing.items():
        logger.warning("Missing environment variables for %s: %s", service, ", ".join(names))

    return EnvReport(valid=not missing, missing=missing)
