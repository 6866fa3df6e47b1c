"""WordgateConfig dataclass and global configuration state.

This module defines the ``WordgateConfig`` class (field declarations and
simple accessor methods) and the global ``get_config`` / ``set_config``
helpers. Loading logic lives in the ``_WordgateConfigLoader`` mixin
(``loader.py``) which ``WordgateConfig`` inherits from.
"""

import logging
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_package_version
from typing import Any, Dict, List, Optional

from wordgate.config.domains import FallbackConfig, MetricsConfig, ResilienceSettings
from wordgate.config.loader import _WordgateConfigLoader
from wordgate.config.services import (
    SERVICE_DEFINITIONS,
    ServiceConfig,
    ServiceSettings,
)
from wordgate.core.resilience.config import get_service_resilience

_HANDLER_MARKER = "_wordgate_handler"


def _get_version() -> str:
    """Get package version from metadata (single source of truth: pyproject.toml)."""
    try:
        return get_package_version("wordgate")
    except PackageNotFoundError:
        return "0.1.0"  # Fallback for dev without install


_PACKAGE_VERSION = _get_version()


@dataclass
class WordgateConfig(_WordgateConfigLoader):
    """Wordgate configuration with support for env vars and TOML overrides."""

    # Logging configuration
    log_level: str = "INFO"
    structured_logging: bool = False

    # Global per-attempt timeout; overrides every service's default
    api_timeout_ms: Optional[int] = None

    # Global breaker/retry overrides
    resilience: ResilienceSettings = field(default_factory=ResilienceSettings)

    # Per-service overrides keyed by service name
    services: Dict[str, ServiceSettings] = field(default_factory=dict)

    fallback: FallbackConfig = field(default_factory=FallbackConfig)
    metrics: MetricsConfig = field(default_factory=MetricsConfig)

    version: str = field(default_factory=lambda: _PACKAGE_VERSION)

    startup_warnings: List[str] = field(default_factory=list, repr=False)

    def _add_startup_warning(self, message: str) -> None:
        if message and message not in self.startup_warnings:
            self.startup_warnings.append(message)

    def _service_settings(self, name: str) -> ServiceSettings:
        return self.services.setdefault(name, ServiceSettings())

    def service_config(self, name: str) -> ServiceConfig:
        """
        Resolve the configuration for one service.

        Priority (highest to lowest):
        1. [services.<name>] overrides
        2. Global overrides ([resilience], WORDGATE_*, API_TIMEOUT_MS)
        3. Built-in service defaults

        Args:
            name: Service name (e.g. 'perplexity')

        Returns:
            ServiceConfig for the service

        Raises:
            KeyError: If ``name`` is not a known service
        """
        definition = SERVICE_DEFINITIONS[name]
        settings = self.services.get(name) or ServiceSettings()

        resilience = self.resilience.overlay(settings.resilience).apply_to(
            get_service_resilience(name)
        )
        timeout_ms = settings.timeout_ms or self.api_timeout_ms or definition.timeout_ms

        return ServiceConfig(
            name=name,
            display_name=definition.display_name,
            base_url=settings.base_url or definition.base_url,
            credential=settings.credential,
            credential_env=definition.credential_env,
            timeout_ms=timeout_ms,
            retry_policy=resilience.retry_policy,
            circuit_breaker=resilience.circuit_breaker,
            model=settings.model or definition.default_model,
        )

    def service_configs(self) -> Dict[str, ServiceConfig]:
        """Resolve configuration for every known service."""
        return {name: self.service_config(name) for name in SERVICE_DEFINITIONS}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the resolved configuration. Credentials are never included."""
        return {
            "version": self.version,
            "logging": {
                "level": self.log_level,
                "structured": self.structured_logging,
            },
            "services": {
                name: config.to_dict() for name, config in self.service_configs().items()
            },
            "fallback": {
                "images": self.fallback.images,
                "suggestions": self.fallback.suggestions,
                "local_images": list(self.fallback.local_images),
                "placeholder_url": self.fallback.placeholder_url,
            },
            "metrics": {
                "enabled": self.metrics.enabled,
                "namespace": self.metrics.namespace,
            },
        }

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.structured_logging:
            # JSON-style structured logging
            formatter = logging.Formatter(
                '{"timestamp":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}'
            )
        else:
            formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_MARKER, True)

        root_logger = logging.getLogger("wordgate")
        for existing in list(root_logger.handlers):
            if getattr(existing, _HANDLER_MARKER, False):
                root_logger.removeHandler(existing)
        root_logger.setLevel(level)
        root_logger.addHandler(handler)


# Global configuration instance
_config: Optional[WordgateConfig] = None


def get_config() -> WordgateConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = WordgateConfig.from_env()
    return _config


def set_config(config: Optional[WordgateConfig]) -> None:
    """Set the global configuration instance (None forces a reload)."""
    global _config
    _config = config
