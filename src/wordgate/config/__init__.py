"""Configuration package for wordgate.

Sub-modules:
    parsing    – Boolean/integer parsing helpers
    domains    – ResilienceSettings, FallbackConfig, MetricsConfig
    services   – ServiceDefinition, ServiceConfig, environment validation
    loader     – WordgateConfig loading mixin (_WordgateConfigLoader)
    settings   – WordgateConfig dataclass, get_config/set_config globals
"""

from wordgate.config.domains import (
    FallbackConfig,
    MetricsConfig,
    ResilienceSettings,
)
from wordgate.config.services import (
    DEFAULT_TIMEOUT_MS,
    REQUIRED_ENV_VARS,
    SERVICE_DEFINITIONS,
    EnvReport,
    EnvValidation,
    ServiceConfig,
    ServiceDefinition,
    ServiceSettings,
    validate_env,
    validate_service_env,
)
from wordgate.config.settings import (
    WordgateConfig,
    get_config,
    set_config,
)

__all__ = [
    "FallbackConfig",
    "MetricsConfig",
    "ResilienceSettings",
    "DEFAULT_TIMEOUT_MS",
    "REQUIRED_ENV_VARS",
    "SERVICE_DEFINITIONS",
    "EnvReport",
    "EnvValidation",
    "ServiceConfig",
    "ServiceDefinition",
    "ServiceSettings",
    "validate_env",
    "validate_service_env",
    "WordgateConfig",
    "get_config",
    "set_config",
]
