"""WordgateConfig loading and validation logic.

Provides ``_WordgateConfigLoader``, a mixin class whose methods are inherited
by ``WordgateConfig`` (defined in ``settings.py``). Splitting loading logic
into its own module keeps ``settings.py`` focused on field definitions and
simple accessor methods.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, cast

if TYPE_CHECKING:
    from wordgate.config.settings import WordgateConfig

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # Python < 3.11 fallback

from wordgate.config.domains import (
    FallbackConfig,
    MetricsConfig,
    ResilienceSettings,
)
from wordgate.config.parsing import (
    _normalize_log_level,
    _try_parse_bool,
    _try_parse_int,
)
from wordgate.config.services import SERVICE_DEFINITIONS, ServiceSettings

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV_VAR = "WORDGATE_CONFIG_FILE"

# env var -> (ResilienceSettings field, minimum)
_RESILIENCE_ENV_VARS: Dict[str, tuple[str, int]] = {
    "WORDGATE_FAILURE_THRESHOLD": ("failure_threshold", 1),
    "WORDGATE_SUCCESS_THRESHOLD": ("success_threshold", 1),
    "WORDGATE_OPEN_DURATION_MS": ("open_duration_ms", 1),
    "WORDGATE_RETRY_COUNT": ("retry_count", 0),
    "WORDGATE_BASE_BACKOFF_MS": ("base_backoff_ms", 1),
}


class _WordgateConfigLoader:
    """Mixin providing config-loading methods for ``WordgateConfig``.

    At runtime ``self`` is always a ``WordgateConfig`` instance.
    """

    if TYPE_CHECKING:
        log_level: str
        structured_logging: bool
        api_timeout_ms: Optional[int]
        resilience: ResilienceSettings
        services: Dict[str, ServiceSettings]
        fallback: FallbackConfig
        metrics: MetricsConfig
        startup_warnings: List[str]

        def _add_startup_warning(self, message: str) -> None: ...

        def _service_settings(self, name: str) -> ServiceSettings: ...

    @classmethod
    def from_env(cls, config_file: Optional[str] = None) -> "WordgateConfig":
        """
        Create configuration from environment variables and optional TOML file.

        Priority (highest to lowest):
        1. Environment variables
        2. Explicit config file (argument or WORDGATE_CONFIG_FILE)
        3. Project TOML config (./wordgate.toml)
        4. XDG config (~/.config/wordgate/config.toml)
        5. Default values
        """
        config = cls()

        toml_path = config_file or os.environ.get(CONFIG_FILE_ENV_VAR)
        if toml_path:
            config._load_toml(Path(toml_path))
        else:
            xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
            xdg_config = Path(xdg_config_home) / "wordgate" / "config.toml"
            if xdg_config.exists():
                config._load_toml(xdg_config)
                logger.debug("Loaded XDG config from %s", xdg_config)

            project_config = Path("wordgate.toml")
            if project_config.exists():
                config._load_toml(project_config)
                logger.debug("Loaded project config from %s", project_config)

        config._load_env()

        for warning in config.startup_warnings:
            logger.warning(warning)

        return cast("WordgateConfig", config)

    def _load_toml(self, path: Path) -> None:
        """Load configuration from TOML file."""
        if not path.exists():
            logger.warning("Config file not found: %s", path)
            return

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error("Error loading config file %s: %s", path, e)
            return

        warnings: List[str] = []

        # Logging settings
        if "logging" in data:
            log = data["logging"]
            if "level" in log:
                self.log_level = _normalize_log_level(str(log["level"]))
            if "structured" in log:
                parsed = _try_parse_bool(log["structured"])
                if parsed is None:
                    warnings.append(
                        f"Ignoring [logging].structured in {path}: expected boolean, got {log['structured']!r}"
                    )
                else:
                    self.structured_logging = parsed

        # Global resilience overrides
        if "resilience" in data:
            self.resilience = self.resilience.overlay(
                ResilienceSettings.from_toml_dict(data["resilience"], warnings)
            )

        # Per-service settings
        if "services" in data:
            self._load_services_table(data["services"], warnings, path)

        # Fallback settings
        if "fallback" in data:
            self.fallback = FallbackConfig.from_toml_dict(data["fallback"], warnings)

        # Metrics settings
        if "metrics" in data:
            self.metrics = MetricsConfig.from_toml_dict(data["metrics"])

        for warning in warnings:
            self._add_startup_warning(f"{warning} ({path})")

    def _load_services_table(
        self,
        services: Any,
        warnings: List[str],
        path: Path,
    ) -> None:
        if not isinstance(services, dict):
            warnings.append(
                f"Ignoring [services]: expected table, got {type(services).__name__}"
            )
            return
        for name, section in services.items():
            if name not in SERVICE_DEFINITIONS:
                warnings.append(f"Ignoring [services.{name}]: unknown service")
                continue
            if not isinstance(section, dict):
                warnings.append(
                    f"Ignoring [services.{name}]: expected table, got {type(section).__name__}"
                )
                continue
            loaded = ServiceSettings.from_toml_dict(
                section, warnings, source=f"[services.{name}]"
            )
            current = self._service_settings(name)
            current.base_url = loaded.base_url or current.base_url
            current.timeout_ms = loaded.timeout_ms or current.timeout_ms
            current.model = loaded.model or current.model
            current.resilience = current.resilience.overlay(loaded.resilience)
        logger.debug("Loaded service settings from %s", path)

    def _load_env(self) -> None:
        """Load configuration from environment variables."""
        warnings: List[str] = []

        # Logging
        if level := os.environ.get("WORDGATE_LOG_LEVEL"):
            self.log_level = _normalize_log_level(level)
        if structured := os.environ.get("WORDGATE_STRUCTURED_LOGGING"):
            parsed = _try_parse_bool(structured)
            if parsed is None:
                warnings.append(
                    f"Ignoring WORDGATE_STRUCTURED_LOGGING: expected true/false, got {structured!r}"
                )
            else:
                self.structured_logging = parsed

        # Resilience
        overrides: Dict[str, Optional[int]] = {}
        for env_var, (field_name, minimum) in _RESILIENCE_ENV_VARS.items():
            if raw := os.environ.get(env_var):
                parsed_int = _try_parse_int(raw, name=env_var, minimum=minimum, warnings=warnings)
                if parsed_int is not None:
                    overrides[field_name] = parsed_int
        if overrides:
            self.resilience = self.resilience.overlay(ResilienceSettings(**overrides))

        # Global timeout
        if timeout := os.environ.get("API_TIMEOUT_MS"):
            parsed_timeout = _try_parse_int(
                timeout, name="API_TIMEOUT_MS", minimum=1, warnings=warnings
            )
            if parsed_timeout is not None:
                self.api_timeout_ms = parsed_timeout

        # Service credentials, URLs and models
        for name, definition in SERVICE_DEFINITIONS.items():
            settings = self._service_settings(name)
            if credential := os.environ.get(definition.credential_env):
                settings.credential = credential
            if definition.url_env and (url := os.environ.get(definition.url_env)):
                settings.base_url = url
            if definition.model_env and (model := os.environ.get(definition.model_env)):
                settings.model = model

        # Fallbacks
        for env_var, attr in (
            ("ENABLE_FALLBACK_IMAGES", "images"),
            ("ENABLE_FALLBACK_SUGGESTIONS", "suggestions"),
        ):
            if raw := os.environ.get(env_var):
                parsed_flag = _try_parse_bool(raw)
                if parsed_flag is None:
                    warnings.append(f"Ignoring {env_var}: expected true/false, got {raw!r}")
                else:
                    setattr(self.fallback, attr, parsed_flag)

        # Metrics
        if metrics_enabled := os.environ.get("WORDGATE_METRICS_ENABLED"):
            parsed_metrics = _try_parse_bool(metrics_enabled)
            if parsed_metrics is not None:
                self.metrics.enabled = parsed_metrics

        for warning in warnings:
            self._add_startup_warning(warning)
