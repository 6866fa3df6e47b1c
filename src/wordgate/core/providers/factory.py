"""Construction of the full adapter set from configuration."""

import logging
from typing import Dict, Optional

from wordgate.config.settings import WordgateConfig
from wordgate.core.providers.anthropic import AnthropicAdapter
from wordgate.core.providers.base import ServiceAdapter
from wordgate.core.providers.flux import FluxImageAdapter
from wordgate.core.providers.grok import GrokAdapter
from wordgate.core.providers.perplexity import PerplexityAdapter
from wordgate.core.resilience import (
    BreakerRegistry,
    CompositeObserver,
    LoggingObserver,
    ResilienceObserver,
    SleepFunc,
)
from wordgate.core.transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)

ADAPTER_CLASSES: Dict[str, type[ServiceAdapter]] = {
    "replicate": FluxImageAdapter,
    "perplexity": PerplexityAdapter,
    "grok": GrokAdapter,
    "anthropic": AnthropicAdapter,
}


def default_observer(config: WordgateConfig) -> ResilienceObserver:
    """LoggingObserver, plus the process-wide MetricsObserver when metrics are enabled."""
    if not config.metrics.enabled:
        return LoggingObserver()
    from wordgate.core.observability.metrics import get_metrics_observer

    return CompositeObserver(LoggingObserver(), get_metrics_observer())


def build_adapters(
    config: WordgateConfig,
    *,
    registry: Optional[BreakerRegistry] = None,
    transport: Optional[Transport] = None,
    observer: Optional[ResilienceObserver] = None,
    sleep_func: Optional[SleepFunc] = None,
) -> Dict[str, ServiceAdapter]:
    """Build one adapter per service, all sharing a registry and transport.

    Args:
        config: Loaded configuration
        registry: Breaker registry to share (default: a new one)
        transport: Transport to share (default: one HttpxTransport)
        observer: Observer for breaker and retry events (default: see
            ``default_observer``); ignored when ``registry`` is given
        sleep_func: Injectable backoff sleep

    Returns:
        Dict of service name -> adapter
    """
    if registry is None:
        registry = BreakerRegistry(observer=observer or default_observer(config))
    shared_transport: Transport = transport or HttpxTransport()

    adapters: Dict[str, ServiceAdapter] = {}
    for name, adapter_cls in ADAPTER_CLASSES.items():
        adapters[name] = adapter_cls(
            config.service_config(name),
            registry=registry,
            transport=shared_transport,
            fallback=config.fallback,
            sleep_func=sleep_func,
        )
    logger.debug("Built adapters for %s", ", ".join(adapters))
    return adapters
