"""
Observability utilities for wordgate.

Provides audit logging, Prometheus metrics, and redaction of credentials
before request and response payloads reach a log line.

Wiring metrics into the resilience layer:

    from wordgate.core.observability.metrics import get_metrics_observer
    from wordgate.core.resilience import BreakerRegistry, CompositeObserver, LoggingObserver

    registry = BreakerRegistry(
        observer=CompositeObserver(LoggingObserver(), get_metrics_observer())
    )

The metrics module is not re-exported here because it depends on the
resilience models, which themselves log through this package.
"""

from wordgate.core.observability.audit import (
    AuditEvent,
    AuditEventType,
    AuditLogger,
    audit_log,
    get_audit_logger,
)
from wordgate.core.observability.redaction import (
    SENSITIVE_KEYS,
    SENSITIVE_PATTERNS,
    redact_for_logging,
    redact_sensitive_data,
)

__all__ = [
    # Audit
    "AuditEvent",
    "AuditEventType",
    "AuditLogger",
    "audit_log",
    "get_audit_logger",
    # Redaction
    "SENSITIVE_KEYS",
    "SENSITIVE_PATTERNS",
    "redact_for_logging",
    "redact_sensitive_data",
]
