"""Audit logging for resilience events.

Provides structured audit logging with automatic correlation ID
population from the request context.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from wordgate.core.context import get_correlation_id

logger = logging.getLogger(__name__)


class AuditEventType(Enum):
    """Types of audit events."""

    CIRCUIT_STATE_CHANGE = "circuit_state_change"
    CIRCUIT_RESET = "circuit_reset"
    RETRY_ATTEMPT = "retry_attempt"
    FALLBACK_USED = "fallback_used"
    CONFIG_MISSING = "config_missing"
    OTHER = "other"


@dataclass
class AuditEvent:
    """Structured audit event."""

    event_type: AuditEventType
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Auto-populate correlation_id from context if not set."""
        if self.correlation_id is None:
            self.correlation_id = get_correlation_id() or None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            "event_type": self.event_type.value,
            "timestamp": self.timestamp,
            "details": self.details,
        }
        if self.correlation_id:
            result["correlation_id"] = self.correlation_id
        return result


class AuditLogger:
    """
    Structured audit logging for resilience events.

    Audit logs are written to a separate logger for easy filtering.
    """

    def __init__(self):
        self._logger = logging.getLogger(f"{__name__}.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        self._logger.info(f"AUDIT: {event.event_type.value}", extra={"audit": event.to_dict()})

    def fallback_used(self, provider: str, capability: str, reason: str, **details: Any) -> None:
        """Log a degraded response served from a fallback payload."""
        self.log(
            AuditEvent(
                event_type=AuditEventType.FALLBACK_USED,
                details={
                    "provider": provider,
                    "capability": capability,
                    "reason": reason,
                    **details,
                },
            )
        )

    def config_missing(self, provider: str, missing: list[str]) -> None:
        """Log a call refused because credentials are not configured."""
        self.log(
            AuditEvent(
                event_type=AuditEventType.CONFIG_MISSING,
                details={"provider": provider, "missing": missing},
            )
        )


# Global audit logger
_audit = AuditLogger()


def get_audit_logger() -> AuditLogger:
    """Get the global audit logger."""
    return _audit


def audit_log(event_type: str, **details: Any) -> None:
    """
    Convenience function for audit logging.

    Args:
        event_type: Type of event (circuit_state_change, circuit_reset,
                    retry_attempt, fallback_used, config_missing)
        **details: Additional details to include in the audit log
    """
    try:
        event_enum = AuditEventType(event_type)
    except ValueError:
        event_enum = AuditEventType.OTHER
        details["original_event_type"] = event_type

    _audit.log(AuditEvent(event_type=event_enum, details=details))
