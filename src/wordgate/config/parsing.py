"""Parsing and normalization helpers for configuration values.

Provides boolean and bounded-integer parsing used by the TOML and
environment loaders.
"""

import logging
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"true", "1", "yes", "on"}


def _try_parse_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in {"true", "1", "yes", "on"}:
        return True
    if normalized in {"false", "0", "no", "off"}:
        return False
    return None


def _try_parse_int(
    value: Any,
    *,
    name: str,
    minimum: int,
    warnings: List[str],
) -> Optional[int]:
    """Parse an integer setting, rejecting junk and values below ``minimum``.

    Rejections append a message to ``warnings`` and return None so the
    caller keeps its current value.
    """
    if isinstance(value, bool):
        warnings.append(f"Ignoring {name}: expected an integer, got {value!r}")
        return None
    try:
        parsed = int(str(value).strip())
    except ValueError:
        warnings.append(f"Ignoring {name}: expected an integer, got {value!r}")
        return None
    if parsed < minimum:
        warnings.append(f"Ignoring {name}: must be >= {minimum}, got {parsed}")
        return None
    return parsed


def _normalize_log_level(value: str) -> str:
    normalized = value.strip().upper()
    if normalized not in _VALID_LOG_LEVELS:
        logger.warning(
            "Invalid log level '%s'. Falling back to 'INFO'. Valid options: %s",
            value,
            ", ".join(sorted(_VALID_LOG_LEVELS)),
        )
        return "INFO"
    return normalized
