"""Sensitive data redaction utilities.

Provides pattern-based redaction for provider API keys, bearer tokens, and
credential-bearing headers. Safe for use before logging request and
response payloads or including them in error details.
"""

import json
import re
from typing import Any, Final, List, Optional, Tuple

SENSITIVE_PATTERNS: Final[List[Tuple[str, str]]] = [
    # Provider keys
    (r"sk-ant-[a-zA-Z0-9_\-]{10,}", "ANTHROPIC_KEY"),
    (r"pplx-[a-zA-Z0-9]{10,}", "PERPLEXITY_KEY"),
    (r"xai-[a-zA-Z0-9]{10,}", "GROK_KEY"),
    (r"r8_[a-zA-Z0-9]{10,}", "REPLICATE_TOKEN"),
    # Generic keys and tokens
    (r"(?i)(api[_-]?key|apikey)\s*[:=]\s*['\"]?([a-zA-Z0-9_\-]{20,})['\"]?", "API_KEY"),
    (r"(?i)bearer\s+([a-zA-Z0-9_\-\.]+)", "BEARER_TOKEN"),
    (r"(?i)(password|passwd|pwd)\s*[:=]\s*['\"]?([^\s'\"]{4,})['\"]?", "PASSWORD"),
]
"""Patterns for detecting sensitive data that should be redacted.

Each tuple contains:
- regex pattern: The pattern to match sensitive data
- label: A human-readable label for the type of sensitive data
"""

SENSITIVE_KEYS: Final[frozenset[str]] = frozenset(
    {
        "apikey",
        "api_key",
        "password",
        "token",
        "api_token",
        "secret",
        "authorization",
        "auth",
        "key",
        "x_api_key",
        "credential",
    }
)
"""Dict keys whose values are always redacted wholesale (compared lowercased, '-' -> '_')."""


def redact_sensitive_data(
    data: Any,
    *,
    patterns: Optional[List[Tuple[str, str]]] = None,
    redaction_format: str = "[REDACTED:{label}]",
    max_depth: int = 10,
) -> Any:
    """Recursively redact sensitive data from strings, dicts, and lists.

    Args:
        data: The data to redact (string, dict, list, or nested structure)
        patterns: Custom patterns to use (default: SENSITIVE_PATTERNS)
        redaction_format: Format string for redaction markers (uses {label})
        max_depth: Maximum recursion depth

    Returns:
        A copy of the data with sensitive values redacted

    Example:
        >>> redact_sensitive_data({"Authorization": "Bearer abc", "query": "hello"})
        {'Authorization': '[REDACTED]', 'query': 'hello'}
    """
    if max_depth <= 0:
        return "[MAX_DEPTH_EXCEEDED]"

    check_patterns = patterns if patterns is not None else SENSITIVE_PATTERNS

    if isinstance(data, str):
        result = data
        for pattern, label in check_patterns:
            result = re.sub(pattern, redaction_format.format(label=label), result)
        return result

    if isinstance(data, dict):
        redacted = {}
        for key, value in data.items():
            if str(key).lower().replace("-", "_") in SENSITIVE_KEYS:
                redacted[key] = "[REDACTED]"
            else:
                redacted[key] = redact_sensitive_data(
                    value,
                    patterns=check_patterns,
                    redaction_format=redaction_format,
                    max_depth=max_depth - 1,
                )
        return redacted

    if isinstance(data, (list, tuple)):
        items = [
            redact_sensitive_data(
                item,
                patterns=check_patterns,
                redaction_format=redaction_format,
                max_depth=max_depth - 1,
            )
            for item in data
        ]
        return tuple(items) if isinstance(data, tuple) else items

    return data


def redact_for_logging(data: Any) -> str:
    """Redact and serialize data for a log line."""
    redacted = redact_sensitive_data(data)
    try:
        return json.dumps(redacted, default=str)
    except (TypeError, ValueError):
        return str(redacted)
