"""Request-scoped context shared by logging and audit events."""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

_correlation_id: ContextVar[str] = ContextVar("wordgate_correlation_id", default="")


def get_correlation_id() -> str:
    """Return the correlation ID of the current context, or ''."""
    return _correlation_id.get()


@contextmanager
def correlation_scope(correlation_id: Optional[str] = None) -> Iterator[str]:
    """Bind a correlation ID for the duration of the block.

    Generates a fresh ID when none is given.
    """
    value = correlation_id or uuid.uuid4().hex
    token = _correlation_id.set(value)
    try:
        yield value
    finally:
        _correlation_id.reset(token)
