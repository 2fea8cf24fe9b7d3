"""
Per-request correlation ids.

A correlation scope is opened by the HTTP middleware for every request; log
and audit entries written inside the scope carry its id.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional


_current: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


@contextmanager
def correlation_scope(correlation_id: Optional[str] = None) -> Iterator[str]:
    """Run the enclosed block under a correlation id (a new uuid4 unless given)."""
    token = _current.set(correlation_id or str(uuid.uuid4()))
    try:
        yield _current.get()
    finally:
        _current.reset(token)


def get_correlation_id() -> Optional[str]:
    return _current.get()
