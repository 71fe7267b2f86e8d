"""Correlation IDs for ledger operations.

Every mutating ledger operation runs inside a correlation scope. A caller
that already has an ID (an HTTP request ID, a batch job ID) opens the
scope with it and every log line of the operations it invokes carries
that ID. Operations invoked outside any scope open their own, so the log
lines of one ``sign`` or ``withdraw`` can always be grouped together.

Usage:
    with correlation_scope(request_id):
        await controller.sign(...)
        await controller.withdraw(...)
"""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, ParamSpec, TypeVar
from uuid import uuid4

P = ParamSpec("P")
R = TypeVar("R")

# Empty string means "no scope open"
_correlation_id: ContextVar[str] = ContextVar("ledger_correlation_id", default="")


def generate_correlation_id() -> str:
    return str(uuid4())


def get_correlation_id() -> str:
    """Get the ID of the innermost open scope, or empty string."""
    return _correlation_id.get()


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Open a correlation scope for the duration of the block.

    Args:
        correlation_id: ID to use. When omitted, an enclosing scope's ID
            is reused, or a fresh one is generated.

    Yields:
        The ID in effect inside the block.
    """
    effective = correlation_id or _correlation_id.get() or generate_correlation_id()
    token = _correlation_id.set(effective)
    try:
        yield effective
    finally:
        _correlation_id.reset(token)


def correlated(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Run an async operation inside a correlation scope."""

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        with correlation_scope():
            return await func(*args, **kwargs)

    return wrapper


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor stamping the open scope's ID on log entries.

    An ID already bound on the logger wins.
    """
    correlation_id = _correlation_id.get()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict
