"""Session-scoped context helpers."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token

_session_id_ctx_var: ContextVar[str] = ContextVar("session_id", default="-")


def get_session_id() -> str:
    """Return the session identifier for the current execution context."""

    return _session_id_ctx_var.get()


def bind_session_id(session_id: str) -> Token[str]:
    """Bind a session identifier to the current execution context."""

    return _session_id_ctx_var.set(session_id)


def reset_session_id(token: Token[str]) -> None:
    """Reset the session identifier using the provided context token."""

    _session_id_ctx_var.reset(token)


@contextmanager
def bound_session_id(session_id: str) -> Iterator[None]:
    """Bind ``session_id`` for the duration of the ``with`` block."""

    token = bind_session_id(session_id)
    try:
        yield
    finally:
        reset_session_id(token)


__all__ = [
    "bind_session_id",
    "bound_session_id",
    "get_session_id",
    "reset_session_id",
]
