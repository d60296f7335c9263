"""Factories producing ready-to-use sessions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic

from .command import DatabaseT, TransactionT
from .errors import ArgumentNullError
from .provider import TransactionProvider
from .session import Session

ProviderFactory = Callable[[], TransactionProvider[DatabaseT, TransactionT]]


class SessionFactory(Generic[DatabaseT, TransactionT]):
    """Build a fresh :class:`Session` over a freshly built provider on every call.

    ``provider_factory`` plays the part of the dependency-resolution
    context: it must return a new provider bound to the currently
    configured backend handle and options. Sessions are never pooled.
    """

    def __init__(self, provider_factory: ProviderFactory[DatabaseT, TransactionT]) -> None:
        if provider_factory is None:
            raise ArgumentNullError("provider_factory")
        self._provider_factory = provider_factory

    def create(self) -> Session[DatabaseT, TransactionT]:
        return Session(self._provider_factory())


__all__ = ["ProviderFactory", "SessionFactory"]
