"""Backend adapter contract used by sessions to drive a native transaction API."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Protocol, runtime_checkable

from .command import DatabaseT, TransactionT
from .errors import ObjectDisposedError, OperationCancelledError


@runtime_checkable
class CancellationSignal(Protocol):
    """Anything exposing ``is_set`` (``asyncio.Event``, ``threading.Event``)."""

    def is_set(self) -> bool:  # pragma: no cover - interface definition
        """Return ``True`` once cancellation has been requested."""


def raise_if_cancelled(cancel: CancellationSignal | None) -> None:
    """Fail fast when the caller's cancellation signal is already set."""

    if cancel is not None and cancel.is_set():
        raise OperationCancelledError()


class TransactionProvider(ABC, Generic[DatabaseT, TransactionT]):
    """Bridge one backend's transaction primitives to a uniform contract.

    A provider wraps exactly one caller-owned database handle and lazily
    creates at most one transaction handle, released by :meth:`close` or
    :meth:`aclose`. The database handle itself is never closed here.
    """

    def __init__(self) -> None:
        self._disposed = False

    @property
    def disposed(self) -> bool:
        """Return ``True`` once the provider has released its handle."""
        return self._disposed

    @abstractmethod
    async def ensure_transaction(self, cancel: CancellationSignal | None = None) -> None:
        """Start a transaction unless one is already active."""

    @abstractmethod
    async def commit(self, cancel: CancellationSignal | None = None) -> None:
        """Commit the active transaction."""

    @abstractmethod
    def commit_sync(self, cancel: CancellationSignal | None = None) -> None:
        """Commit the active transaction without awaiting."""

    @abstractmethod
    async def rollback(self, cancel: CancellationSignal | None = None) -> None:
        """Abort the active transaction."""

    @abstractmethod
    def get_execution_arguments(self) -> tuple[DatabaseT, TransactionT | None]:
        """Return the ``(database, transaction)`` pair handed to commands."""

    @abstractmethod
    def _release(self) -> None:
        """Release the transaction handle, if one was created."""

    async def _arelease(self) -> None:
        self._release()

    def close(self) -> None:
        """Release the transaction handle; repeated calls are no-ops."""
        if self._disposed:
            return
        self._release()
        self._disposed = True

    async def aclose(self) -> None:
        """Asynchronously release the transaction handle; repeated calls are no-ops."""
        if self._disposed:
            return
        await self._arelease()
        self._disposed = True

    def _ensure_usable(self, cancel: CancellationSignal | None = None) -> None:
        if self._disposed:
            raise ObjectDisposedError(type(self).__name__)
        raise_if_cancelled(cancel)


__all__ = ["CancellationSignal", "TransactionProvider", "raise_if_cancelled"]
