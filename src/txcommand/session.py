"""Session orchestrating commands over a single provider-held transaction."""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType
from typing import Any, Generic, TypeVar
from uuid import uuid4

from .command import DatabaseT, ResultT, TransactionT, TxCommand
from .core.context import bound_session_id
from .errors import ArgumentNullError, ObjectDisposedError, TransactionNotStartedError
from .provider import CancellationSignal, TransactionProvider, raise_if_cancelled

logger = logging.getLogger(__name__)

SessionListener = Callable[[], None]
ExecutedListener = Callable[[TxCommand[Any, Any, Any]], None]

ListenerT = TypeVar("ListenerT", bound=Callable[..., None])


class Session(Generic[DatabaseT, TransactionT]):
    """Execute commands inside one transaction, committed only if all succeed.

    The transaction is started lazily by the first :meth:`execute`. A command
    that fails validation or execution rolls the transaction back and the
    original error is re-raised. Closing the session commits any work that
    is still pending; it never rolls back on its own.

    Sessions are not safe for concurrent use: calls on one instance must be
    sequential.
    """

    def __init__(self, provider: TransactionProvider[DatabaseT, TransactionT]) -> None:
        if provider is None:
            raise ArgumentNullError("provider")
        self._provider = provider
        self._completed = True
        self._disposed = False
        self.session_id = uuid4().hex
        self._executed_listeners: list[ExecutedListener] = []
        self._committed_listeners: list[SessionListener] = []
        self._rolled_back_listeners: list[SessionListener] = []

    @property
    def provider(self) -> TransactionProvider[DatabaseT, TransactionT]:
        """Expose the underlying provider for advanced scenarios."""
        return self._provider

    @property
    def completed(self) -> bool:
        """``True`` when there is no uncommitted work outstanding."""
        return self._completed

    @property
    def disposed(self) -> bool:
        return self._disposed

    def on_executed(self, listener: ListenerT) -> ListenerT:
        """Register a callback invoked with each successfully executed command."""
        self._executed_listeners.append(listener)
        return listener

    def on_committed(self, listener: ListenerT) -> ListenerT:
        """Register a callback invoked after every commit."""
        self._committed_listeners.append(listener)
        return listener

    def on_rolled_back(self, listener: ListenerT) -> ListenerT:
        """Register a callback invoked after every rollback."""
        self._rolled_back_listeners.append(listener)
        return listener

    async def execute(
        self,
        command: TxCommand[DatabaseT, TransactionT, ResultT],
        cancel: CancellationSignal | None = None,
    ) -> ResultT:
        """Validate and execute ``command`` within the session's transaction."""
        self._ensure_not_disposed()
        raise_if_cancelled(cancel)
        if command is None:
            raise ArgumentNullError("command")

        with bound_session_id(self.session_id):
            await self._provider.ensure_transaction(cancel)
            self._completed = False
            logger.debug("Transaction ensured", extra={"command": type(command).__name__})

            try:
                command.validate()

                database, transaction = self._provider.get_execution_arguments()
                result = await command.execute(database, transaction)

                for listener in self._executed_listeners:
                    listener(command)
            except BaseException:
                logger.info(
                    "Command failed, rolling back transaction",
                    extra={"command": type(command).__name__},
                )
                # Cancellation is only checked on entry; cleanup always runs.
                await self.rollback()
                raise

            logger.debug("Command executed", extra={"command": type(command).__name__})
            return result

    async def commit(self, cancel: CancellationSignal | None = None) -> None:
        """Commit the outstanding transaction."""
        self._ensure_can_complete("commit", cancel)

        with bound_session_id(self.session_id):
            await self._provider.commit(cancel)
            self._completed = True
            logger.info("Transaction committed")
            self._notify(self._committed_listeners)

    def commit_sync(self, cancel: CancellationSignal | None = None) -> None:
        """Commit the outstanding transaction without awaiting."""
        self._ensure_can_complete("commit_sync", cancel)

        with bound_session_id(self.session_id):
            self._provider.commit_sync(cancel)
            self._completed = True
            logger.info("Transaction committed")
            self._notify(self._committed_listeners)

    async def rollback(self, cancel: CancellationSignal | None = None) -> None:
        """Abort the outstanding transaction."""
        self._ensure_can_complete("rollback", cancel)

        with bound_session_id(self.session_id):
            await self._provider.rollback(cancel)
            self._completed = True
            logger.info("Transaction rolled back")
            self._notify(self._rolled_back_listeners)

    def close(self) -> None:
        """Commit pending work, then release the provider even if the commit fails. Idempotent."""
        if self._disposed:
            return

        with bound_session_id(self.session_id):
            try:
                if not self._completed:
                    logger.info("Committing pending work on close")
                    self.commit_sync()
            finally:
                self._provider.close()
                self._disposed = True

    async def aclose(self) -> None:
        """Asynchronously commit pending work, then release the provider even if the commit fails. Idempotent."""
        if self._disposed:
            return

        with bound_session_id(self.session_id):
            try:
                if not self._completed:
                    logger.info("Committing pending work on close")
                    await self.commit()
            finally:
                await self._provider.aclose()
                self._disposed = True

    def __enter__(self) -> "Session[DatabaseT, TransactionT]":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    async def __aenter__(self) -> "Session[DatabaseT, TransactionT]":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    def _ensure_not_disposed(self) -> None:
        if self._disposed:
            raise ObjectDisposedError(type(self).__name__)

    def _ensure_can_complete(self, method_name: str, cancel: CancellationSignal | None) -> None:
        self._ensure_not_disposed()
        raise_if_cancelled(cancel)
        if self._completed:
            raise TransactionNotStartedError(method_name)

    @staticmethod
    def _notify(listeners: list[SessionListener]) -> None:
        for listener in listeners:
            listener()


__all__ = ["ExecutedListener", "Session", "SessionListener"]
