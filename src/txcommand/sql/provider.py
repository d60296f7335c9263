"""Relational transaction provider built on SQLAlchemy Core connections."""

from __future__ import annotations

import logging

from sqlalchemy.engine import Connection, RootTransaction

from ..errors import ArgumentNullError, TransactionNotStartedError
from ..provider import CancellationSignal, TransactionProvider
from .options import SqlOptions

logger = logging.getLogger(__name__)


class SqlTransactionProvider(TransactionProvider[Connection, RootTransaction]):
    """Drive a ``RootTransaction`` begun on a caller-owned ``Connection``."""

    def __init__(self, connection: Connection, options: SqlOptions) -> None:
        super().__init__()
        if connection is None:
            raise ArgumentNullError("connection")
        if options is None:
            raise ArgumentNullError("options")
        self._connection = connection
        self._options = options
        self._transaction: RootTransaction | None = None
        self._isolation_applied = False

    @property
    def options(self) -> SqlOptions:
        return self._options

    async def ensure_transaction(self, cancel: CancellationSignal | None = None) -> None:
        self._ensure_usable(cancel)

        if self._connection.invalidated:
            if self._transaction is not None:
                self._transaction.close()
                self._transaction = None
            # Touching the DBAPI connection re-establishes an invalidated one.
            self._connection.connection
            self._isolation_applied = False

        if self._transaction is None or not self._transaction.is_active:
            if not self._isolation_applied:
                self._connection.execution_options(isolation_level=self._options.isolation_level.value)
                self._isolation_applied = True
            self._transaction = self._connection.begin()
            logger.debug(
                "Began relational transaction",
                extra={"isolation_level": self._options.isolation_level.value},
            )

    async def commit(self, cancel: CancellationSignal | None = None) -> None:
        self.commit_sync(cancel)

    def commit_sync(self, cancel: CancellationSignal | None = None) -> None:
        self._ensure_usable(cancel)
        self._active_transaction("commit").commit()

    async def rollback(self, cancel: CancellationSignal | None = None) -> None:
        self._ensure_usable(cancel)
        self._active_transaction("rollback").rollback()

    def get_execution_arguments(self) -> tuple[Connection, RootTransaction | None]:
        self._ensure_usable()
        return self._connection, self._transaction

    def _active_transaction(self, method_name: str) -> RootTransaction:
        transaction = self._transaction
        if transaction is None or not transaction.is_active:
            raise TransactionNotStartedError(method_name)
        return transaction

    def _release(self) -> None:
        if self._transaction is not None:
            self._transaction.close()
            self._transaction = None


__all__ = ["SqlTransactionProvider"]
