"""Document-store transaction provider built on Motor client sessions."""

from __future__ import annotations

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorClientSession

from ..errors import ArgumentNullError, TransactionNotStartedError
from ..provider import CancellationSignal, TransactionProvider
from .options import MongoOptions

logger = logging.getLogger(__name__)


class MongoTransactionProvider(TransactionProvider[AsyncIOMotorClient, AsyncIOMotorClientSession]):
    """Drive a transaction on a client session started from a caller-owned client.

    The client session is started on first use and reused afterwards: once
    a transaction is committed or aborted, the next ``ensure_transaction``
    starts another one on the same session.
    """

    def __init__(self, client: AsyncIOMotorClient, options: MongoOptions) -> None:
        super().__init__()
        if client is None:
            raise ArgumentNullError("client")
        if options is None:
            raise ArgumentNullError("options")
        self._client = client
        self._options = options
        self._session: AsyncIOMotorClientSession | None = None

    @property
    def options(self) -> MongoOptions:
        return self._options

    @property
    def in_transaction(self) -> bool:
        return self._session is not None and bool(self._session.in_transaction)

    async def ensure_transaction(self, cancel: CancellationSignal | None = None) -> None:
        self._ensure_usable(cancel)

        if self._session is None:
            self._session = await self._client.start_session(**self._options.session_kwargs())
            logger.debug("Started client session")

        if not self._session.in_transaction:
            self._session.start_transaction(**self._options.transaction_kwargs())
            logger.debug("Started document-store transaction")

    async def commit(self, cancel: CancellationSignal | None = None) -> None:
        self._ensure_usable(cancel)
        await self._active_session("commit").commit_transaction()

    def commit_sync(self, cancel: CancellationSignal | None = None) -> None:
        self._ensure_usable(cancel)
        self._active_session("commit_sync").delegate.commit_transaction()

    async def rollback(self, cancel: CancellationSignal | None = None) -> None:
        self._ensure_usable(cancel)
        await self._active_session("rollback").abort_transaction()

    def get_execution_arguments(self) -> tuple[AsyncIOMotorClient, AsyncIOMotorClientSession | None]:
        self._ensure_usable()
        return self._client, self._session

    def _active_session(self, method_name: str) -> AsyncIOMotorClientSession:
        if not self.in_transaction:
            raise TransactionNotStartedError(method_name)
        return self._session

    def _release(self) -> None:
        if self._session is not None:
            self._session.delegate.end_session()
            self._session = None

    async def _arelease(self) -> None:
        if self._session is not None:
            await self._session.end_session()
            self._session = None


__all__ = ["MongoTransactionProvider"]
