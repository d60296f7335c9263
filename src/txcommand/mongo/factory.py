from __future__ import annotations

from collections.abc import Callable

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorClientSession

from ..errors import ArgumentNullError
from ..factory import SessionFactory
from .options import MongoOptions
from .provider import MongoTransactionProvider

ClientResolver = Callable[[], AsyncIOMotorClient]


class MongoSessionFactory(SessionFactory[AsyncIOMotorClient, AsyncIOMotorClientSession]):
    """Create document-store sessions over the resolved client."""

    def __init__(self, client_resolver: ClientResolver, options: MongoOptions | None = None) -> None:
        if client_resolver is None:
            raise ArgumentNullError("client_resolver")
        self._client_resolver = client_resolver
        self._options = options if options is not None else MongoOptions()
        super().__init__(self._build_provider)

    @property
    def options(self) -> MongoOptions:
        return self._options

    def _build_provider(self) -> MongoTransactionProvider:
        return MongoTransactionProvider(self._client_resolver(), self._options)


__all__ = ["ClientResolver", "MongoSessionFactory"]
