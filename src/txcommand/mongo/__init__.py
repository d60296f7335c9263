"""Document-store backend: Motor clients and client-session transactions."""

from __future__ import annotations

from .command import MongoTxCommand
from .factory import ClientResolver, MongoSessionFactory
from .options import MongoOptions
from .provider import MongoTransactionProvider

__all__ = [
    "ClientResolver",
    "MongoOptions",
    "MongoSessionFactory",
    "MongoTransactionProvider",
    "MongoTxCommand",
]
