"""Relational backend: SQLAlchemy connections and root transactions."""

from __future__ import annotations

from .command import SqlTxCommand
from .factory import ConnectionResolver, SqlSessionFactory
from .options import IsolationLevel, SqlOptions
from .provider import SqlTransactionProvider

__all__ = [
    "ConnectionResolver",
    "IsolationLevel",
    "SqlOptions",
    "SqlSessionFactory",
    "SqlTransactionProvider",
    "SqlTxCommand",
]
