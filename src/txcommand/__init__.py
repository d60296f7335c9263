"""Run a sequence of commands inside one database transaction.

Sessions commit only when every command validates and executes; any
failure rolls the transaction back. Two backends are supported: SQLAlchemy
connections (:mod:`txcommand.sql`) and Motor client sessions
(:mod:`txcommand.mongo`).
"""

from __future__ import annotations

from .command import TxCommand
from .errors import (
    ArgumentNullError,
    ObjectDisposedError,
    OperationCancelledError,
    TransactionNotStartedError,
    TxCommandError,
    ValidationError,
)
from .factory import SessionFactory
from .provider import CancellationSignal, TransactionProvider
from .session import Session

__version__ = "0.1.0"

__all__ = [
    "ArgumentNullError",
    "CancellationSignal",
    "ObjectDisposedError",
    "OperationCancelledError",
    "Session",
    "SessionFactory",
    "TransactionNotStartedError",
    "TransactionProvider",
    "TxCommand",
    "TxCommandError",
    "ValidationError",
    "__version__",
]
