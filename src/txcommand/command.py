"""The command contract executed inside a session's transaction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

DatabaseT = TypeVar("DatabaseT")
TransactionT = TypeVar("TransactionT")
ResultT = TypeVar("ResultT")


class TxCommand(ABC, Generic[DatabaseT, TransactionT, ResultT]):
    """A unit of work run against a backend's database and transaction handles.

    Commands are built by the caller for one logical operation and handed
    to :meth:`txcommand.session.Session.execute` once. ``validate`` is always
    called before ``execute``; a command that rejects its parameters should
    raise :class:`txcommand.errors.ValidationError`. Backend errors raised by
    ``execute`` are left to propagate unchanged.
    """

    @abstractmethod
    def validate(self) -> None:
        """Check the command's own parameters without touching the backend."""

    @abstractmethod
    async def execute(self, database: DatabaseT, transaction: TransactionT) -> ResultT:
        """Run the backend operation(s) using the supplied handles."""


__all__ = ["DatabaseT", "ResultT", "TransactionT", "TxCommand"]
