from __future__ import annotations

from typing import Generic

from sqlalchemy.engine import Connection, RootTransaction

from ..command import ResultT, TxCommand


class SqlTxCommand(TxCommand[Connection, RootTransaction, ResultT], Generic[ResultT]):
    """A command executed against a SQLAlchemy ``Connection`` and its transaction."""


__all__ = ["SqlTxCommand"]
