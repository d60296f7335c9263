from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.engine import Connection, RootTransaction

from ..errors import ArgumentNullError
from ..factory import SessionFactory
from ..session import Session
from .options import SqlOptions
from .provider import SqlTransactionProvider

ConnectionResolver = Callable[[], Connection]


class SqlSessionFactory(SessionFactory[Connection, RootTransaction]):
    """Create relational sessions bound to the ambient or an explicit connection."""

    def __init__(
        self,
        connection_resolver: ConnectionResolver,
        options: SqlOptions | None = None,
    ) -> None:
        if connection_resolver is None:
            raise ArgumentNullError("connection_resolver")
        self._connection_resolver = connection_resolver
        self._options = options if options is not None else SqlOptions()
        super().__init__(self._build_provider)

    @property
    def options(self) -> SqlOptions:
        return self._options

    def create_with_connection(self, connection: Connection) -> Session[Connection, RootTransaction]:
        """Create a session on ``connection`` instead of the resolved one."""
        if connection is None:
            raise ArgumentNullError("connection")
        return Session(SqlTransactionProvider(connection, self._options))

    def _build_provider(self) -> SqlTransactionProvider:
        return SqlTransactionProvider(self._connection_resolver(), self._options)


__all__ = ["ConnectionResolver", "SqlSessionFactory"]
