"""Reusable FastAPI dependencies and exception handlers."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from typing import Any

from fastapi import FastAPI, status
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Connection, Engine, RootTransaction
from starlette.requests import Request

from .errors import (
    ArgumentNullError,
    TransactionNotStartedError,
    TxCommandError,
    ValidationError,
)
from .factory import SessionFactory
from .session import Session
from .sql import SqlOptions, SqlSessionFactory

logger = logging.getLogger(__name__)

SessionDependency = Callable[[], AsyncIterator[Session[Any, Any]]]


def session_dependency(factory: SessionFactory[Any, Any]) -> SessionDependency:
    """Return a dependency yielding a fresh session per request.

    Work left uncommitted when the request finishes is committed as the
    session closes.
    """

    if factory is None:
        raise ArgumentNullError("factory")

    async def _dependency() -> AsyncIterator[Session[Any, Any]]:
        async with factory.create() as session:
            yield session

    return _dependency


def sql_session_dependency(
    engine: Engine,
    options: SqlOptions | None = None,
) -> Callable[[], AsyncIterator[Session[Connection, RootTransaction]]]:
    """Return a dependency opening one connection per request and a session on it."""

    if engine is None:
        raise ArgumentNullError("engine")

    async def _dependency() -> AsyncIterator[Session[Connection, RootTransaction]]:
        with engine.connect() as connection:
            factory = SqlSessionFactory(lambda: connection, options)
            async with factory.create() as session:
                yield session

    return _dependency


_ERROR_STATUS_CODES: dict[type[TxCommandError], int] = {
    ValidationError: 422,
    TransactionNotStartedError: status.HTTP_409_CONFLICT,
    ArgumentNullError: status.HTTP_400_BAD_REQUEST,
}


def _status_code_for(exc: TxCommandError) -> int:
    for error_type, status_code in _ERROR_STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the provided FastAPI app."""

    @app.exception_handler(TxCommandError)
    async def _handle_txcommand_error(request: Request, exc: TxCommandError) -> JSONResponse:
        status_code = _status_code_for(exc)
        log = logger.error if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.warning
        log(
            "Transactional command error encountered",
            extra={"code": exc.code, "status_code": status_code, "path": str(request.url.path)},
        )
        return JSONResponse(
            status_code=status_code,
            content={"code": exc.code, "message": exc.message, "details": exc.details},
        )


__all__ = [
    "SessionDependency",
    "register_exception_handlers",
    "session_dependency",
    "sql_session_dependency",
]
