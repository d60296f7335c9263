"""Wire session factories from configuration."""

from __future__ import annotations

from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from .core.config import Settings, get_settings
from .errors import ArgumentNullError
from .mongo import MongoOptions, MongoSessionFactory
from .sql import ConnectionResolver, SqlOptions, SqlSessionFactory


def create_sql_engine(settings: Settings | None = None) -> Engine:
    """Build the SQLAlchemy engine described by ``settings.database_url``."""

    settings = settings or get_settings()
    return create_engine(settings.database_url, echo=settings.db_echo, pool_pre_ping=True)


def create_mongo_client(settings: Settings | None = None) -> AsyncIOMotorClient:
    """Build the Motor client described by ``settings.mongo_url``."""

    settings = settings or get_settings()
    return AsyncIOMotorClient(settings.mongo_url, tz_aware=True, uuidRepresentation="standard")


def build_sql_session_factory(
    connection_resolver: ConnectionResolver,
    *,
    settings: Settings | None = None,
    options: SqlOptions | None = None,
) -> SqlSessionFactory:
    """Build a relational session factory; explicit ``options`` win over ``settings``."""

    if connection_resolver is None:
        raise ArgumentNullError("connection_resolver")
    if options is None:
        options = (settings or get_settings()).sql_options()
    return SqlSessionFactory(connection_resolver, options)


def build_mongo_session_factory(
    client: AsyncIOMotorClient,
    *,
    settings: Settings | None = None,
    options: MongoOptions | None = None,
    **overrides: Any,
) -> MongoSessionFactory:
    """Build a document-store session factory bound to a shared client.

    ``overrides`` are forwarded to :meth:`MongoOptions.build` and take
    precedence over the configured values.
    """

    if client is None:
        raise ArgumentNullError("client")
    if options is None:
        if overrides:
            settings = settings or get_settings()
            values: dict[str, Any] = {
                "causal_consistency": settings.mongo_causal_consistency,
                "max_commit_time_ms": settings.mongo_max_commit_time_ms,
            }
            values.update(overrides)
            options = MongoOptions.build(**values)
        else:
            options = (settings or get_settings()).mongo_options()
    return MongoSessionFactory(lambda: client, options)


__all__ = [
    "build_mongo_session_factory",
    "build_sql_session_factory",
    "create_mongo_client",
    "create_sql_engine",
]
