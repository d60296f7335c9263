from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class IsolationLevel(str, Enum):
    """Transaction isolation levels understood by SQLAlchemy dialects."""

    READ_UNCOMMITTED = "READ UNCOMMITTED"
    READ_COMMITTED = "READ COMMITTED"
    REPEATABLE_READ = "REPEATABLE READ"
    SERIALIZABLE = "SERIALIZABLE"


class SqlOptions(BaseModel):
    """Options applied by the relational provider when a transaction begins."""

    model_config = ConfigDict(frozen=True)

    isolation_level: IsolationLevel = Field(
        default=IsolationLevel.READ_UNCOMMITTED,
        description="Isolation level set on the connection before each transaction.",
    )


__all__ = ["IsolationLevel", "SqlOptions"]
