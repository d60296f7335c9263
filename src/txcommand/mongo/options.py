from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pymongo.client_session import SessionOptions, TransactionOptions


class MongoOptions(BaseModel):
    """Session and transaction options used by the document-store provider."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    session_options: SessionOptions = Field(default_factory=SessionOptions)
    transaction_options: TransactionOptions = Field(default_factory=TransactionOptions)

    @classmethod
    def build(
        cls,
        *,
        causal_consistency: bool | None = None,
        snapshot: bool = False,
        max_commit_time_ms: int | None = None,
        read_concern: Any | None = None,
        write_concern: Any | None = None,
        read_preference: Any | None = None,
    ) -> "MongoOptions":
        """Construct options from plain keyword values."""

        return cls(
            session_options=SessionOptions(causal_consistency=causal_consistency, snapshot=snapshot),
            transaction_options=TransactionOptions(
                read_concern=read_concern,
                write_concern=write_concern,
                read_preference=read_preference,
                max_commit_time_ms=max_commit_time_ms,
            ),
        )

    def session_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``start_session``."""

        options = self.session_options
        return {
            "causal_consistency": options.causal_consistency,
            "default_transaction_options": options.default_transaction_options,
            "snapshot": options.snapshot,
        }

    def transaction_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``start_transaction``."""

        options = self.transaction_options
        return {
            "read_concern": options.read_concern,
            "write_concern": options.write_concern,
            "read_preference": options.read_preference,
            "max_commit_time_ms": options.max_commit_time_ms,
        }


__all__ = ["MongoOptions"]
