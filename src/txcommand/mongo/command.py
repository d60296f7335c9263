from __future__ import annotations

from typing import Generic

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorClientSession

from ..command import ResultT, TxCommand


class MongoTxCommand(TxCommand[AsyncIOMotorClient, AsyncIOMotorClientSession, ResultT], Generic[ResultT]):
    """A command executed against a Motor client within a client session's transaction.

    Implementations must pass the session to every driver call
    (``session=transaction``), otherwise the writes happen outside the
    transaction.
    """


__all__ = ["MongoTxCommand"]
