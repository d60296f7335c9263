"""Service layer composing the example commands into single transactions."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..errors import ArgumentNullError
from ..sql import SqlSessionFactory
from .commands import AddPetCommand, CreatePersonCommand

logger = logging.getLogger(__name__)


class PersonService:
    """Create people together with their first pet."""

    def __init__(self, session_factory: SqlSessionFactory) -> None:
        if session_factory is None:
            raise ArgumentNullError("session_factory")
        self._session_factory = session_factory

    async def create(self, person_name: str, pet_name: str) -> int:
        """Create a person and their pet atomically, returning the person's id."""
        async with self._session_factory.create() as session:
            person_id = await session.execute(CreatePersonCommand(person_name))
            await session.execute(AddPetCommand(person_id, pet_name))
            await session.commit()

        logger.info("Created person with pet", extra={"person_id": person_id})
        return person_id


class PetService:
    """Attach pets to existing people."""

    def __init__(self, session_factory: SqlSessionFactory) -> None:
        if session_factory is None:
            raise ArgumentNullError("session_factory")
        self._session_factory = session_factory

    async def add_pet(self, person_id: int, pet: str) -> None:
        async with self._session_factory.create() as session:
            await session.execute(AddPetCommand(person_id, pet))

    async def add_pets(self, person_id: int, pets: Iterable[str]) -> None:
        """Add every pet or none of them."""
        async with self._session_factory.create() as session:
            for pet in pets:
                await session.execute(AddPetCommand(person_id, pet))
            await session.commit()


__all__ = ["PersonService", "PetService"]
