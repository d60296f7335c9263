"""Relational commands writing people and their pets."""

from __future__ import annotations

from sqlalchemy import insert
from sqlalchemy.engine import Connection, RootTransaction

from ..errors import ValidationError
from ..sql import SqlTxCommand
from .models import Person, Pet

NAME_MAX_LENGTH = 255


def validate_name(param_name: str, value: str | None) -> None:
    if value is None or not value.strip():
        raise ValidationError(param_name, "must not be empty")
    if len(value) > NAME_MAX_LENGTH:
        raise ValidationError(param_name, f"must be at most {NAME_MAX_LENGTH} characters")


class CreatePersonCommand(SqlTxCommand[int]):
    """Insert a person and return the generated primary key."""

    def __init__(self, name: str) -> None:
        self.name = name

    def validate(self) -> None:
        validate_name("name", self.name)

    async def execute(self, database: Connection, transaction: RootTransaction) -> int:
        result = database.execute(insert(Person.__table__).values(name=self.name))
        return int(result.inserted_primary_key[0])


class AddPetCommand(SqlTxCommand[None]):
    """Insert a pet for an existing person.

    Pet names are unique per owner, so adding the same name twice fails
    with the backend's integrity error.
    """

    def __init__(self, person_id: int, pet_name: str) -> None:
        self.person_id = person_id
        self.pet_name = pet_name

    def validate(self) -> None:
        if self.person_id is None or self.person_id <= 0:
            raise ValidationError("person_id", "must be a positive integer")
        validate_name("pet_name", self.pet_name)

    async def execute(self, database: Connection, transaction: RootTransaction) -> None:
        database.execute(
            insert(Pet.__table__).values(person_id=self.person_id, name=self.pet_name)
        )


__all__ = ["AddPetCommand", "CreatePersonCommand", "NAME_MAX_LENGTH", "validate_name"]
