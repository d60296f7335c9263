"""Document-store commands writing people and their embedded pets."""

from __future__ import annotations

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorClientSession

from ..errors import ValidationError
from ..mongo import MongoTxCommand
from .commands import validate_name

PEOPLE_COLLECTION = "people"


def _validate_database(database: str | None) -> None:
    if database is None or not database.strip():
        raise ValidationError("database", "must not be empty")


class CreatePersonDocumentCommand(MongoTxCommand[ObjectId]):
    """Insert a person document with an empty pet list and return its id."""

    def __init__(self, database: str, name: str) -> None:
        self.database = database
        self.name = name

    def validate(self) -> None:
        _validate_database(self.database)
        validate_name("name", self.name)

    async def execute(
        self,
        database: AsyncIOMotorClient,
        transaction: AsyncIOMotorClientSession,
    ) -> ObjectId:
        collection = database[self.database][PEOPLE_COLLECTION]
        result = await collection.insert_one({"name": self.name, "pets": []}, session=transaction)
        return result.inserted_id


class AddPetDocumentCommand(MongoTxCommand[None]):
    """Append a pet to a person document, refusing duplicate names."""

    def __init__(self, database: str, person_id: ObjectId, pet_name: str) -> None:
        self.database = database
        self.person_id = person_id
        self.pet_name = pet_name

    def validate(self) -> None:
        _validate_database(self.database)
        if not isinstance(self.person_id, ObjectId):
            raise ValidationError("person_id", "must be an ObjectId")
        validate_name("pet_name", self.pet_name)

    async def execute(
        self,
        database: AsyncIOMotorClient,
        transaction: AsyncIOMotorClientSession,
    ) -> None:
        collection = database[self.database][PEOPLE_COLLECTION]
        result = await collection.update_one(
            {"_id": self.person_id, "pets.name": {"$ne": self.pet_name}},
            {"$push": {"pets": {"name": self.pet_name}}},
            session=transaction,
        )
        if result.matched_count == 0:
            raise ValidationError(
                "pet_name",
                f"person {self.person_id} does not exist or already has a pet named {self.pet_name!r}",
            )


__all__ = ["AddPetDocumentCommand", "CreatePersonDocumentCommand", "PEOPLE_COLLECTION"]
