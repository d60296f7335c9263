"""People-and-pets example built on the transactional command layer."""

from __future__ import annotations

from .commands import AddPetCommand, CreatePersonCommand
from .documents import AddPetDocumentCommand, CreatePersonDocumentCommand
from .models import Person, Pet, create_schema
from .services import PersonService, PetService

__all__ = [
    "AddPetCommand",
    "AddPetDocumentCommand",
    "CreatePersonCommand",
    "CreatePersonDocumentCommand",
    "Person",
    "PersonService",
    "Pet",
    "PetService",
    "create_schema",
]
