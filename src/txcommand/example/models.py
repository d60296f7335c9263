"""People and pets tables used by the example commands."""

from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.engine import Engine
from sqlmodel import Field, SQLModel


class Person(SQLModel, table=True):
    """A person who may own pets."""

    __tablename__ = "people"
    __table_args__ = (sa.CheckConstraint("length(name) > 0", name="ck_people_name_length"),)

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(
        sa_column=sa.Column(sa.String(length=255), nullable=False),
    )


class Pet(SQLModel, table=True):
    """A pet owned by a person; names are unique per owner."""

    __tablename__ = "pets"
    __table_args__ = (
        sa.UniqueConstraint("person_id", "name", name="uq_pets_person_id_name"),
        sa.Index("ix_pets_person_id", "person_id"),
    )

    id: int | None = Field(default=None, primary_key=True)
    person_id: int = Field(
        sa_column=sa.Column(
            sa.Integer(),
            sa.ForeignKey("people.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    name: str = Field(
        sa_column=sa.Column(sa.String(length=255), nullable=False),
    )


def create_schema(engine: Engine) -> None:
    """Create the example tables (primarily for tests and local development)."""
    SQLModel.metadata.create_all(engine, tables=[Person.__table__, Pet.__table__])


__all__ = ["Person", "Pet", "create_schema"]
