from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from fakes import FakeMotorClient, RecordingProvider
from txcommand.example.models import create_schema


@pytest.fixture()
def calls() -> list[tuple[Any, ...]]:
    return []


@pytest.fixture()
def provider(calls: list[tuple[Any, ...]]) -> RecordingProvider:
    return RecordingProvider(calls)


@pytest.fixture()
def motor_client() -> FakeMotorClient:
    return FakeMotorClient()


@pytest.fixture()
def engine(tmp_path: Path) -> Iterator[Engine]:
    engine = create_engine(f"sqlite:///{tmp_path / 'txcommand.db'}")
    create_schema(engine)
    try:
        yield engine
    finally:
        engine.dispose()
