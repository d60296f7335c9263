from __future__ import annotations

import asyncio
import threading
from typing import Any

import pytest

from fakes import RecordingCommand, RecordingProvider
from txcommand import (
    ArgumentNullError,
    ObjectDisposedError,
    OperationCancelledError,
    Session,
    TransactionNotStartedError,
    ValidationError,
)
from txcommand.core.context import get_session_id

pytestmark = pytest.mark.asyncio


def _names(calls: list[tuple[Any, ...]]) -> list[str]:
    return [call[0] for call in calls]


def _cancelled() -> asyncio.Event:
    event = asyncio.Event()
    event.set()
    return event


async def test_session_requires_provider() -> None:
    with pytest.raises(ArgumentNullError) as exc_info:
        Session(None)  # type: ignore[arg-type]

    assert exc_info.value.param_name == "provider"


async def test_new_session_is_idle_and_not_disposed(provider: RecordingProvider) -> None:
    session = Session(provider)

    assert session.completed is True
    assert session.disposed is False
    assert session.provider is provider
    assert session.session_id


async def test_happy_path_executes_in_order_and_commits_on_close(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)

    person_id = await session.execute(RecordingCommand(calls, "create_person", result=1))
    assert session.completed is False
    await session.execute(RecordingCommand(calls, "add_pet"))
    session.close()

    assert person_id == 1
    assert calls == [
        ("begin", 1),
        ("validate", "create_person"),
        ("execute", "create_person", "db", "tx-1"),
        ("validate", "add_pet"),
        ("execute", "add_pet", "db", "tx-1"),
        ("commit_sync", 1),
        ("release",),
    ]
    assert provider.transactions_started == 1
    assert "rollback" not in _names(calls)
    assert session.completed is True
    assert session.disposed is True


async def test_validation_failure_skips_execute_and_rolls_back_once(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)
    error = ValidationError("pet_name", "must not be empty")

    await session.execute(RecordingCommand(calls, "create_person", result=1))
    with pytest.raises(ValidationError) as exc_info:
        await session.execute(RecordingCommand(calls, "add_pet", validate_error=error))

    assert exc_info.value is error
    assert ("execute", "add_pet", "db", "tx-1") not in calls
    assert _names(calls).count("rollback") == 1
    assert _names(calls).count("commit") == 0
    assert session.completed is True


async def test_execute_failure_rethrows_original_error(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)
    error = LookupError("backend exploded")

    with pytest.raises(LookupError) as exc_info:
        await session.execute(RecordingCommand(calls, "boom", execute_error=error))

    assert exc_info.value is error
    assert _names(calls) == ["begin", "validate", "execute", "rollback"]


async def test_rollback_failure_supersedes_original_error(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)
    provider.fail_on["rollback"] = ConnectionError("rollback failed")

    with pytest.raises(ConnectionError, match="rollback failed"):
        await session.execute(RecordingCommand(calls, "boom", execute_error=KeyError("x")))


async def test_ensure_transaction_failure_propagates_without_rollback(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)
    provider.fail_on["ensure_transaction"] = ConnectionError("no database")

    with pytest.raises(ConnectionError):
        await session.execute(RecordingCommand(calls))

    assert calls == []
    assert session.completed is True


async def test_execute_precondition_failures_touch_no_provider(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)

    with pytest.raises(ArgumentNullError) as exc_info:
        await session.execute(None)  # type: ignore[arg-type]
    assert exc_info.value.param_name == "command"

    with pytest.raises(OperationCancelledError):
        await session.execute(RecordingCommand(calls), _cancelled())

    assert calls == []
    assert provider.transactions_started == 0


async def test_threading_event_is_accepted_as_cancellation_signal(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)
    cancel = threading.Event()

    await session.execute(RecordingCommand(calls, result="ok"), cancel)
    cancel.set()

    with pytest.raises(OperationCancelledError):
        await session.commit(cancel)
    assert session.completed is False


@pytest.mark.parametrize("method_name", ["commit", "rollback"])
async def test_commit_and_rollback_require_open_transaction(
    provider: RecordingProvider, calls: list[tuple[Any, ...]], method_name: str
) -> None:
    session = Session(provider)

    with pytest.raises(TransactionNotStartedError) as exc_info:
        await getattr(session, method_name)()

    assert exc_info.value.method_name == method_name
    assert calls == []


async def test_commit_sync_requires_open_transaction(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)

    with pytest.raises(TransactionNotStartedError):
        session.commit_sync()

    assert calls == []


async def test_second_commit_fails_after_transaction_completed(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)
    await session.execute(RecordingCommand(calls))
    await session.commit()

    with pytest.raises(TransactionNotStartedError):
        await session.commit()

    assert _names(calls).count("commit") == 1


async def test_new_transaction_starts_after_commit(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)

    await session.execute(RecordingCommand(calls, "first"))
    await session.commit()
    await session.execute(RecordingCommand(calls, "second"))
    await session.rollback()

    assert ("execute", "second", "db", "tx-2") in calls
    assert calls[-1] == ("rollback", 2)
    assert provider.transactions_started == 2


async def test_operations_after_close_raise_object_disposed(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)
    await session.execute(RecordingCommand(calls))
    session.close()
    calls.clear()

    with pytest.raises(ObjectDisposedError):
        await session.execute(RecordingCommand(calls))
    with pytest.raises(ObjectDisposedError):
        await session.commit()
    with pytest.raises(ObjectDisposedError):
        session.commit_sync()
    with pytest.raises(ObjectDisposedError):
        await session.rollback()

    assert calls == []


async def test_disposed_check_precedes_cancellation(provider: RecordingProvider) -> None:
    session = Session(provider)
    session.close()

    with pytest.raises(ObjectDisposedError):
        await session.execute(None, _cancelled())  # type: ignore[arg-type]


async def test_close_is_idempotent_and_skips_commit_when_idle(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)

    session.close()
    session.close()

    assert calls == [("release",)]
    assert provider.disposed is True


async def test_close_after_explicit_commit_does_not_commit_again(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)
    await session.execute(RecordingCommand(calls))
    await session.commit()
    session.close()

    assert _names(calls).count("commit") == 1
    assert "commit_sync" not in _names(calls)


async def test_async_context_manager_commits_pending_work(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    async with Session(provider) as session:
        await session.execute(RecordingCommand(calls))

    assert _names(calls)[-2:] == ["commit", "arelease"]
    assert "rollback" not in _names(calls)
    assert session.disposed is True

    await session.aclose()
    assert _names(calls).count("arelease") == 1


async def test_sync_context_manager_commits_even_when_block_raises(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    with pytest.raises(RuntimeError):
        with Session(provider) as session:
            await session.execute(RecordingCommand(calls))
            raise RuntimeError("caller error outside a command")

    assert _names(calls)[-2:] == ["commit_sync", "release"]
    assert "rollback" not in _names(calls)


async def test_listeners_fire_in_registration_order(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)
    events: list[str] = []

    @session.on_executed
    def _first(command: RecordingCommand) -> None:
        events.append(f"executed-1:{command.name}")

    session.on_executed(lambda command: events.append(f"executed-2:{command.name}"))
    session.on_committed(lambda: events.append("committed"))
    session.on_rolled_back(lambda: events.append("rolled_back"))

    await session.execute(RecordingCommand(calls, "a"))
    await session.commit()
    await session.execute(RecordingCommand(calls, "b", execute_error=ValueError("bad")))

    assert events == ["executed-1:a", "executed-2:a", "committed", "rolled_back"]
    assert _first.__name__ == "_first"


async def test_failing_executed_listener_rolls_back(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)

    def _explode(command: RecordingCommand) -> None:
        raise RuntimeError("listener failed")

    session.on_executed(_explode)

    with pytest.raises(RuntimeError, match="listener failed"):
        await session.execute(RecordingCommand(calls))

    assert _names(calls)[-1] == "rollback"


async def test_task_cancellation_during_execute_rolls_back(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)
    started = asyncio.Event()

    class _SlowCommand(RecordingCommand):
        async def execute(self, database: str, transaction: str) -> Any:
            started.set()
            await asyncio.sleep(10)

    task = asyncio.create_task(session.execute(_SlowCommand(calls, "slow")))
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    assert _names(calls)[-1] == "rollback"
    assert session.completed is True


async def test_session_id_is_bound_while_command_runs(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)
    seen: list[str] = []

    class _CapturingCommand(RecordingCommand):
        async def execute(self, database: str, transaction: str) -> Any:
            seen.append(get_session_id())

    await session.execute(_CapturingCommand(calls))

    assert seen == [session.session_id]
    assert get_session_id() == "-"


async def test_signal_set_while_command_runs_still_rolls_back(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)
    cancel = asyncio.Event()
    error = RuntimeError("command failed after cancellation was requested")

    class _CancellingCommand(RecordingCommand):
        async def execute(self, database: str, transaction: str) -> Any:
            cancel.set()
            raise error

    with pytest.raises(RuntimeError) as exc_info:
        await session.execute(_CancellingCommand(calls), cancel)
    await session.aclose()

    assert exc_info.value is error
    assert session.completed is True
    assert _names(calls).count("rollback") == 1
    assert "commit" not in _names(calls)


async def test_aclose_releases_provider_when_commit_fails(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)
    await session.execute(RecordingCommand(calls))
    provider.fail_on["commit"] = ConnectionError("commit failed")

    with pytest.raises(ConnectionError, match="commit failed"):
        await session.aclose()

    assert provider.disposed is True
    assert session.disposed is True
    assert _names(calls)[-1] == "arelease"

    await session.aclose()
    assert _names(calls).count("arelease") == 1


async def test_close_releases_provider_when_commit_fails(
    provider: RecordingProvider, calls: list[tuple[Any, ...]]
) -> None:
    session = Session(provider)
    await session.execute(RecordingCommand(calls))
    provider.fail_on["commit_sync"] = ConnectionError("commit failed")

    with pytest.raises(ConnectionError):
        session.close()
    session.close()

    assert provider.disposed is True
    assert session.disposed is True
    assert _names(calls).count("release") == 1
