"""Exception hierarchy raised by sessions, providers and commands."""

from __future__ import annotations

from typing import Any


class TxCommandError(Exception):
    """Base class for errors raised by the transactional command layer."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "txcommand_error",
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details


class ArgumentNullError(TxCommandError, ValueError):
    """A required argument was ``None``."""

    def __init__(self, param_name: str) -> None:
        super().__init__(
            f"Value cannot be None. (Parameter '{param_name}')",
            code="argument_null",
            details={"param_name": param_name},
        )
        self.param_name = param_name


class ObjectDisposedError(TxCommandError, RuntimeError):
    """An operation was attempted on a session or provider after it was closed."""

    def __init__(self, object_name: str) -> None:
        super().__init__(
            f"Cannot access a disposed object. (Object '{object_name}')",
            code="object_disposed",
            details={"object_name": object_name},
        )
        self.object_name = object_name


class OperationCancelledError(TxCommandError):
    """The caller's cancellation signal was already set when the operation started."""

    def __init__(self, message: str = "The operation was cancelled.") -> None:
        super().__init__(message, code="operation_cancelled")


class TransactionNotStartedError(TxCommandError, RuntimeError):
    """Commit or rollback was requested without an active transaction."""

    def __init__(self, method_name: str) -> None:
        super().__init__(
            f"Cannot call {method_name} as a transaction has either not started, or been completed.",
            code="transaction_not_started",
            details={"method_name": method_name},
        )
        self.method_name = method_name


class ValidationError(TxCommandError, ValueError):
    """A command rejected its own parameters."""

    def __init__(self, param_name: str, reason: str) -> None:
        super().__init__(
            f"{param_name}: {reason}",
            code="validation_error",
            details={"param_name": param_name, "reason": reason},
        )
        self.param_name = param_name
        self.reason = reason


__all__ = [
    "ArgumentNullError",
    "ObjectDisposedError",
    "OperationCancelledError",
    "TransactionNotStartedError",
    "TxCommandError",
    "ValidationError",
]
