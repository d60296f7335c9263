"""Configuration, logging and context plumbing shared by sessions and providers."""

from __future__ import annotations

from .config import Settings, get_settings
from .context import bind_session_id, bound_session_id, get_session_id, reset_session_id
from .logging import JsonLogFormatter, SessionContextFilter, configure_logging

__all__ = [
    "JsonLogFormatter",
    "SessionContextFilter",
    "Settings",
    "bind_session_id",
    "bound_session_id",
    "configure_logging",
    "get_session_id",
    "get_settings",
    "reset_session_id",
]
