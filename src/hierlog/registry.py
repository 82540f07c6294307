#!/usr/bin/env python3
"""Process-wide registry of attached loggers.

Each full dotted name maps to exactly one ``Logger`` for the life of the
process. Looking up a name that does not exist yet creates it together with
any missing ancestors, linking every new node into its parent's children.
Loggers are never removed.
"""

from __future__ import annotations

import threading

from loguru import logger

from hierlog.config import INITIAL_ROOT_LEVEL
from hierlog.logger import _REGISTRY_KEY, Logger, validate_name

__all__ = [
    "attached_loggers",
    "get_logger",
    "get_root_logger",
    "validate_name",
]

_lock = threading.RLock()
_root = Logger("", level=INITIAL_ROOT_LEVEL, _registry_key=_REGISTRY_KEY)
_loggers: dict[str, Logger] = {"": _root}


def get_root_logger() -> Logger:
    """Return the root logger (empty name, no parent)."""
    return _root


def get_logger(full_name: str = "") -> Logger:
    """Return the logger for ``full_name``, creating it and its ancestors if needed.

    The same name always yields the identical object. ``""`` is the root.

    Raises:
        InvalidLoggerNameError: If the name has an empty segment or a
            leading/trailing dot. Nothing is registered in that case.
    """
    existing = _loggers.get(full_name)
    if existing is not None:
        return existing

    validate_name(full_name)
    with _lock:
        return _get_or_create(full_name)


def _get_or_create(full_name: str) -> Logger:
    existing = _loggers.get(full_name)
    if existing is not None:
        return existing

    parent_name, _, simple_name = full_name.rpartition(".")
    parent = _get_or_create(parent_name)
    new_logger = Logger(simple_name, parent, _registry_key=_REGISTRY_KEY)
    parent._attach_child(new_logger)
    _loggers[full_name] = new_logger
    logger.debug(f"Created logger {full_name!r}")
    return new_logger


def attached_loggers() -> tuple[Logger, ...]:
    """Snapshot of every registered logger, root first."""
    with _lock:
        return tuple(_loggers.values())
