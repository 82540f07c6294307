#!/usr/bin/env python3
"""Exceptions raised by the logger hierarchy.

Every failure in this package is local and synchronous: it is raised at the
call that breaks the contract and leaves the hierarchy untouched. Each class
also derives from the builtin exception category it belongs to, so callers can
catch either ``HierlogError`` or e.g. ``ValueError``.
"""

from loguru import logger

__all__ = [
    "HierlogError",
    "InvalidLoggerNameError",
    "ReentrantEmissionError",
    "UnsupportedOperationError",
]


class HierlogError(Exception):
    """Base exception for all logger hierarchy errors."""

    def __init__(self, message="Logger hierarchy error occurred"):
        self.message = message
        super().__init__(self.message)
        logger.debug(f"{type(self).__name__}: {message}")


class InvalidLoggerNameError(HierlogError, ValueError):
    """Raised when a logger name has an empty, leading-dot or trailing-dot segment."""

    def __init__(self, name, message=None):
        self.name = name
        message = message or f"Logger name {name!r} must not contain empty segments or start/end with '.'"
        super().__init__(message)


class UnsupportedOperationError(HierlogError, TypeError):
    """Raised for operations a logger refuses in its current state."""


class ReentrantEmissionError(HierlogError, RuntimeError):
    """Raised when a guarded event stream is asked to emit while it is already firing."""

    def __init__(self, message="Cannot fire a new event while the stream is already firing"):
        super().__init__(message)
