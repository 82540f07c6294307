"""hierlog - hierarchical, level-filtered logging.

A tree of named loggers sharing a dotted namespace. Each logger filters events
against an effective level and delivers ``LogRecord`` objects synchronously to
its subscribers. Sinks (console, files, ...) are just subscribers.

Quick Start:
    >>> import hierlog
    >>> from hierlog import INFO, WARN, get_logger, get_root_logger
    >>>
    >>> sub = get_root_logger().subscribe_records(print)
    >>> get_root_logger().info("service started")
    [INFO] : service started
    >>>
    >>> hierlog.set_hierarchical_logging(True)
    >>> db = get_logger("app.db")
    >>> db.level = WARN
    >>> db.info(lambda: expensive_dump())  # never evaluated: below WARN
    >>> sub.cancel()

Modes:
- Global (default): every attached logger uses the root level; records go to
  the emitting logger's subscribers only.
- Hierarchical: loggers hold their own levels, inherited down the tree; records
  bubble up to every ancestor's subscribers.
"""

__version__ = "0.1.0"

from hierlog.config import DEFAULT_LEVEL, LoggingSettings, configured, enable_diagnostics, settings
from hierlog.context import ExecutionContext, current_context
from hierlog.exceptions import (
    HierlogError,
    InvalidLoggerNameError,
    ReentrantEmissionError,
    UnsupportedOperationError,
)
from hierlog.level import ALL, DEBUG, ERROR, INFO, LEVELS, OFF, VERBOSE, WARN, Level
from hierlog.logger import ChildrenView, Logger
from hierlog.record import LogRecord
from hierlog.registry import attached_loggers, get_logger, get_root_logger, validate_name
from hierlog.stream import EventStream, Subscription


def set_hierarchical_logging(enabled: bool = True) -> None:
    """Switch between global mode (False) and hierarchical mode (True)."""
    settings.hierarchical_logging_enabled = enabled


def set_record_stack_trace_at_level(level: Level | str | int) -> None:
    """Capture call stacks automatically for records at or above ``level`` (OFF disables)."""
    settings.record_stack_trace_at_level = level


__all__ = [
    "ALL",
    "DEBUG",
    "DEFAULT_LEVEL",
    "ERROR",
    "INFO",
    "LEVELS",
    "OFF",
    "VERBOSE",
    "WARN",
    "ChildrenView",
    "EventStream",
    "ExecutionContext",
    "HierlogError",
    "InvalidLoggerNameError",
    "Level",
    "LogRecord",
    "Logger",
    "LoggingSettings",
    "ReentrantEmissionError",
    "Subscription",
    "UnsupportedOperationError",
    "attached_loggers",
    "configured",
    "current_context",
    "enable_diagnostics",
    "get_logger",
    "get_root_logger",
    "set_hierarchical_logging",
    "set_record_stack_trace_at_level",
    "settings",
    "validate_name",
]
