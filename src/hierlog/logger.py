#!/usr/bin/env python3
"""Named loggers, level resolution and record dispatch.

Attached loggers form a tree rooted at the root logger (empty name) and are
obtained through ``hierlog.registry.get_logger``. Detached loggers are built
with ``Logger.detached``; they have no parent, no children, and always filter
and deliver on their own.

Level resolution:
    - detached: own level (never unset)
    - root: own level (never unset)
    - global mode: every attached logger uses the root's level
    - hierarchical mode: own level if set, else the nearest ancestor's

Delivery:
    - detached, or global mode: the emitting logger's subscribers only
    - hierarchical mode: the emitting logger's subscribers, then its parent's,
      and so on up to and including the root
"""

from __future__ import annotations

import inspect
import traceback
import weakref
from collections.abc import Callable, Iterator, Mapping
from typing import Any

import pendulum
from loguru import logger as _loguru_logger

from hierlog.config import DEFAULT_LEVEL, settings
from hierlog.context import ExecutionContext, current_context
from hierlog.exceptions import InvalidLoggerNameError, UnsupportedOperationError
from hierlog.level import DEBUG, ERROR, INFO, VERBOSE, WARN, Level
from hierlog.record import LogRecord
from hierlog.stream import EventStream, Subscription

__all__ = ["ChildrenView", "Logger", "validate_name"]

_PACKAGE = __name__.partition(".")[0]

# Passed by the registry when it builds attached loggers
_REGISTRY_KEY = object()


def validate_name(name: str) -> str:
    """Check that every dot-separated segment of ``name`` is non-empty.

    Rejects "", ".c", "a." and "a..d". The empty root name is handled by the
    registry before it gets here.

    Returns:
        The name, unchanged

    Raises:
        InvalidLoggerNameError: If any segment is empty
    """
    if not isinstance(name, str):
        raise InvalidLoggerNameError(name, f"Logger name must be a string, got {type(name).__name__}")
    if name.startswith("."):
        raise InvalidLoggerNameError(name, f"Logger name {name!r} must not start with '.'")
    if name.endswith("."):
        raise InvalidLoggerNameError(name, f"Logger name {name!r} must not end with '.'")
    if not all(name.split(".")):
        raise InvalidLoggerNameError(name)
    return name


def _unsupported(self, *args, **kwargs):
    raise UnsupportedOperationError("Logger children are read-only")


class ChildrenView(Mapping):
    """Read-only mapping of simple name to child logger.

    Reads go straight to the owning logger's map, so children created later
    show up immediately. Every mutator raises UnsupportedOperationError.
    """

    __slots__ = ("_children",)

    def __init__(self, children: dict[str, Logger]):
        self._children = children

    def __getitem__(self, key: str) -> Logger:
        return self._children[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __repr__(self) -> str:
        return f"ChildrenView({sorted(self._children)!r})"

    __setitem__ = _unsupported
    __delitem__ = _unsupported
    clear = _unsupported
    pop = _unsupported
    popitem = _unsupported
    setdefault = _unsupported
    update = _unsupported


def _capture_stack() -> traceback.StackSummary:
    """Capture the call stack starting at the first frame outside this package."""
    frame = inspect.currentframe()
    while frame is not None and frame.f_globals.get("__name__", "").partition(".")[0] == _PACKAGE:
        frame = frame.f_back
    return traceback.extract_stack(frame)


def _resolve_message(message: Any) -> Any:
    # Classes are callable but are logged as values
    if callable(message) and not isinstance(message, type):
        return message()
    return message


class Logger:
    """A named node in the logger hierarchy.

    Use ``hierlog.get_logger(name)`` for attached (singleton) loggers and
    ``Logger.detached(name)`` for standalone ones. Calling the constructor
    directly only works for detached loggers: attached nodes, the root
    included, are built by the registry alone.
    """

    def __init__(
        self,
        name: str,
        parent: Logger | None = None,
        *,
        detached: bool = False,
        level: Level | None = None,
        _registry_key: object = None,
    ):
        if name or parent is not None or detached:
            validate_name(name)
        if not detached and _registry_key is not _REGISTRY_KEY:
            raise UnsupportedOperationError(
                f"Cannot build attached logger {name!r} directly; use get_logger() or Logger.detached()"
            )

        self._name = name
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self._detached = detached
        self._children: dict[str, Logger] = {}
        self._children_view = ChildrenView(self._children)

        if parent is None or not parent.full_name:
            self._full_name = name
        else:
            self._full_name = f"{parent.full_name}.{name}"

        # Global mode resolves every attached level against the root
        self._root_ref = parent._root_ref if parent is not None else weakref.ref(self)

        # None means "inherit"; the root and detached loggers always hold a level
        if parent is None and level is None:
            level = DEFAULT_LEVEL
        self._level: Level | None = level

        self._records: EventStream[LogRecord] = EventStream(allow_nested=True)
        self._level_changes: EventStream[Level] = EventStream(allow_nested=False)

    @classmethod
    def detached(cls, name: str) -> Logger:
        """Create a standalone logger outside the hierarchy.

        Every call returns a new instance, even for a name already in use.
        Detached loggers ignore the root level and the hierarchical mode.
        """
        return cls(validate_name(name), detached=True)

    # Identity and structure

    @property
    def name(self) -> str:
        return self._name

    @property
    def full_name(self) -> str:
        return self._full_name

    @property
    def parent(self) -> Logger | None:
        return self._parent_ref() if self._parent_ref is not None else None

    @property
    def children(self) -> ChildrenView:
        return self._children_view

    @property
    def is_detached(self) -> bool:
        return self._detached

    @property
    def is_root(self) -> bool:
        return self._parent_ref is None and not self._detached

    def _attach_child(self, child: Logger) -> None:
        self._children[child.name] = child

    def _root(self) -> Logger:
        return self._root_ref()

    # Levels

    @property
    def level_override(self) -> Level | None:
        """This logger's own level, or None when it inherits."""
        return self._level

    @property
    def level(self) -> Level:
        """Effective level of this logger."""
        if self._detached or self._parent_ref is None:
            return self._level
        if not settings.hierarchical_logging_enabled:
            return self._root()._level

        node = self
        while node._level is None:
            node = node.parent
        return node._level

    @level.setter
    def level(self, value: Level | str | int | None) -> None:
        if value is not None:
            value = Level.parse(value)

        if not self._detached and not self.is_root and not settings.hierarchical_logging_enabled:
            raise UnsupportedOperationError(
                "Enable hierarchical logging (settings.hierarchical_logging_enabled = True) "
                "to change the level on a non-root logger"
            )
        if value is None and (self._detached or self.is_root):
            kind = "detached" if self._detached else "root"
            raise UnsupportedOperationError(f"Cannot set the level to None on a {kind} logger")

        self._level_changes.ensure_idle()

        previous = self.level
        self._level = value
        current = self.level
        if current != previous:
            _loguru_logger.debug(f"Logger {self._full_name or '<root>'!r} level {previous} -> {current}")
            self._level_changes.emit(current)

    def is_loggable(self, level: Level | str | int) -> bool:
        return Level.parse(level) >= self.level

    # Subscriptions

    def subscribe_records(self, handler: Callable[[LogRecord], object]) -> Subscription[LogRecord]:
        """Register ``handler`` for records delivered to this logger."""
        return self._records.subscribe(handler)

    def subscribe_level_changes(self, handler: Callable[[Level], object]) -> Subscription[Level]:
        """Register ``handler`` for changes to this logger's level.

        Handlers receive the new effective level. Changing this logger's level
        from inside such a handler raises ReentrantEmissionError.
        """
        return self._level_changes.subscribe(handler)

    on_record = subscribe_records
    on_level_changed = subscribe_level_changes

    def clear_listeners(self) -> None:
        """Drop every record and level-change subscription on this logger only."""
        if self._records.has_listeners or self._level_changes.has_listeners:
            _loguru_logger.debug(f"Clearing listeners on {self._full_name or '<root>'!r}")
        self._records.clear()
        self._level_changes.clear()

    # Emission

    def log(
        self,
        level: Level | str | int,
        message: Any,
        error: Any = None,
        stack_trace: Any = None,
        context: ExecutionContext | None = None,
    ) -> None:
        """Log ``message`` at ``level``.

        Nothing happens below the effective level: a callable ``message`` is
        not invoked and no subscriber is touched. Otherwise a zero-argument
        callable is invoked, its result rendered with ``str()``, and the record
        delivered synchronously before this method returns.

        Args:
            level: Severity of the event
            message: Value to log, or a zero-argument callable producing it
            error: Associated error, if any
            stack_trace: Traceback or StackSummary; captured automatically at or
                above ``settings.record_stack_trace_at_level`` when omitted
            context: Execution context to record; defaults to the caller's
        """
        level = Level.parse(level)
        if not self.is_loggable(level):
            return

        obj = _resolve_message(message)
        msg = str(obj)

        if stack_trace is None and level >= settings.record_stack_trace_at_level:
            stack_trace = _capture_stack()
            if error is None:
                error = f"autogenerated stack trace for {level} {msg}"

        record = LogRecord(
            level=level,
            message=msg,
            object=obj,
            logger_name=self._full_name,
            time=pendulum.now("UTC"),
            error=error,
            stack_trace=stack_trace,
            execution_context=context if context is not None else current_context(),
        )
        self._publish(record)

    def _publish(self, record: LogRecord) -> None:
        if self._detached or not settings.hierarchical_logging_enabled:
            self._records.emit(record)
            return

        # Ancestors' subscriber lists are read as delivery reaches them
        node = self
        while node is not None:
            node._records.emit(record)
            node = node.parent

    def verbose(self, message: Any, error: Any = None, stack_trace: Any = None, context=None) -> None:
        self.log(VERBOSE, message, error, stack_trace, context)

    def debug(self, message: Any, error: Any = None, stack_trace: Any = None, context=None) -> None:
        self.log(DEBUG, message, error, stack_trace, context)

    def info(self, message: Any, error: Any = None, stack_trace: Any = None, context=None) -> None:
        self.log(INFO, message, error, stack_trace, context)

    def warn(self, message: Any, error: Any = None, stack_trace: Any = None, context=None) -> None:
        self.log(WARN, message, error, stack_trace, context)

    warning = warn

    def error(self, message: Any, error: Any = None, stack_trace: Any = None, context=None) -> None:
        self.log(ERROR, message, error, stack_trace, context)

    def __repr__(self) -> str:
        kind = " detached" if self._detached else ""
        return f"<Logger{kind} {self._full_name!r}>"
