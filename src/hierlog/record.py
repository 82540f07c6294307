#!/usr/bin/env python3
"""Immutable snapshot of one logging event."""

from __future__ import annotations

import itertools
from typing import Any

import attrs
import pendulum

from hierlog.context import ExecutionContext
from hierlog.level import Level

__all__ = ["LogRecord"]

_sequence = itertools.count()


def _next_sequence_number() -> int:
    return next(_sequence)


@attrs.define(frozen=True)
class LogRecord:
    """A log record as delivered to subscribers.

    Attributes:
        level: Severity of the event
        message: Rendered ``str()`` of ``object``
        object: The logged value after thunk evaluation, before rendering
        logger_name: Full dotted name of the emitting logger
        time: UTC capture instant
        error: Associated error, if any
        stack_trace: Traceback or ``StackSummary`` for the event, if any
        execution_context: Thread/task scope active where the event was logged
        sequence_number: Process-wide, strictly increasing record counter
    """

    level: Level = attrs.field()
    message: str = attrs.field()
    object: Any = attrs.field()
    logger_name: str = attrs.field()
    time: pendulum.DateTime = attrs.field(factory=lambda: pendulum.now("UTC"))
    error: Any = attrs.field(default=None)
    stack_trace: Any = attrs.field(default=None, repr=False)
    execution_context: ExecutionContext | None = attrs.field(default=None, repr=False)
    sequence_number: int = attrs.field(factory=_next_sequence_number)

    def __str__(self) -> str:
        return f"[{self.level}] {self.logger_name}: {self.message}"
