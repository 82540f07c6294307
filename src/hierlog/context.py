#!/usr/bin/env python3
"""Execution context captured on each log record.

A record remembers the thread and, when one is running, the asyncio task that
emitted it, together with a snapshot of the active ``contextvars``. The
context is metadata only: delivery never depends on it.
"""

from __future__ import annotations

import asyncio
import contextvars
import threading

import attrs

__all__ = ["ExecutionContext", "current_context"]


@attrs.define(frozen=True)
class ExecutionContext:
    """Identity of the thread/task scope active at a call site.

    Equality uses ``thread_id`` and ``task`` only; the thread name and the
    context-variable snapshot ride along for inspection.
    """

    thread_id: int = attrs.field()
    task: asyncio.Task | None = attrs.field(default=None)
    thread_name: str = attrs.field(default="", eq=False)
    variables: contextvars.Context | None = attrs.field(default=None, eq=False, repr=False)

    @property
    def in_task(self) -> bool:
        return self.task is not None


def _running_task() -> asyncio.Task | None:
    try:
        return asyncio.current_task()
    except RuntimeError:
        # No running event loop in this thread
        return None


def current_context() -> ExecutionContext:
    """Capture the execution context active at the caller."""
    thread = threading.current_thread()
    return ExecutionContext(
        thread_id=thread.ident or threading.get_ident(),
        task=_running_task(),
        thread_name=thread.name,
        variables=contextvars.copy_context(),
    )
