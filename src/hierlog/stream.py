#!/usr/bin/env python3
"""Synchronous broadcast event streams.

Each logger owns two of these: one for records and one for level changes.
Delivery runs inline on the emitting thread and finishes before ``emit``
returns. Handlers are called in subscription order.

Subscriptions can be cancelled at any time, including from inside a handler;
a cancelled subscription receives nothing further, even later in the emission
that is currently running.
"""

from __future__ import annotations

import contextlib
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

from hierlog.exceptions import ReentrantEmissionError

__all__ = ["EventStream", "Subscription"]

T = TypeVar("T")


class Subscription(Generic[T]):
    """Handle for a single registered handler."""

    def __init__(self, stream: EventStream[T], handler: Callable[[T], object]):
        self._stream = stream
        self.handler = handler
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """Stop delivery to this handler. Safe to call more than once."""
        if self._active:
            self._active = False
            self._stream._remove(self)

    def _deactivate(self) -> None:
        self._active = False

    def __enter__(self) -> Subscription[T]:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.cancel()

    def __repr__(self) -> str:
        state = "active" if self._active else "cancelled"
        return f"<Subscription {self.handler!r} ({state})>"


class EventStream(Generic[T]):
    """Broadcast stream delivering each event to every live subscription.

    Args:
        allow_nested: When False, emitting on a thread that is already
            delivering an event from this stream raises ReentrantEmissionError
            instead of recursing.
    """

    def __init__(self, allow_nested: bool = True):
        self._allow_nested = allow_nested
        self._subscriptions: list[Subscription[T]] = []
        self._lock = threading.Lock()
        self._firing = threading.local()

    @property
    def has_listeners(self) -> bool:
        return bool(self._subscriptions)

    @property
    def is_firing(self) -> bool:
        """True while the current thread is delivering an event from this stream."""
        return getattr(self._firing, "depth", 0) > 0

    def subscribe(self, handler: Callable[[T], object]) -> Subscription[T]:
        subscription = Subscription(self, handler)
        with self._lock:
            self._subscriptions.append(subscription)
        return subscription

    def _remove(self, subscription: Subscription[T]) -> None:
        with self._lock:
            with contextlib.suppress(ValueError):
                self._subscriptions.remove(subscription)

    def clear(self) -> None:
        """Cancel every current subscription."""
        with self._lock:
            subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription._deactivate()

    def ensure_idle(self) -> None:
        """Raise if a guarded stream is mid-emission on this thread."""
        if not self._allow_nested and self.is_firing:
            raise ReentrantEmissionError()

    def emit(self, event: T) -> None:
        """Deliver ``event`` to every live subscription, in subscription order.

        Handler exceptions propagate to the caller and stop delivery of this
        event to the remaining subscriptions.
        """
        self.ensure_idle()
        with self._lock:
            snapshot = tuple(self._subscriptions)
        if not snapshot:
            return

        self._firing.depth = getattr(self._firing, "depth", 0) + 1
        try:
            for subscription in snapshot:
                if subscription.active:
                    subscription.handler(event)
        finally:
            self._firing.depth -= 1

    def __len__(self) -> int:
        return len(self._subscriptions)
