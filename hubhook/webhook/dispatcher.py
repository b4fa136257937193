"""Per-event-type listener registry."""

from __future__ import annotations

import asyncio
import inspect
import threading
from collections import defaultdict
from collections.abc import Callable
from typing import Any

from hubhook.utils.logging import get_logger

logger = get_logger("webhook.dispatcher")

# Listeners under this name receive every verified event
WILDCARD = "*"

Listener = Callable[..., Any]


class EventDispatcher:
    """Routes verified events to the listeners registered for their type."""

    def __init__(self) -> None:
        self._listeners: defaultdict[str, list[Listener]] = defaultdict(list)
        self._lock = threading.Lock()
        self.pending: set[asyncio.Task[Any]] = set()

    def on(self, event_name: str, listener: Listener) -> None:
        """Register a listener for an event type.

        Args:
            event_name: Event type such as ``push``, or ``*`` for every event.
            listener: Callable invoked with the event. May be ``async``.
        """
        with self._lock:
            self._listeners[event_name].append(listener)

    def listeners(self, event_name: str) -> list[Listener]:
        """Return a snapshot of the listeners for an event type."""
        with self._lock:
            return list(self._listeners.get(event_name, ()))

    def emit(self, event_name: str, *args: Any) -> int:
        """Invoke the listeners for an event type in registration order.

        Wildcard listeners run after the type-specific ones. A listener that
        raises is logged and skipped. Awaitables returned by async listeners
        are scheduled on the running loop and not waited for; without a
        running loop they are discarded and logged.

        Args:
            event_name: Event type to dispatch.
            *args: Positional arguments passed to each listener.

        Returns:
            Number of listeners invoked.
        """
        targets = self.listeners(event_name)
        if event_name != WILDCARD:
            targets += self.listeners(WILDCARD)

        for listener in targets:
            try:
                result = listener(*args)
            except Exception:
                logger.exception(
                    "Webhook listener failed",
                    extra={"event_type": event_name, "listener": _describe(listener)},
                )
                continue

            if inspect.isawaitable(result):
                self._schedule(event_name, listener, result)

        return len(targets)

    def _schedule(self, event_name: str, listener: Listener, awaitable: Any) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            logger.error(
                "Async webhook listener needs a running event loop",
                extra={"event_type": event_name, "listener": _describe(listener)},
            )
            return

        task = asyncio.ensure_future(awaitable)
        self.pending.add(task)

        def _finished(done: asyncio.Task[Any]) -> None:
            self.pending.discard(done)
            if done.cancelled() or done.exception() is None:
                return
            logger.error(
                "Async webhook listener failed",
                exc_info=done.exception(),
                extra={"event_type": event_name, "listener": _describe(listener)},
            )

        task.add_done_callback(_finished)


def _describe(listener: Listener) -> str:
    return getattr(listener, "__qualname__", repr(listener))
