"""Snapshot projection and the state container it runs in.

``reduce()`` is a pure fold: payload fields are merged over a copy of the
snapshot, never deleted. ``StateStore`` holds the current snapshot, applies
published events, and fans snapshots out to async subscribers.

Free-threading safety:
    - Snapshots are read-only ``MappingProxyType`` views over fresh dicts
    - StateStore uses a Lock around the snapshot swap and the subscriber set
    - Each subscriber gets its own asyncio.Queue (no shared mutable state)
"""

import asyncio
import contextlib
import logging
import threading
from collections.abc import AsyncIterator, Callable, Mapping
from types import MappingProxyType
from typing import Any, TypeAlias

from webactions.events import Event, EventType

logger = logging.getLogger("webactions.state")

Snapshot: TypeAlias = Mapping[str, Any]
Reducer: TypeAlias = Callable[[Snapshot, Event], Snapshot]

INITIAL_STATE: Snapshot = MappingProxyType(
    {"data": MappingProxyType({}), "error": None, "loading": False, "success": False}
)

_HANDLED = frozenset(EventType)


def reduce(snapshot: Snapshot, event: Event) -> Snapshot:
    """Merge *event*'s payload onto *snapshot*.

    Unknown event types return *snapshot* unchanged (same object).
    """
    if getattr(event, "type", None) not in _HANDLED:
        return snapshot
    return MappingProxyType({**snapshot, **event.payload})


class StateStore:
    """Single-writer, multi-reader snapshot cell.

    Usage::

        store = StateStore()
        store.publish(loading(Operation.METADATA))
        store.snapshot["loading"]  # True

        async for snapshot in store.subscribe():
            render(snapshot)
    """

    __slots__ = ("_lock", "_reducer", "_snapshot", "_subscribers")

    def __init__(self, reducer: Reducer = reduce, initial: Snapshot = INITIAL_STATE) -> None:
        self._reducer = reducer
        self._snapshot = initial
        self._subscribers: set[asyncio.Queue[Snapshot | None]] = set()
        self._lock = threading.Lock()

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def publish(self, event: Event) -> Snapshot:
        """Fold *event* into the snapshot and notify subscribers.

        Returns the new snapshot.
        """
        with self._lock:
            previous = self._snapshot
            self._snapshot = self._reducer(previous, event)
            current = self._snapshot
            subscribers = set(self._subscribers)

        if current is previous:
            return current

        logger.debug("Applied %s (%s)", event.type.value, event.operation.value)
        for queue in subscribers:
            # Drop snapshots for slow consumers rather than blocking
            with contextlib.suppress(asyncio.QueueFull):
                queue.put_nowait(current)
        return current

    async def subscribe(self) -> AsyncIterator[Snapshot]:
        """Yield each new snapshot as it is published.

        The subscription is cleaned up when the iterator exits.
        """
        queue: asyncio.Queue[Snapshot | None] = asyncio.Queue(maxsize=256)
        with self._lock:
            self._subscribers.add(queue)
        try:
            while True:
                snapshot = await queue.get()
                if snapshot is None:
                    break
                yield snapshot
        finally:
            with self._lock:
                self._subscribers.discard(queue)

    def close(self) -> None:
        """Signal all subscribers to stop."""
        with self._lock:
            for queue in self._subscribers:
                with contextlib.suppress(asyncio.QueueFull):
                    queue.put_nowait(None)
            self._subscribers.clear()
