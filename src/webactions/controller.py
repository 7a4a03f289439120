"""Fetch-dispatch controller.

Turns trigger events into HTTP fetches and publishes the outcome as
success or failure events. Each ``Operation`` has its own cancellation
scope: a new trigger cancels the in-flight fetch for that operation, and
only the latest trigger may publish a result. Different operations run
concurrently.

Stale results are dropped by a per-operation generation counter, so a
fetch that completes before its cancellation is delivered still cannot
publish.

Usage::

    store = StateStore()
    async with FetchController(store, WebActionsConfig(base_url=url)) as controller:
        await controller.run(Operation.METADATA)
    store.snapshot["metadata"]
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from webactions.config import WebActionsConfig
from webactions.errors import FetchError, MalformedActionError
from webactions.events import Event, Operation, failure, loading, success
from webactions.metadata import build_metadata, parse_actions
from webactions.state import StateStore
from webactions.transport import HttpTransport, Transport

logger = logging.getLogger("webactions.controller")


class FetchController:
    """Runs the fetch workflow for each operation, latest trigger wins."""

    __slots__ = (
        "_config",
        "_generations",
        "_owns_transport",
        "_running",
        "_store",
        "_tasks",
        "_transport",
    )

    def __init__(
        self,
        store: StateStore,
        config: WebActionsConfig | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._store = store
        self._config = config or WebActionsConfig()
        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpTransport(self._config)
        self._generations: dict[Operation, int] = dict.fromkeys(Operation, 0)
        self._tasks: dict[Operation, asyncio.Task[None]] = {}
        self._running: set[asyncio.Task[None]] = set()

    @property
    def store(self) -> StateStore:
        return self._store

    # -- Dispatch --

    def dispatch(self, event: Event) -> asyncio.Task[None] | None:
        """Publish *event*; start a fetch if it is a trigger.

        Must be called from a running event loop. Returns the fetch task,
        or ``None`` for non-trigger events.
        """
        if not event.is_trigger:
            self._store.publish(event)
            return None

        # Fail before publishing Loading when there is no loop to run the fetch.
        asyncio.get_running_loop()
        self._store.publish(event)

        operation = event.operation
        previous = self._tasks.get(operation)
        if previous is not None and not previous.done():
            logger.debug("Cancelling in-flight %s fetch", operation.value)
            previous.cancel()

        self._generations[operation] += 1
        generation = self._generations[operation]
        task = asyncio.create_task(
            self._handle(operation, generation),
            name=f"webactions-{operation.value}-{generation}",
        )
        self._tasks[operation] = task
        self._running.add(task)
        task.add_done_callback(lambda t, op=operation: self._forget(op, t))
        task.add_done_callback(self._running.discard)
        return task

    def trigger(self, operation: Operation) -> asyncio.Task[None]:
        """Dispatch the trigger event for *operation*."""
        task = self.dispatch(loading(operation))
        assert task is not None
        return task

    async def run(self, operation: Operation) -> None:
        """Trigger *operation* and wait for it to settle.

        Returns quietly if a newer trigger superseded this one. Re-raises
        anything the workflow itself raised, such as a failing reducer.
        """
        task = self.trigger(operation)
        await asyncio.wait({task})
        if not task.cancelled() and (exc := task.exception()) is not None:
            raise exc

    async def join(self) -> None:
        """Wait for every in-flight fetch to finish or be cancelled."""
        while pending := [t for t in self._running if not t.done()]:
            await asyncio.gather(*pending, return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel in-flight fetches and close the transport if we created it."""
        for task in self._running:
            task.cancel()
        await self.join()
        if self._owns_transport:
            await self._transport.aclose()

    async def __aenter__(self) -> "FetchController":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # -- Workflow --

    def _forget(self, operation: Operation, task: asyncio.Task[None]) -> None:
        if self._tasks.get(operation) is task:
            del self._tasks[operation]

    def _is_current(self, operation: Operation, generation: int) -> bool:
        return self._generations[operation] == generation

    async def _handle(self, operation: Operation, generation: int) -> None:
        try:
            data = await self._fetch(operation)
        except asyncio.CancelledError:
            logger.debug("%s fetch #%d cancelled", operation.value, generation)
            raise
        except Exception as exc:
            if not self._is_current(operation, generation):
                logger.debug("Dropping stale %s failure #%d", operation.value, generation)
                return
            error = FetchError.from_exception(exc)
            logger.warning("%s fetch failed (%s): %s", operation.value, error.kind, error.message)
            self._store.publish(failure(operation, {"error": error}))
            return

        if not self._is_current(operation, generation):
            logger.debug("Dropping stale %s result #%d", operation.value, generation)
            return
        self._store.publish(success(operation, data))

    async def _fetch(self, operation: Operation) -> Mapping[str, Any]:
        if operation is Operation.RAW:
            body = await self._transport.get_json(self._config.raw_url)
            return {"data": body}

        body = await self._transport.get_json(self._config.metadata_url)
        if not isinstance(body, Mapping) or "webActionMetadata" not in body:
            raise MalformedActionError("webActionMetadata", "is missing from the response body")
        metadata = build_metadata(parse_actions(body["webActionMetadata"]))
        logger.debug("Built metadata table: %d routes", len(metadata))
        return {"metadata": metadata}
