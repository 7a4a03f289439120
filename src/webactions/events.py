"""Webactions events and event creators.

Events are frozen dataclasses: a type, the operation they belong to, and
the payload the reducer merges into the snapshot. The creators below fill
in the standard ``error``/``loading``/``success`` fields.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class Operation(Enum):
    """An independent fetch workflow with its own cancellation scope."""

    RAW = "raw"
    METADATA = "metadata"


class EventType(Enum):
    RAW = "webactions/raw"
    METADATA = "webactions/metadata"
    SUCCESS = "webactions/success"
    FAILURE = "webactions/failure"


TRIGGERS: Mapping[EventType, Operation] = MappingProxyType({
    EventType.RAW: Operation.RAW,
    EventType.METADATA: Operation.METADATA,
})

_TRIGGER_TYPES: Mapping[Operation, EventType] = MappingProxyType(
    {op: event_type for event_type, op in TRIGGERS.items()}
)


@dataclass(frozen=True, slots=True)
class Event:
    """A dispatched event. ``payload`` is merged into the snapshot as-is."""

    type: EventType
    operation: Operation
    payload: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_trigger(self) -> bool:
        return self.type in TRIGGERS


def loading(operation: Operation) -> Event:
    """Trigger event for *operation*; folding it marks the snapshot as loading."""
    return Event(
        _TRIGGER_TYPES[operation],
        operation,
        {"error": None, "loading": True, "success": False},
    )


def success(operation: Operation, data: Mapping[str, Any]) -> Event:
    """Completed fetch. *data* fields are spread into the payload."""
    return Event(
        EventType.SUCCESS,
        operation,
        {**data, "error": None, "loading": False, "success": True},
    )


def failure(operation: Operation, error: Mapping[str, Any]) -> Event:
    """Failed fetch. *error* fields are spread into the payload, not nested.

    The controller passes ``{"error": FetchError(...)}``.
    """
    return Event(
        EventType.FAILURE,
        operation,
        {**error, "loading": False, "success": False},
    )
