"""Webactions exception hierarchy.

Shared across the transport, the metadata pipeline, and the controller so
every module raises and catches the same types.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


class WebActionsError(Exception):
    """Base for all webactions-specific errors."""


class ConfigurationError(WebActionsError):
    """Raised when configuration is invalid."""


class MalformedActionError(WebActionsError):
    """Raised when a backend action record is missing a field or has the wrong shape."""

    def __init__(self, field_name: str, detail: str, *, index: int | None = None) -> None:
        self.field_name = field_name
        self.detail = detail
        self.index = index
        where = f" (record {index})" if index is not None else ""
        super().__init__(f"Malformed action{where}: {field_name!r} {detail}")


class TransportError(WebActionsError):
    """Raised when the backend cannot be reached or answers with a non-2xx status."""

    def __init__(self, url: str, detail: str, *, status: int | None = None) -> None:
        self.url = url
        self.status = status
        self.detail = detail
        if status is None:
            super().__init__(f"GET {url} failed: {detail}")
        else:
            super().__init__(f"GET {url} returned {status}: {detail}")


@dataclass(frozen=True, slots=True)
class FetchError:
    """Structured error published in failure events.

    ``kind`` is one of ``"transport"``, ``"malformed"`` or ``"processing"``
    so observers can tell a network problem from a parsing bug.
    """

    kind: str
    message: str
    details: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "FetchError":
        if isinstance(exc, TransportError):
            details: dict[str, Any] = {"url": exc.url, "detail": exc.detail}
            if exc.status is not None:
                details["status"] = exc.status
            return cls("transport", str(exc), details)
        if isinstance(exc, MalformedActionError):
            details = {"field": exc.field_name, "detail": exc.detail}
            if exc.index is not None:
                details["index"] = exc.index
            return cls("malformed", str(exc), details)
        return cls("processing", str(exc) or type(exc).__name__, {"type": type(exc).__name__})

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.message, "details": dict(self.details)}
