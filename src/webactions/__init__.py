"""Webactions — fetch, normalize, and publish web action metadata.

Fetches the backend's action descriptors, folds them into one row per
route, and publishes loading/success/failure transitions into a state
container that observers subscribe to.

Basic usage::

    from webactions import FetchController, Operation, StateStore, WebActionsConfig

    store = StateStore()
    config = WebActionsConfig(base_url="http://localhost:8080")
    async with FetchController(store, config) as controller:
        await controller.run(Operation.METADATA)

    for row in store.snapshot["metadata"]:
        print(row.path_pattern, row.dispatch_mechanism)
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "Event",
    "EventType",
    "FetchController",
    "FetchError",
    "HttpTransport",
    "MalformedActionError",
    "Operation",
    "RawAction",
    "StateStore",
    "TransportError",
    "WebAction",
    "WebActionsConfig",
    "WebActionsError",
    "build_metadata",
    "reduce",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import webactions`` from importing httpx until it is needed.
    """
    if name == "FetchController":
        from webactions.controller import FetchController

        return FetchController

    if name == "WebActionsConfig":
        from webactions.config import WebActionsConfig

        return WebActionsConfig

    if name == "HttpTransport":
        from webactions.transport import HttpTransport

        return HttpTransport

    if name in ("Event", "EventType", "Operation"):
        from webactions import events as _events

        return getattr(_events, name)

    if name in ("StateStore", "reduce"):
        from webactions import state as _state

        return getattr(_state, name)

    if name in ("RawAction", "WebAction", "build_metadata"):
        from webactions import metadata as _metadata

        return getattr(_metadata, name)

    if name in (
        "ConfigurationError",
        "FetchError",
        "MalformedActionError",
        "TransportError",
        "WebActionsError",
    ):
        from webactions import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
