"""``webactions metadata`` / ``webactions raw`` — run one operation and print it."""

import argparse
import dataclasses
import json
import sys
from collections.abc import Sequence

import anyio

from webactions.config import WebActionsConfig
from webactions.controller import FetchController
from webactions.errors import ConfigurationError, FetchError
from webactions.events import Operation
from webactions.metadata import WebAction
from webactions.state import Snapshot, StateStore
from webactions.transport import Transport

_MAX_CELL = 40


def run_fetch(args: argparse.Namespace, *, transport: Transport | None = None) -> None:
    """Fetch the operation named by ``args.command`` and print the result.

    Exits with status 1 when the fetch fails.
    """
    try:
        config = WebActionsConfig.from_env()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if args.command == "metadata":
        operation = Operation.METADATA
        if args.base_url:
            config = dataclasses.replace(config, base_url=args.base_url)
        if not config.base_url:
            print(
                "Error: no backend URL; pass --base-url or set WEBACTIONS_BASE_URL",
                file=sys.stderr,
            )
            raise SystemExit(1)
    else:
        operation = Operation.RAW
        if args.url:
            config = dataclasses.replace(config, raw_url=args.url)

    snapshot = anyio.run(_fetch, operation, config, transport)

    if not snapshot["success"]:
        error = snapshot.get("error")
        if getattr(args, "json", False) and isinstance(error, FetchError):
            print(json.dumps(error.to_dict(), indent=2), file=sys.stderr)
        else:
            message = error.message if isinstance(error, FetchError) else str(error)
            print(f"Error: {message}", file=sys.stderr)
        raise SystemExit(1)

    if operation is Operation.RAW:
        print(json.dumps(snapshot["data"], indent=2))
    elif args.json:
        print(json.dumps([row.to_api() for row in snapshot["metadata"]], indent=2))
    else:
        print_table(snapshot["metadata"])


async def _fetch(
    operation: Operation,
    config: WebActionsConfig,
    transport: Transport | None,
) -> Snapshot:
    store = StateStore()
    async with FetchController(store, config, transport) as controller:
        await controller.run(operation)
    return store.snapshot


def _cell(value: str) -> str:
    if len(value) <= _MAX_CELL:
        return value
    return value[: _MAX_CELL - 1] + "…"


def print_table(rows: Sequence[WebAction]) -> None:
    """Print one line per route: methods, path, name, function, roles, services."""
    if not rows:
        print("No web actions registered.")
        return

    headers = ("METHODS", "PATH", "NAME", "FUNCTION", "ROLES", "SERVICES")
    table: list[tuple[str, ...]] = [
        (
            ", ".join(row.dispatch_mechanism),
            row.path_pattern,
            row.name,
            _cell(row.function),
            _cell(row.allowed_roles),
            _cell(row.allowed_services),
        )
        for row in rows
    ]

    # Column widths
    widths = [max(len(h), *(len(r[i]) for r in table)) for i, h in enumerate(headers)]
    fmt = "  ".join(f"{{:<{w}}}" for w in widths[:-1]) + "  {}"
    print(fmt.format(*headers))
    print("-" * min(sum(widths) + 2 * (len(widths) - 1), 120))
    for line in table:
        print(fmt.format(*line))

