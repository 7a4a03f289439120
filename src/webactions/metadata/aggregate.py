"""Path aggregation — one table row per route pattern.

The backend reports one action per (route, HTTP method) binding. The table
shows one row per route, listing every method bound to it.
"""

import dataclasses
from collections.abc import Iterable, Sequence
from typing import Any

from webactions.errors import MalformedActionError
from webactions.metadata.actions import RawAction, WebAction, normalize_action


def aggregate_actions(actions: Iterable[WebAction]) -> list[WebAction]:
    """Merge actions sharing a ``path_pattern`` and sort the result.

    The first action seen for a pattern supplies every field except
    ``dispatch_mechanism``, which becomes the concatenation of all methods
    in the group, reverse-lexicographically ordered. Duplicate methods are
    kept. Rows are ordered by ``name`` then ``path_pattern`` (stable).
    """
    groups: dict[str, list[WebAction]] = {}
    for action in actions:
        groups.setdefault(action.path_pattern, []).append(action)

    merged: list[WebAction] = []
    for members in groups.values():
        methods = [method for member in members for method in member.dispatch_mechanism]
        merged.append(
            dataclasses.replace(
                members[0], dispatch_mechanism=tuple(sorted(methods, reverse=True))
            )
        )

    return sorted(merged, key=lambda a: (a.name, a.path_pattern))


def parse_actions(records: Any) -> list[RawAction]:
    """Read the backend's ``webActionMetadata`` list."""
    if not isinstance(records, list):
        msg = f"must be a list, got {type(records).__name__}"
        raise MalformedActionError("webActionMetadata", msg)
    return [RawAction.from_api(record, index=i) for i, record in enumerate(records)]


def build_metadata(raw_actions: Sequence[RawAction]) -> list[WebAction]:
    """Normalize then aggregate: the full metadata table for one fetch."""
    return aggregate_actions(normalize_action(action) for action in raw_actions)
