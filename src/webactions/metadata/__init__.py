"""Web action metadata — classify, normalize, and aggregate backend action descriptors.

Basic usage::

    from webactions.metadata import build_metadata, parse_actions

    table = build_metadata(parse_actions(body["webActionMetadata"]))
"""

from webactions.metadata.actions import (
    ALL,
    NONE,
    RawAction,
    WebAction,
    bare_function_name,
    empty_allowed_value,
    normalize_action,
)
from webactions.metadata.aggregate import aggregate_actions, build_metadata, parse_actions
from webactions.metadata.annotations import HTTP_METHODS, classify_annotations, is_auth_annotation

__all__ = [
    "ALL",
    "HTTP_METHODS",
    "NONE",
    "RawAction",
    "WebAction",
    "aggregate_actions",
    "bare_function_name",
    "build_metadata",
    "classify_annotations",
    "empty_allowed_value",
    "is_auth_annotation",
    "normalize_action",
    "parse_actions",
]
