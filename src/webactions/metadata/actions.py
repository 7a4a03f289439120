"""Action descriptors and normalization.

``RawAction`` is one (route, HTTP method) binding as the backend reports it.
``WebAction`` is the display-ready form: allowed lists joined into strings,
annotations classified, the dispatch mechanism widened to a tuple so
bindings sharing a route can be merged.

Both are frozen dataclasses (immutable, safe to share between snapshots).
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from webactions.errors import MalformedActionError
from webactions.metadata.annotations import classify_annotations

ALL = "All"
NONE = "None"

_FUNCTION_KEYWORD = "fun "

# (attribute, backend key, is_list)
_FIELDS: tuple[tuple[str, str, bool], ...] = (
    ("allowed_services", "allowedServices", True),
    ("allowed_roles", "allowedRoles", True),
    ("application_interceptors", "applicationInterceptors", True),
    ("dispatch_mechanism", "dispatchMechanism", False),
    ("function", "function", False),
    ("function_annotations", "functionAnnotations", True),
    ("name", "name", False),
    ("network_interceptors", "networkInterceptors", True),
    ("parameter_types", "parameterTypes", True),
    ("path_pattern", "pathPattern", False),
    ("request_media_types", "requestMediaTypes", True),
    ("response_media_type", "responseMediaType", False),
    ("return_type", "returnType", False),
)


@dataclass(frozen=True, slots=True)
class RawAction:
    """One backend action descriptor. Every field is required."""

    allowed_services: tuple[str, ...]
    allowed_roles: tuple[str, ...]
    application_interceptors: tuple[str, ...]
    dispatch_mechanism: str
    function: str
    function_annotations: tuple[str, ...]
    name: str
    network_interceptors: tuple[str, ...]
    parameter_types: tuple[str, ...]
    path_pattern: str
    request_media_types: tuple[str, ...]
    response_media_type: str
    return_type: str

    @classmethod
    def from_api(cls, record: Any, *, index: int | None = None) -> "RawAction":
        """Read a camelCase backend record.

        Raises ``MalformedActionError`` when a field is missing or a list
        field is not a list of strings.
        """
        if not isinstance(record, Mapping):
            raise MalformedActionError(
                "<record>", f"must be an object, got {type(record).__name__}", index=index
            )

        values: dict[str, Any] = {}
        for attr, key, is_list in _FIELDS:
            if key not in record:
                raise MalformedActionError(key, "is missing", index=index)
            value = record[key]
            if is_list:
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise MalformedActionError(key, "must be a list of strings", index=index)
                values[attr] = tuple(value)
            else:
                if not isinstance(value, str):
                    raise MalformedActionError(key, "must be a string", index=index)
                values[attr] = value
        return cls(**values)


@dataclass(frozen=True, slots=True)
class WebAction:
    """A normalized action, one row of the metadata table.

    ``allowed_roles`` and ``allowed_services`` are display strings.
    ``dispatch_mechanism`` holds every HTTP method bound to ``path_pattern``
    once the table is aggregated.
    """

    allowed_services: str
    allowed_roles: str
    application_interceptors: tuple[str, ...]
    auth_function_annotations: tuple[str, ...]
    dispatch_mechanism: tuple[str, ...]
    function: str
    function_annotations: tuple[str, ...]
    name: str
    network_interceptors: tuple[str, ...]
    non_access_or_type_function_annotations: tuple[str, ...]
    parameter_types: tuple[str, ...]
    path_pattern: str
    request_media_types: tuple[str, ...]
    response_media_type: str
    return_type: str

    def to_api(self) -> dict[str, Any]:
        """camelCase mapping for JSON consumers."""
        return {
            "allowedServices": self.allowed_services,
            "allowedRoles": self.allowed_roles,
            "applicationInterceptors": list(self.application_interceptors),
            "authFunctionAnnotations": list(self.auth_function_annotations),
            "dispatchMechanism": list(self.dispatch_mechanism),
            "function": self.function,
            "functionAnnotations": list(self.function_annotations),
            "name": self.name,
            "networkInterceptors": list(self.network_interceptors),
            "nonAccessOrTypeFunctionAnnotations": list(
                self.non_access_or_type_function_annotations
            ),
            "parameterTypes": list(self.parameter_types),
            "pathPattern": self.path_pattern,
            "requestMediaTypes": list(self.request_media_types),
            "responseMediaType": self.response_media_type,
            "returnType": self.return_type,
        }


def empty_allowed_value(auth_annotations: tuple[str, ...]) -> str:
    """Display value for an empty allowed-roles/services list.

    ``"All"`` when there are at least two auth annotations and the first
    one grants unauthenticated access, otherwise ``"None"``.
    """
    if len(auth_annotations) > 1 and "Unauthenticated" in auth_annotations[0]:
        return ALL
    return NONE


def bare_function_name(signature: str) -> str:
    """Strip everything up to the last ``fun `` keyword: ``"fun getA()"`` -> ``"getA()"``."""
    return signature.rsplit(_FUNCTION_KEYWORD, 1)[-1]


def _join_allowed(values: tuple[str, ...], fallback: str) -> str:
    return ", ".join(values) if values else fallback


def normalize_action(action: RawAction) -> WebAction:
    """Convert one backend binding into a single-method ``WebAction``."""
    auth, other = classify_annotations(action.function_annotations)
    fallback = empty_allowed_value(auth)

    return WebAction(
        allowed_services=_join_allowed(action.allowed_services, fallback),
        allowed_roles=_join_allowed(action.allowed_roles, fallback),
        application_interceptors=action.application_interceptors,
        auth_function_annotations=auth,
        dispatch_mechanism=(action.dispatch_mechanism,),
        function=bare_function_name(action.function),
        function_annotations=action.function_annotations,
        name=action.name,
        network_interceptors=action.network_interceptors,
        non_access_or_type_function_annotations=other,
        parameter_types=action.parameter_types,
        path_pattern=action.path_pattern,
        request_media_types=action.request_media_types,
        response_media_type=action.response_media_type,
        return_type=action.return_type,
    )
