"""Function annotation classification.

Splits the annotations on an action's handler into the auth-related ones
and the ones worth showing that are neither auth, content-type, nor
HTTP-method markers.
"""

from collections.abc import Sequence

HTTP_METHODS = ("DELETE", "GET", "HEAD", "PATCH", "POST", "PUT")

_AUTH_MARKERS = ("Access", "authz")
_CONTENT_TYPE_MARKERS = ("RequestContentType", "ResponseContentType")


def is_auth_annotation(annotation: str) -> bool:
    """True for access-control annotations (``@Unauthenticated...Access``, ``@authz...``)."""
    return any(marker in annotation for marker in _AUTH_MARKERS)


def _is_method_annotation(annotation: str) -> bool:
    # Substring match on the upper-cased text: "@Get" and "@POST" both count.
    upper = annotation.upper()
    return any(method in upper for method in HTTP_METHODS)


def _is_content_type_annotation(annotation: str) -> bool:
    return any(marker in annotation for marker in _CONTENT_TYPE_MARKERS)


def classify_annotations(annotations: Sequence[str]) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Return ``(auth_annotations, other_annotations)``, both in input order.

    Content-type and HTTP-method markers land in neither group.
    """
    auth = tuple(a for a in annotations if is_auth_annotation(a))
    other = tuple(
        a
        for a in annotations
        if not (
            _is_content_type_annotation(a) or is_auth_annotation(a) or _is_method_annotation(a)
        )
    )
    return auth, other
