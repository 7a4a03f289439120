"""Shared fixtures for webactions tests."""

from collections.abc import Callable
from typing import Any

import pytest


def _record(**overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "allowedServices": [],
        "allowedRoles": [],
        "applicationInterceptors": [],
        "dispatchMechanism": "GET",
        "function": "fun getA(): Response",
        "functionAnnotations": [],
        "name": "A",
        "networkInterceptors": [],
        "parameterTypes": [],
        "pathPattern": "/a",
        "requestMediaTypes": ["*/*"],
        "responseMediaType": "application/json",
        "returnType": "Response",
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_record() -> Callable[..., dict[str, Any]]:
    """Factory for camelCase backend action records; keyword args override fields."""
    return _record
