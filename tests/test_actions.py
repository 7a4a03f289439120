"""Tests for webactions.metadata.actions — record parsing and normalization."""

import pytest

from webactions.errors import MalformedActionError
from webactions.metadata.actions import (
    ALL,
    NONE,
    RawAction,
    WebAction,
    bare_function_name,
    empty_allowed_value,
    normalize_action,
)

# =============================================================================
# RawAction.from_api
# =============================================================================


class TestFromApi:
    def test_reads_camel_case(self, make_record) -> None:
        action = RawAction.from_api(
            make_record(allowedRoles=["admin"], pathPattern="/b", dispatchMechanism="POST")
        )
        assert action.allowed_roles == ("admin",)
        assert action.path_pattern == "/b"
        assert action.dispatch_mechanism == "POST"
        assert action.request_media_types == ("*/*",)

    def test_missing_field(self, make_record) -> None:
        record = make_record()
        del record["pathPattern"]
        with pytest.raises(MalformedActionError, match="pathPattern") as exc_info:
            RawAction.from_api(record, index=3)
        assert exc_info.value.field_name == "pathPattern"
        assert exc_info.value.index == 3

    def test_list_field_wrong_type(self, make_record) -> None:
        with pytest.raises(MalformedActionError, match="list of strings"):
            RawAction.from_api(make_record(allowedRoles="admin"))

    def test_string_field_wrong_type(self, make_record) -> None:
        with pytest.raises(MalformedActionError, match="must be a string"):
            RawAction.from_api(make_record(name=None))

    def test_not_a_mapping(self) -> None:
        with pytest.raises(MalformedActionError, match="must be an object"):
            RawAction.from_api(["not", "a", "record"])

    def test_frozen(self, make_record) -> None:
        action = RawAction.from_api(make_record())
        with pytest.raises(AttributeError):
            action.name = "B"  # type: ignore[misc]


# =============================================================================
# Helpers
# =============================================================================


class TestEmptyAllowedValue:
    def test_unauthenticated_first_of_several(self) -> None:
        assert empty_allowed_value(("@Unauthenticated", "@AllowAnyService")) == ALL

    def test_single_unauthenticated_is_none(self) -> None:
        assert empty_allowed_value(("@Unauthenticated",)) == NONE

    def test_unauthenticated_not_first(self) -> None:
        assert empty_allowed_value(("@AdminDashboardAccess", "@Unauthenticated")) == NONE

    def test_no_annotations(self) -> None:
        assert empty_allowed_value(()) == NONE


class TestBareFunctionName:
    def test_strips_keyword(self) -> None:
        assert bare_function_name("fun getA()") == "getA()"

    def test_uses_last_keyword(self) -> None:
        assert bare_function_name("suspend fun fun hello(): String") == "hello(): String"

    def test_no_keyword_unchanged(self) -> None:
        assert bare_function_name("getA()") == "getA()"


# =============================================================================
# normalize_action
# =============================================================================


class TestNormalizeAction:
    def test_scenario_defaults(self, make_record) -> None:
        action = normalize_action(RawAction.from_api(make_record(function="fun getA()")))

        assert isinstance(action, WebAction)
        assert action.allowed_roles == NONE
        assert action.allowed_services == NONE
        assert action.function == "getA()"
        assert action.dispatch_mechanism == ("GET",)

    def test_joins_allowed_lists(self, make_record) -> None:
        action = normalize_action(
            RawAction.from_api(
                make_record(allowedRoles=["admin", "eng"], allowedServices=["payments"])
            )
        )
        assert action.allowed_roles == "admin, eng"
        assert action.allowed_services == "payments"

    def test_all_sentinel(self, make_record) -> None:
        action = normalize_action(
            RawAction.from_api(
                make_record(
                    functionAnnotations=[
                        "@misk.security.authz.Unauthenticated()",
                        "@misk.security.authz.AllowAnyService()",
                    ]
                )
            )
        )
        assert action.allowed_roles == ALL
        assert action.allowed_services == ALL

    def test_sentinel_only_fills_empty_list(self, make_record) -> None:
        action = normalize_action(
            RawAction.from_api(
                make_record(
                    allowedServices=["web-proxy"],
                    functionAnnotations=["@authz.Unauthenticated()", "@authz.AllowAnyUser()"],
                )
            )
        )
        assert action.allowed_services == "web-proxy"
        assert action.allowed_roles == ALL

    def test_classified_annotations(self, make_record) -> None:
        action = normalize_action(
            RawAction.from_api(
                make_record(
                    functionAnnotations=[
                        "@misk.web.Get(pathPattern=/a)",
                        "@misk.security.authz.AdminDashboardAccess()",
                        "@misk.web.LogRequestResponse()",
                    ]
                )
            )
        )
        assert action.auth_function_annotations == (
            "@misk.security.authz.AdminDashboardAccess()",
        )
        assert action.non_access_or_type_function_annotations == (
            "@misk.web.LogRequestResponse()",
        )
        assert len(action.function_annotations) == 3

    def test_to_api(self, make_record) -> None:
        action = normalize_action(RawAction.from_api(make_record()))
        data = action.to_api()
        assert data["pathPattern"] == "/a"
        assert data["dispatchMechanism"] == ["GET"]
        assert data["allowedRoles"] == NONE
        assert data["nonAccessOrTypeFunctionAnnotations"] == []
        assert data["function"] == "getA(): Response"
