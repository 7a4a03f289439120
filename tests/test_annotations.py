"""Tests for webactions.metadata.annotations — auth / other annotation split."""

from webactions.metadata.annotations import HTTP_METHODS, classify_annotations, is_auth_annotation


class TestIsAuthAnnotation:
    def test_access(self) -> None:
        assert is_auth_annotation("@misk.security.authz.AdminDashboardAccess()")

    def test_authz(self) -> None:
        assert is_auth_annotation("@authz.Unauthenticated()")

    def test_access_is_case_sensitive(self) -> None:
        assert not is_auth_annotation("@access()")

    def test_authz_is_case_sensitive(self) -> None:
        assert not is_auth_annotation("@AUTHZ()")

    def test_plain(self) -> None:
        assert not is_auth_annotation("@LogRequestResponse()")


class TestClassifyAnnotations:
    def test_empty(self) -> None:
        assert classify_annotations([]) == ((), ())

    def test_auth_annotations_keep_order(self) -> None:
        annotations = [
            "@misk.web.Get(pathPattern=/a)",
            "@misk.security.authz.Unauthenticated()",
            "@misk.security.authz.AllowAnyService()",
        ]
        auth, _ = classify_annotations(annotations)
        assert auth == (
            "@misk.security.authz.Unauthenticated()",
            "@misk.security.authz.AllowAnyService()",
        )

    def test_content_type_markers_in_neither_group(self) -> None:
        annotations = [
            "@misk.web.RequestContentType(value=[application/json])",
            "@misk.web.ResponseContentType(value=application/json)",
        ]
        assert classify_annotations(annotations) == ((), ())

    def test_method_markers_excluded_case_insensitive(self) -> None:
        annotations = [f"@misk.web.{m.capitalize()}(pathPattern=/x)" for m in HTTP_METHODS]
        _, other = classify_annotations(annotations)
        assert other == ()

    def test_other_annotations_kept(self) -> None:
        annotations = [
            "@misk.web.Post(pathPattern=/a)",
            "@misk.web.LogRequestResponse(bodySampling=1.0)",
            "@misk.security.authz.AdminDashboardAccess()",
            "@misk.web.ConcurrencyLimiterDisabled()",
        ]
        auth, other = classify_annotations(annotations)
        assert auth == ("@misk.security.authz.AdminDashboardAccess()",)
        assert other == (
            "@misk.web.LogRequestResponse(bodySampling=1.0)",
            "@misk.web.ConcurrencyLimiterDisabled()",
        )

    def test_groups_never_overlap(self) -> None:
        annotations = [
            "@Access",
            "@authz.Roles",
            "@Get",
            "@RequestContentType",
            "@Idempotent",
            "@Retryable",
        ]
        auth, other = classify_annotations(annotations)
        assert set(auth).isdisjoint(other)
        for annotation in auth:
            assert "Access" in annotation or "authz" in annotation
        for annotation in other:
            assert "Access" not in annotation and "authz" not in annotation
            assert not any(m in annotation.upper() for m in HTTP_METHODS)
