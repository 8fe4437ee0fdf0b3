"""Tests for page path compilation."""

import pytest
from entrygen.core.errors import ErrorCollector, RouteCompileError
from entrygen.core.metadata import ComponentInfo
from entrygen.core.routing import compile_path, compile_routes


# =========================================================================
# Tests: Generated expressions
# =========================================================================

class TestPatterns:
    def test_root(self):
        route = compile_path("/")
        assert route.regexp == r"/^(?:\/(?=$))?$/i"

    def test_static_path(self):
        route = compile_path("/about")
        assert route.regexp == r"/^\/about(?:\/(?=$))?$/i"
        assert route.keys == ()

    def test_named_parameter(self):
        route = compile_path("/users/:id")
        assert route.pattern == r"^\/users\/((?:[^\/]+?))(?:\/(?=$))?$"
        assert route.keys == ("id",)

    def test_case_sensitive_has_no_flag(self):
        route = compile_path("/about", case_sensitive=True)
        assert route.flags == ""
        assert route.regexp.endswith("$/")

    def test_source_kept(self):
        route = compile_path("/users/:id", file_path="/p/src/Users.vue")
        assert route.source == "/users/:id"
        assert route.file_path == "/p/src/Users.vue"

    def test_idempotent(self):
        assert compile_path("/files/:path*") == compile_path("/files/:path*")

    def test_line_terminators_escaped_in_literal(self):
        route = compile_path("/a\nb\u2028c")
        assert route.pattern == "^\\/a\nb\u2028c(?:\\/(?=$))?$"
        assert route.regexp == r"/^\/a\nb\u2028c(?:\/(?=$))?$/i"
        assert route.matches("/a\nb\u2028c")

    def test_escaped_line_terminator_not_doubled(self):
        route = compile_path("/:id(a\\\rb)")
        assert r"(?:a\rb)" in route.regexp


# =========================================================================
# Tests: Matching
# =========================================================================

class TestMatching:
    def test_static(self):
        route = compile_path("/about")
        assert route.matches("/about")
        assert route.matches("/about/")
        assert route.matches("/ABOUT")
        assert not route.matches("/about/team")

    def test_case_sensitive(self):
        route = compile_path("/About", case_sensitive=True)
        assert route.matches("/About")
        assert not route.matches("/about")

    def test_named_parameter(self):
        route = compile_path("/users/:id")
        assert route.matches("/users/42")
        assert not route.matches("/users")
        assert not route.matches("/users/42/posts")

    def test_custom_pattern(self):
        route = compile_path(r"/users/:id(\d+)")
        assert route.matches("/users/42")
        assert not route.matches("/users/abc")

    def test_optional_segment(self):
        route = compile_path("/:lang?/about")
        assert route.keys == ("lang",)
        assert route.matches("/about")
        assert route.matches("/en/about")

    def test_zero_or_more(self):
        route = compile_path("/files/:path*")
        assert route.matches("/files")
        assert route.matches("/files/a/b/c")

    def test_one_or_more(self):
        route = compile_path("/files/:path+")
        assert not route.matches("/files")
        assert route.matches("/files/a/b")

    def test_asterisk(self):
        route = compile_path("/docs/*")
        assert route.keys == (0,)
        assert route.matches("/docs/guide/intro")

    def test_unnamed_group(self):
        route = compile_path("/(.*)")
        assert route.keys == (0,)
        assert route.matches("/anything/at/all")

    def test_escaped_colon(self):
        route = compile_path(r"/a\:b")
        assert route.keys == ()
        assert route.matches("/a:b")

    def test_dot_prefix(self):
        route = compile_path("/report.:format")
        assert route.keys == ("format",)
        assert route.matches("/report.pdf")


# =========================================================================
# Tests: Failures
# =========================================================================

class TestCompileErrors:
    def test_invalid_custom_pattern(self):
        with pytest.raises(RouteCompileError):
            compile_path("/:id([)")

    def test_compile_routes_reports_and_skips(self):
        errors = ErrorCollector("/p")
        components = {
            "/p/src/A.vue": ComponentInfo(path="/a"),
            "/p/src/B.vue": ComponentInfo(path="/:id([)"),
            "/p/src/C.vue": ComponentInfo(),
            "/p/src/D.vue": ComponentInfo(path="/d/:id"),
        }

        routes = compile_routes(components, False, errors)

        assert [r.source for r in routes] == ["/a", "/d/:id"]
        assert len(errors) == 1
        error = errors.errors[0]
        assert error.file == "src/B.vue"
        assert error.message.startswith("page path error:")
