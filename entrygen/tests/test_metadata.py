"""Tests for component metadata extraction and app membership."""

import pytest
from entrygen.core.errors import ErrorCollector
from entrygen.core.membership import filter_components, is_active
from entrygen.core.metadata import (
    EMPTY_INFO,
    MSG_APPS_ITEM_NOT_STRING,
    MSG_APPS_NOT_ARRAY,
    MSG_EXPECTED_EXPORT,
    MSG_INFO_NOT_OBJECT,
    MSG_PATH_NO_SLASH,
    MSG_PATH_NOT_STRING,
    MSG_SCRIPT_NOT_FOUND,
    ComponentInfo,
    extract_component_info,
)

PROJECT_DIR = "/project"
FILE_PATH = "/project/src/pages/Users.vue"


def _component(script: str) -> str:
    return f"<template>\n  <div></div>\n</template>\n\n<script>\n{script}\n</script>\n"


def _extract(content: str):
    errors = ErrorCollector(PROJECT_DIR)
    info = extract_component_info(content, FILE_PATH, errors)
    return info, [e.message for e in errors]


# =========================================================================
# Tests: Valid metadata
# =========================================================================

class TestValidInfo:
    def test_path_and_apps(self):
        info, errors = _extract(_component(
            "export default { info: { apps: ['admin', 'site'], path: '/users/:id' } };"
        ))
        assert errors == []
        assert info == ComponentInfo(path="/users/:id", apps=("admin", "site"), restricted=True)

    def test_export_without_info(self):
        info, errors = _extract(_component("export default { name: 'Plain' };"))
        assert errors == []
        assert info == EMPTY_INFO

    def test_empty_info(self):
        info, errors = _extract(_component("export default { info: {} };"))
        assert errors == []
        assert info == EMPTY_INFO

    def test_escaped_path(self):
        info, errors = _extract(_component(r"export default { info: { path: '/caf\u00e9' } };"))
        assert errors == []
        assert info.path == "/caf\u00e9"

    def test_errors_carry_relative_path(self):
        errors = ErrorCollector(PROJECT_DIR)
        extract_component_info("<template></template>", FILE_PATH, errors)
        assert [e.file for e in errors] == ["src/pages/Users.vue"]


# =========================================================================
# Tests: Structural problems
# =========================================================================

class TestStructuralErrors:
    def test_missing_script_block(self):
        info, errors = _extract("<template><div></div></template>")
        assert info == EMPTY_INFO
        assert errors == [MSG_SCRIPT_NOT_FOUND]

    def test_reversed_script_markers(self):
        info, errors = _extract("</script><script>")
        assert info == EMPTY_INFO
        assert errors == [MSG_SCRIPT_NOT_FOUND]

    def test_no_default_export(self):
        info, errors = _extract(_component("export const info = { path: '/a' };"))
        assert info == EMPTY_INFO
        assert errors == [MSG_EXPECTED_EXPORT]

    def test_default_export_not_object(self):
        info, errors = _extract(_component("const page = {};\nexport default page;"))
        assert info == EMPTY_INFO
        assert errors == [MSG_EXPECTED_EXPORT]

    def test_syntax_error_is_silent(self):
        # Unparseable scripts are treated as not using metadata at all,
        # unlike malformed metadata which is reported below.
        info, errors = _extract(_component("export default { info: { path: '/a' "))
        assert info == EMPTY_INFO
        assert errors == []


# =========================================================================
# Tests: Schema problems
# =========================================================================

class TestSchemaErrors:
    @pytest.mark.parametrize("value", ["'page'", "someInfo", "getInfo()", "[]"])
    def test_info_not_object(self, value):
        info, errors = _extract(_component(f"export default {{ info: {value} }};"))
        assert info == EMPTY_INFO
        assert errors == [MSG_INFO_NOT_OBJECT]

    def test_info_shorthand_rejected(self):
        info, errors = _extract(_component("const info = {};\nexport default { info };"))
        assert errors == [MSG_INFO_NOT_OBJECT]

    def test_apps_not_array_stops_processing(self):
        info, errors = _extract(_component(
            "export default { info: { apps: 'admin', path: '/a' } };"
        ))
        assert info == EMPTY_INFO
        assert errors == [MSG_APPS_NOT_ARRAY]

    def test_non_literal_app_items_skipped(self):
        info, errors = _extract(_component(
            "export default { info: { apps: ['admin', APP, `site`, 3, 'shop'], path: '/a' } };"
        ))
        assert info == ComponentInfo(path="/a", apps=("admin", "shop"), restricted=True)
        assert errors == [MSG_APPS_ITEM_NOT_STRING] * 3

    def test_only_invalid_app_items_keep_restriction(self):
        info, errors = _extract(_component(
            "export default { info: { apps: [ADMIN], path: '/admin' } };"
        ))
        assert info == ComponentInfo(path="/admin", apps=(), restricted=True)
        assert errors == [MSG_APPS_ITEM_NOT_STRING]

    def test_empty_apps_array_is_unrestricted(self):
        info, errors = _extract(_component("export default { info: { apps: [] } };"))
        assert info == EMPTY_INFO
        assert errors == []

    @pytest.mark.parametrize("value", ["`/a`", "PATH", "'/' + 'a'", "42"])
    def test_path_not_string_literal(self, value):
        info, errors = _extract(_component(
            f"export default {{ info: {{ apps: ['admin'], path: {value} }} }};"
        ))
        assert info == ComponentInfo(path=None, apps=("admin",), restricted=True)
        assert errors == [MSG_PATH_NOT_STRING]

    def test_path_without_leading_slash(self):
        info, errors = _extract(_component("export default { info: { path: 'foo' } };"))
        assert info == EMPTY_INFO
        assert errors == [MSG_PATH_NO_SLASH]


# =========================================================================
# Tests: App membership
# =========================================================================

class TestMembership:
    @pytest.mark.parametrize("app_name", ["admin", "site", "anything"])
    def test_no_apps_active_everywhere(self, app_name):
        assert is_active(ComponentInfo(), app_name)
        assert is_active(ComponentInfo(path="/a", apps=()), app_name)

    def test_listed_app_active(self):
        assert is_active(ComponentInfo(apps=("admin", "site")), "site")

    def test_unlisted_app_inactive(self):
        assert not is_active(ComponentInfo(path="/a", apps=("admin",)), "site")

    @pytest.mark.parametrize("app_name", ["admin", "site"])
    def test_restricted_without_valid_apps_inactive(self, app_name):
        assert not is_active(ComponentInfo(path="/admin", restricted=True), app_name)

    def test_filter_keeps_order_and_drops_inactive(self):
        components = {
            "/p/src/C.vue": ComponentInfo(),
            "/p/src/A.vue": ComponentInfo(apps=("admin",)),
            "/p/src/B.vue": ComponentInfo(apps=("site",)),
        }
        result = filter_components(components, "site")
        assert list(result) == ["/p/src/C.vue", "/p/src/B.vue"]
        assert "/p/src/A.vue" in components
