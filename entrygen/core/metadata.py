"""Component metadata extraction and validation.

Reads the literal `info` option of a component's default export:

    export default {
      info: {
        apps: ['admin'],
        path: '/users/:id',
      },
    }

Only literal values are trusted. Identifiers, calls, template strings and
other computed expressions are rejected and reported instead of guessed.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .errors import ErrorCollector
from .script_parser import (
    ArrayExpression,
    Literal,
    ObjectExpression,
    locate_script_block,
    parse_script,
)

logger = logging.getLogger(__name__)

MSG_SCRIPT_NOT_FOUND = "<script>...</script> block was not found"
MSG_EXPECTED_EXPORT = "Expected `export default { ... }` inside <script> block"
MSG_INFO_NOT_OBJECT = "'info' option must be an object"
MSG_APPS_NOT_ARRAY = "'info.apps' option must be an array of string literals"
MSG_APPS_ITEM_NOT_STRING = "All items of 'info.apps' option must be string literals"
MSG_PATH_NOT_STRING = "'info.path' option must be a string literal"
MSG_PATH_NO_SLASH = "'info.path' option must start with '/'"


@dataclass(frozen=True)
class ComponentInfo:
    """Routing and membership metadata of one component.

    Attributes:
        path: Page path, or None for components without a route
        apps: Valid app names listed in `info.apps`
        restricted: True when `info.apps` listed any items, valid or not
    """

    path: Optional[str] = None
    apps: Tuple[str, ...] = ()
    restricted: bool = False


EMPTY_INFO = ComponentInfo()


def extract_component_info(
    content: str, file_path: str, errors: ErrorCollector
) -> ComponentInfo:
    """Extract ComponentInfo from the text of a component file.

    Problems are recorded on the collector; the component always gets an
    info value (empty when nothing usable was found). A script block that
    fails to parse yields empty info without an error.

    Args:
        content: Full component file text
        file_path: Absolute path of the file, used for error reports
        errors: Collector for the current pass

    Returns:
        ComponentInfo for the file
    """
    script = locate_script_block(content)
    if script is None:
        errors.add(file_path, MSG_SCRIPT_NOT_FOUND)
        return EMPTY_INFO

    module = parse_script(script)
    if module is None:
        logger.debug(f"Skipping metadata of {file_path}: script block does not parse")
        return EMPTY_INFO

    export = module.default_export()
    if export is None or not isinstance(export.declaration, ObjectExpression):
        errors.add(file_path, MSG_EXPECTED_EXPORT)
        return EMPTY_INFO

    info_prop = export.declaration.find("info")
    if info_prop is None:
        return EMPTY_INFO
    if not isinstance(info_prop.value, ObjectExpression):
        errors.add(file_path, MSG_INFO_NOT_OBJECT)
        return EMPTY_INFO
    info = info_prop.value

    apps: List[str] = []
    restricted = False
    apps_prop = info.find("apps")
    if apps_prop is not None:
        if not isinstance(apps_prop.value, ArrayExpression):
            errors.add(file_path, MSG_APPS_NOT_ARRAY)
            return EMPTY_INFO
        restricted = bool(apps_prop.value.elements)
        for element in apps_prop.value.elements:
            if not isinstance(element, Literal) or not element.is_string:
                errors.add(file_path, MSG_APPS_ITEM_NOT_STRING)
                continue
            apps.append(element.value)

    path = None
    path_prop = info.find("path")
    if path_prop is not None:
        value = path_prop.value
        if not isinstance(value, Literal) or not value.is_string:
            errors.add(file_path, MSG_PATH_NOT_STRING)
        elif not value.value.startswith("/"):
            errors.add(file_path, MSG_PATH_NO_SLASH)
        else:
            path = value.value

    return ComponentInfo(path=path, apps=tuple(apps), restricted=restricted)
