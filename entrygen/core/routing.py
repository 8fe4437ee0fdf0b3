"""Page path compilation.

Turns `info.path` patterns into the regular expressions vue-router 3 builds
for them (path-to-regexp 1.7 semantics), so the generated backend entry
can tell page URLs apart from other requests.

Supported syntax:
    /users/:id          named parameter
    /users/:id(\\d+)     parameter with a custom pattern
    /files/:path*       zero or more segments
    /files/:path+       one or more segments
    /:lang?/about       optional segment
    /(.*)               unnamed group
    /docs/*             asterisk
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

from .errors import RouteCompileError
from .metadata import ComponentInfo

logger = logging.getLogger(__name__)

_DEFAULT_DELIMITER = "/"

_PATH_REGEXP = re.compile(
    r"(\\.)"
    r"|([/.])?(?:(?::(\w+)(?:\(((?:\\.|[^\\()])+)\))?|\(((?:\\.|[^\\()])+)\))([+*?])?|(\*))",
    re.ASCII,
)

_ESCAPE_STRING_RE = re.compile(r"([.+*?=^!:${}()\[\]|/\\])")
_ESCAPE_GROUP_RE = re.compile(r"([=!:$/()])")

# Line terminators cannot appear raw inside a regular expression literal
_LINE_TERMINATOR_ESCAPES = {"\n": "n", "\r": "r", "\u2028": "u2028", "\u2029": "u2029"}


@dataclass(frozen=True)
class _Token:
    name: Union[str, int]
    prefix: str
    delimiter: str
    optional: bool
    repeat: bool
    partial: bool
    asterisk: bool
    pattern: str


@dataclass(frozen=True)
class CompiledRoute:
    """A page path compiled to a route matcher."""

    source: str  # Path as written in the component
    pattern: str  # Regular expression source
    flags: str  # "" or "i"
    keys: Tuple[Union[str, int], ...] = field(default_factory=tuple)
    file_path: str = ""

    @property
    def regexp(self) -> str:
        """JavaScript regular expression literal for generated code."""
        return f"/{_literal_source(self.pattern)}/{self.flags}"

    def matches(self, url_path: str) -> bool:
        flags = re.IGNORECASE if "i" in self.flags else 0
        return re.search(self.pattern, url_path, flags) is not None


def _literal_source(pattern: str) -> str:
    """Escape line terminators the way RegExp.prototype.source does."""
    out: List[str] = []
    escaped = False
    for ch in pattern:
        replacement = _LINE_TERMINATOR_ESCAPES.get(ch)
        if replacement is not None:
            out.append(replacement if escaped else "\\" + replacement)
            escaped = False
            continue
        out.append(ch)
        escaped = ch == "\\" and not escaped
    return "".join(out)


def _escape_string(text: str) -> str:
    return _ESCAPE_STRING_RE.sub(r"\\\1", text)


def _escape_group(group: str) -> str:
    return _ESCAPE_GROUP_RE.sub(r"\\\1", group)


def _parse(path: str) -> List[Union[str, _Token]]:
    tokens: List[Union[str, _Token]] = []
    key = 0
    index = 0
    literal = ""

    for match in _PATH_REGEXP.finditer(path):
        escaped, prefix, name, capture, group, modifier, asterisk = match.groups()
        literal += path[index:match.start()]
        index = match.end()

        if escaped:
            literal += escaped[1]
            continue

        next_char = path[index] if index < len(path) else None
        if literal:
            tokens.append(literal)
            literal = ""

        partial = prefix is not None and next_char is not None and next_char != prefix
        repeat = modifier in ("+", "*")
        optional = modifier in ("?", "*")
        delimiter = prefix or _DEFAULT_DELIMITER
        custom = capture or group

        if custom:
            pattern = _escape_group(custom)
        elif asterisk:
            pattern = ".*"
        else:
            pattern = f"[^{_escape_string(delimiter)}]+?"

        if name:
            token_name: Union[str, int] = name
        else:
            token_name = key
            key += 1

        tokens.append(_Token(
            name=token_name,
            prefix=prefix or "",
            delimiter=delimiter,
            optional=optional,
            repeat=repeat,
            partial=partial,
            asterisk=bool(asterisk),
            pattern=pattern,
        ))

    if index < len(path):
        literal += path[index:]
    if literal:
        tokens.append(literal)
    return tokens


def _tokens_to_pattern(tokens: List[Union[str, _Token]]) -> str:
    route = ""
    for token in tokens:
        if isinstance(token, str):
            route += _escape_string(token)
            continue

        prefix = _escape_string(token.prefix)
        capture = f"(?:{token.pattern})"
        if token.repeat:
            capture += f"(?:{prefix}{capture})*"
        if token.optional:
            if not token.partial:
                capture = f"(?:{prefix}({capture}))?"
            else:
                capture = f"{prefix}({capture})?"
        else:
            capture = f"{prefix}({capture})"
        route += capture

    # Non-strict matching accepts one trailing delimiter
    delimiter = _escape_string(_DEFAULT_DELIMITER)
    if route.endswith(delimiter):
        route = route[: -len(delimiter)]
    route += f"(?:{delimiter}(?=$))?$"
    return f"^{route}"


def compile_path(path: str, case_sensitive: bool = False, file_path: str = "") -> CompiledRoute:
    """Compile a page path into a route matcher.

    Args:
        path: Path pattern, e.g. "/users/:id"
        case_sensitive: Match letters case-sensitively
        file_path: Component the path belongs to

    Returns:
        CompiledRoute for the path

    Raises:
        RouteCompileError: If the resulting expression is not a valid regex
    """
    tokens = _parse(path)
    pattern = _tokens_to_pattern(tokens)
    flags = "" if case_sensitive else "i"

    try:
        re.compile(pattern, 0 if case_sensitive else re.IGNORECASE)
    except re.error as e:
        raise RouteCompileError(f"Invalid regular expression {pattern!r}: {e}") from e

    keys = tuple(t.name for t in tokens if isinstance(t, _Token))
    return CompiledRoute(source=path, pattern=pattern, flags=flags, keys=keys, file_path=file_path)


def compile_routes(
    components: Dict[str, ComponentInfo], case_sensitive: bool, errors
) -> List[CompiledRoute]:
    """Compile the path of every component that declares one.

    A path that fails to compile is reported on the error collector and
    left out; its component stays in the table.
    """
    routes: List[CompiledRoute] = []
    for file_path, info in components.items():
        if not info.path:
            continue
        try:
            routes.append(compile_path(info.path, case_sensitive, file_path))
        except RouteCompileError as e:
            errors.add(file_path, f"page path error: {e}")
    logger.debug(f"Compiled {len(routes)} page routes")
    return routes
