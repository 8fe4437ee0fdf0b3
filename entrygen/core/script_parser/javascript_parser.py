"""JavaScript script block parser using tree-sitter.

Parses the body of a component's script block as an ES module and
converts its top-level statements into the typed nodes from models.py.
Only literal values are converted faithfully; every other expression
is reduced to an OtherExpression carrying its node type.

tree-sitter accepts sloppy-mode code, so the strict-mode early errors a
component is most likely to hit are checked separately: `with` statements,
`delete` of a plain identifier, legacy octal number literals (010) and
octal escapes in strings. Other strict-only errors, such as duplicate
parameter names or assignments to `eval`, are not detected.
"""

import logging
import re
from typing import List, Optional

import tree_sitter
import tree_sitter_javascript

from .models import (
    ArrayExpression,
    ExportDefaultDeclaration,
    Expression,
    Identifier,
    Literal,
    Module,
    ObjectExpression,
    OtherExpression,
    Property,
    Statement,
    TemplateLiteral,
)
from .utils import InvalidEscapeError, decode_string, has_legacy_octal_escape, parse_number

logger = logging.getLogger(__name__)

_JS_LANGUAGE = tree_sitter.Language(tree_sitter_javascript.language())

# Node types forbidden in strict mode code
_STRICT_MODE_VIOLATIONS = frozenset({"with_statement"})

_LEGACY_OCTAL_NUMBER = re.compile(r"0[0-9]")


class JavaScriptParser:
    """tree-sitter based parser for component script blocks.

    Produces:
    - ExportDefaultDeclaration for `export default <expr>`
    - Statement for every other top-level statement
    """

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _JS_LANGUAGE

    def parse_source(self, source_text: str) -> Optional[Module]:
        """Parse script source into a Module.

        Args:
            source_text: Body of the script block

        Returns:
            Module, or None when the source is not a valid strict-mode module
        """
        source = source_text.encode("utf-8")
        parser = tree_sitter.Parser(self.get_tree_sitter_language())
        tree = parser.parse(source)
        root = tree.root_node

        if root.has_error:
            logger.debug("Tree-sitter reported parse errors in script block")
            return None
        if self._has_strict_mode_violation(root, source):
            logger.debug("Script block is not valid strict mode code")
            return None

        body = []
        try:
            for child in root.named_children:
                if child.type == "comment":
                    continue
                if child.type == "export_statement" and self._is_default_export(child):
                    body.append(self._convert_default_export(child, source))
                else:
                    body.append(Statement(kind=child.type, line=self._line(child)))
        except InvalidEscapeError as e:
            logger.debug(f"Invalid string literal in script block: {e}")
            return None
        return Module(body=body)

    # =========================================================================
    # Conversion
    # =========================================================================

    def _convert_default_export(
        self, node: tree_sitter.Node, source: bytes
    ) -> ExportDefaultDeclaration:
        target = node.child_by_field_name("value") or node.child_by_field_name("declaration")
        if target is None:
            declaration: Expression = OtherExpression(kind="empty", line=self._line(node))
        else:
            declaration = self._convert_expression(target, source)
        return ExportDefaultDeclaration(declaration=declaration, line=self._line(node))

    def _convert_expression(self, node: tree_sitter.Node, source: bytes) -> Expression:
        node_type = node.type
        line = self._line(node)

        if node_type == "parenthesized_expression":
            inner = self._named_children(node)
            if len(inner) == 1:
                return self._convert_expression(inner[0], source)
            return OtherExpression(kind=node_type, line=line)

        if node_type == "object":
            return ObjectExpression(properties=self._convert_properties(node, source), line=line)

        if node_type == "array":
            elements = [self._convert_expression(c, source) for c in self._named_children(node)]
            return ArrayExpression(elements=elements, line=line)

        if node_type == "identifier":
            return Identifier(name=self._text(node, source), line=line)

        if node_type == "string":
            raw = self._text(node, source)
            return Literal(kind="string", value=decode_string(raw), raw=raw, line=line)

        if node_type == "number":
            raw = self._text(node, source)
            return Literal(kind="number", value=parse_number(raw), raw=raw, line=line)

        if node_type in ("true", "false"):
            return Literal(kind="boolean", value=node_type == "true", raw=node_type, line=line)

        if node_type == "null":
            return Literal(kind="null", value=None, raw="null", line=line)

        if node_type == "regex":
            raw = self._text(node, source)
            return Literal(kind="regex", value=raw, raw=raw, line=line)

        if node_type == "template_string":
            return TemplateLiteral(raw=self._text(node, source), line=line)

        return OtherExpression(kind=node_type, line=line)

    def _convert_properties(self, node: tree_sitter.Node, source: bytes) -> List[Property]:
        properties: List[Property] = []
        for child in self._named_children(node):
            line = self._line(child)
            if child.type == "pair":
                key_node = child.child_by_field_name("key")
                value_node = child.child_by_field_name("value")
                key, computed = self._convert_key(key_node, source)
                value = (
                    self._convert_expression(value_node, source)
                    if value_node is not None
                    else OtherExpression(kind="empty", line=line)
                )
                properties.append(Property(key=key, value=value, computed=computed, line=line))

            elif child.type == "shorthand_property_identifier":
                # { info } reads a variable, so the value is an identifier
                name = self._text(child, source)
                properties.append(Property(
                    key=Identifier(name=name, line=line),
                    value=Identifier(name=name, line=line),
                    line=line,
                ))

            elif child.type == "method_definition":
                key, computed = self._convert_key(child.child_by_field_name("name"), source)
                properties.append(Property(
                    key=key,
                    value=OtherExpression(kind="function_expression", line=line),
                    computed=computed,
                    line=line,
                ))

            else:
                properties.append(Property(
                    key=None,
                    value=OtherExpression(kind=child.type, line=line),
                    line=line,
                ))
        return properties

    def _convert_key(self, node: Optional[tree_sitter.Node], source: bytes):
        """Return (key, computed) for a property key node."""
        if node is None:
            return None, False
        line = self._line(node)
        if node.type == "property_identifier":
            return Identifier(name=self._text(node, source), line=line), False
        if node.type == "computed_property_name":
            return OtherExpression(kind=node.type, line=line), True
        return self._convert_expression(node, source), False

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _is_default_export(node: tree_sitter.Node) -> bool:
        return any(child.type == "default" for child in node.children)

    @classmethod
    def _has_strict_mode_violation(cls, root: tree_sitter.Node, source: bytes) -> bool:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type in _STRICT_MODE_VIOLATIONS:
                return True
            if node.type == "number" and _LEGACY_OCTAL_NUMBER.match(cls._text(node, source)):
                return True
            if node.type == "string" and has_legacy_octal_escape(cls._text(node, source)):
                return True
            if node.type == "unary_expression" and cls._is_identifier_delete(node):
                return True
            stack.extend(node.children)
        return False

    @staticmethod
    def _is_identifier_delete(node: tree_sitter.Node) -> bool:
        operator = node.child_by_field_name("operator")
        argument = node.child_by_field_name("argument")
        if operator is None or operator.type != "delete" or argument is None:
            return False
        while argument.type == "parenthesized_expression" and argument.named_child_count == 1:
            argument = argument.named_children[0]
        return argument.type == "identifier"

    @staticmethod
    def _named_children(node: tree_sitter.Node) -> List[tree_sitter.Node]:
        return [c for c in node.named_children if c.type != "comment"]

    @staticmethod
    def _text(node: tree_sitter.Node, source: bytes) -> str:
        return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    @staticmethod
    def _line(node: tree_sitter.Node) -> int:
        return node.start_point.row + 1
