"""Script parser data models.

Typed nodes for the subset of a JavaScript module that metadata
extraction needs to read. These are pure data containers, no parsing
logic. Anything outside the subset becomes an OtherExpression so callers
can reject it by type instead of guessing at its shape.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Union


@dataclass
class Identifier:
    name: str
    line: int = 0


@dataclass
class Literal:
    """A primitive literal with its decoded value."""

    kind: str  # "string" | "number" | "boolean" | "null" | "regex"
    value: Any
    raw: str
    line: int = 0

    @property
    def is_string(self) -> bool:
        return self.kind == "string"


@dataclass
class TemplateLiteral:
    raw: str
    line: int = 0


@dataclass
class OtherExpression:
    """Any expression the metadata reader does not accept as a value."""

    kind: str  # tree-sitter node type, e.g. "call_expression"
    line: int = 0


@dataclass
class ArrayExpression:
    elements: List["Expression"] = field(default_factory=list)
    line: int = 0


@dataclass
class Property:
    """One member of an object literal.

    key is None for members without a usable key (spread elements).
    """

    key: Optional[Union[Identifier, Literal, OtherExpression]]
    value: "Expression"
    computed: bool = False
    line: int = 0

    def has_name(self, name: str) -> bool:
        return (
            not self.computed
            and isinstance(self.key, Identifier)
            and self.key.name == name
        )


@dataclass
class ObjectExpression:
    properties: List[Property] = field(default_factory=list)
    line: int = 0

    def find(self, name: str) -> Optional[Property]:
        """Return the first property keyed by the identifier name."""
        for prop in self.properties:
            if prop.has_name(name):
                return prop
        return None


Expression = Union[
    Identifier,
    Literal,
    TemplateLiteral,
    ArrayExpression,
    ObjectExpression,
    OtherExpression,
]


@dataclass
class ExportDefaultDeclaration:
    declaration: Expression
    line: int = 0


@dataclass
class Statement:
    """A top-level statement that is not a default export."""

    kind: str
    line: int = 0


@dataclass
class Module:
    """Top-level statements of a parsed script block."""

    body: List[Union[ExportDefaultDeclaration, Statement]] = field(default_factory=list)

    def default_export(self) -> Optional[ExportDefaultDeclaration]:
        for node in self.body:
            if isinstance(node, ExportDefaultDeclaration):
                return node
        return None
