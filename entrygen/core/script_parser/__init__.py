"""Component script parser: tree-sitter based static reading of script blocks.

Public API:
    locate_script_block(content) → str | None
    parse_script(source) → Module | None
"""

from typing import Optional

from .models import (
    ArrayExpression,
    ExportDefaultDeclaration,
    Identifier,
    Literal,
    Module,
    ObjectExpression,
    OtherExpression,
    Property,
    Statement,
    TemplateLiteral,
)
from .utils import SCRIPT_CLOSE, SCRIPT_OPEN, InvalidEscapeError, decode_string, locate_script_block

__all__ = [
    "parse_script",
    "locate_script_block",
    "decode_string",
    "InvalidEscapeError",
    "SCRIPT_OPEN",
    "SCRIPT_CLOSE",
    "ArrayExpression",
    "ExportDefaultDeclaration",
    "Identifier",
    "Literal",
    "Module",
    "ObjectExpression",
    "OtherExpression",
    "Property",
    "Statement",
    "TemplateLiteral",
]

# Created on first use to avoid loading the grammar at import time
_parser = None


def parse_script(source_text: str) -> Optional[Module]:
    """Parse a script block body as a strict-mode ES module.

    Args:
        source_text: Text found between the script markers

    Returns:
        Module with typed top-level statements, or None if the text does
        not parse
    """
    global _parser
    if _parser is None:
        from .javascript_parser import JavaScriptParser
        _parser = JavaScriptParser()
    return _parser.parse_source(source_text)
