"""Script parser utilities.

Script block location and JavaScript literal decoding helpers.
"""

import re
from typing import Any, Optional

SCRIPT_OPEN = "<script>"
SCRIPT_CLOSE = "</script>"

_ESCAPE_RE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|0(?![0-9])|\r\n|[\s\S])"
)

MAX_CODE_POINT = 0x10FFFF


class InvalidEscapeError(ValueError):
    """A string literal holds an escape JavaScript rejects as a syntax error."""


_SINGLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_OCTAL_ESCAPE_DIGITS = frozenset("123456789")

# Escaped line terminators are line continuations
_LINE_CONTINUATIONS = frozenset({"\n", "\r", "\r\n", "\u2028", "\u2029"})


def locate_script_block(content: str) -> Optional[str]:
    """Return the text between the first script markers.

    Args:
        content: Full component file text

    Returns:
        Script body, or None when either marker is missing or the closing
        marker comes before the opening one
    """
    start = content.find(SCRIPT_OPEN)
    end = content.find(SCRIPT_CLOSE)
    if start == -1 or end == -1 or start > end:
        return None
    return content[start + len(SCRIPT_OPEN):end]


def decode_string(raw: str) -> str:
    """Decode a quoted JavaScript string literal into its value.

    Args:
        raw: Literal text including the surrounding quotes

    Returns:
        The string value with escape sequences resolved

    Raises:
        InvalidEscapeError: If a code point escape is above U+10FFFF
    """
    body = raw[1:-1]

    def replace(match: re.Match) -> str:
        seq = match.group(1)
        if seq.startswith("u{"):
            code_point = int(seq[2:-1], 16)
            if code_point > MAX_CODE_POINT:
                raise InvalidEscapeError(f"Code point out of range: \\{seq}")
            return chr(code_point)
        if seq[0] in "ux" and len(seq) > 1:
            return chr(int(seq[1:], 16))
        if seq in _LINE_CONTINUATIONS:
            return ""
        return _SINGLE_ESCAPES.get(seq, seq)

    decoded = _ESCAPE_RE.sub(replace, body)
    # Join \uD83D\uDE00 style surrogate pairs into one code point
    try:
        return decoded.encode("utf-16", "surrogatepass").decode("utf-16")
    except UnicodeDecodeError:
        return decoded


def has_legacy_octal_escape(raw: str) -> bool:
    """True if a quoted string literal holds an octal escape like \\01 or \\8."""
    body = raw[1:-1]
    for match in _ESCAPE_RE.finditer(body):
        seq = match.group(1)
        if seq in _OCTAL_ESCAPE_DIGITS:
            return True
        if seq == "0" and body[match.end():match.end() + 1].isdigit():
            return True
    return False


def parse_number(raw: str) -> Optional[Any]:
    """Best-effort numeric value of a JavaScript number literal."""
    text = raw.replace("_", "")
    if text.endswith("n"):
        text = text[:-1]
    lowered = text.lower()
    try:
        if lowered.startswith(("0x", "0o", "0b")):
            return int(lowered, 0)
        if re.fullmatch(r"0[0-7]+", text):
            return int(text, 8)
        if re.fullmatch(r"\d+", text):
            return int(text)
        return float(text)
    except ValueError:
        return None
