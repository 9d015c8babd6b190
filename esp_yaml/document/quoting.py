"""Quoting policy for string scalars.

The renderer emits a string either as a plain token or as a double-quoted,
escaped string. :func:`needs_quoting` makes that decision from the content
alone, so the same input always produces the same output.

Examples
--------
>>> needs_quoting("living_room")
False
>>> needs_quoting("123")
True
>>> quote('say "hi"')
'"say \\\\"hi\\\\""'
"""

from __future__ import annotations

import re

from .._constants import BOOLEAN_LITERALS, NULL_LITERAL, SPECIAL_CHARACTERS

LINE_ENDING_PATTERN = re.compile(r"\r\n|\r")
CONTROL_CHARACTER_PATTERN = re.compile(
    "[\x00-\x1f\x7f-\x9f\u2028\u2029\ufeff\ufffe\uffff]"
)
LEADING_QUOTES = ("'", '"')

_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def normalize_text(value: str) -> str:
    """Canonicalize line endings in ``value`` to ``\\n``."""
    return LINE_ENDING_PATTERN.sub("\n", value)


def needs_quoting(text: str) -> bool:
    """Return True when ``text`` cannot be emitted as a plain scalar.

    Parameters
    ----------
    text : str
        String scalar content after normalization.

    Returns
    -------
    bool
        True when the content is blank, contains a YAML indicator character,
        reads as a number, boolean, or null, or carries characters that a
        plain scalar would lose (surrounding whitespace, control characters,
        a leading quote).
    """
    stripped = text.strip()
    if not stripped:
        return True
    if any(char in SPECIAL_CHARACTERS for char in text):
        return True
    if _is_number(stripped):
        return True
    lowered = stripped.lower()
    if lowered in BOOLEAN_LITERALS or lowered == NULL_LITERAL:
        return True
    return (
        stripped != text
        or CONTROL_CHARACTER_PATTERN.search(text) is not None
        or text.startswith(LEADING_QUOTES)
    )


def quote(text: str) -> str:
    """Wrap ``text`` in double quotes, escaping backslashes, quotes, and controls."""
    escaped = "".join(_escape_character(char) for char in text)
    return f'"{escaped}"'


def render_string(text: str) -> str:
    """Return ``text`` plain or quoted according to :func:`needs_quoting`."""
    return quote(text) if needs_quoting(text) else text


def _escape_character(char: str) -> str:
    if char in _ESCAPES:
        return _ESCAPES[char]
    if CONTROL_CHARACTER_PATTERN.match(char):
        code = ord(char)
        return f"\\x{code:02x}" if code < 0x100 else f"\\u{code:04x}"
    return char


def _is_number(text: str) -> bool:
    try:
        float(text)
    except ValueError:
        return False
    return True


__all__ = ["needs_quoting", "normalize_text", "quote", "render_string"]
