"""Comment value object attached to document nodes."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re

from .._constants import COMMENT_PREFIX

LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")


@dc.dataclass(slots=True)
class Comment:
    """Inline, above, and below comment text for a single node.

    Attributes
    ----------
    inline : str or None
        Text appended to the node's first line as ``# <text>``. Multi-line
        input is collapsed to a single line when assigned.
    above : list[str]
        Entries emitted as ``# <line>`` lines before the node.
    below : list[str]
        Entries emitted as ``# <line>`` lines after the node.
    """

    inline: str | None = None
    above: list[str] = dc.field(default_factory=list)
    below: list[str] = dc.field(default_factory=list)

    def __post_init__(self) -> None:
        self.set_inline(self.inline)

    def set_inline(self, text: str | None) -> None:
        """Set the inline comment; blank text clears it."""
        if text is None or not text.strip():
            self.inline = None
            return
        self.inline = " ".join(line for line in normalize_lines([text]) if line)

    def add_above(self, text: str) -> None:
        self.above.append(text)

    def add_below(self, text: str) -> None:
        self.below.append(text)

    @property
    def has_inline(self) -> bool:
        return bool(self.inline)

    @property
    def has_above(self) -> bool:
        return bool(self.above)

    @property
    def has_below(self) -> bool:
        return bool(self.below)

    @property
    def has_any(self) -> bool:
        return self.has_inline or self.has_above or self.has_below


def normalize_lines(entries: cabc.Iterable[str]) -> list[str]:
    """Split comment entries on any line ending and strip every line.

    Blank entries and blank lines inside an entry are kept as empty strings so
    paragraph breaks survive rendering.

    Examples
    --------
    >>> normalize_lines(["first\\r\\nsecond", "  third  ", ""])
    ['first', 'second', 'third', '']
    """
    lines: list[str] = []
    for entry in entries:
        if not entry.strip():
            lines.append("")
            continue
        lines.extend(line.strip() for line in LINE_BREAK_PATTERN.split(entry.strip()))
    return lines


def format_comment_lines(entries: cabc.Iterable[str], indent: int) -> list[str]:
    """Return ``# <line>`` strings for ``entries`` at ``indent`` spaces."""
    padding = " " * indent
    return [
        f"{padding}{COMMENT_PREFIX} {line}" if line else f"{padding}{COMMENT_PREFIX}"
        for line in normalize_lines(entries)
    ]


def format_inline(comment: Comment | None) -> str:
    """Return the suffix appended to a node's first line, or ``""``."""
    if comment is None or not comment.has_inline:
        return ""
    return f"  {COMMENT_PREFIX} {comment.inline}"


__all__ = ["Comment", "format_comment_lines", "format_inline", "normalize_lines"]
