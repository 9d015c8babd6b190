"""Recursive renderer turning a node tree into ESPHome-flavoured YAML text.

The renderer walks the tree top-down, passing the current indentation and the
key each child is stored under, and splices the returned line lists together.
It never mutates the tree, so rendering the same unmodified tree twice yields
byte-identical text.

Two entry points are provided:

- :func:`render_node` renders any node as a fragment (for example a single
  ``wifi:`` block or a sequence of sensors).
- :func:`render_to_text` renders a root mapping as a whole document, placing
  one blank line between top-level blocks.

Examples
--------
>>> from esp_yaml.document import Mapping, pinned, render_node
>>> wifi = Mapping({"ssid": "MyWifi", "password": "secret"}, ordering=pinned("ssid"))
>>> print(render_node(wifi, name="wifi"))
wifi:
  ssid: MyWifi
  password: secret
"""

from __future__ import annotations

import math
import typing as typ

from .._constants import (
    INDENT_WIDTH,
    LITERAL_BLOCK_HEADER,
    SECRET_TAG,
    SEQUENCE_ITEM_PREFIX,
)
from .comments import format_comment_lines, format_inline
from .models import Mapping, Node, Scalar, ScalarKind, Sequence, StructuralError
from .quoting import render_string

if typ.TYPE_CHECKING:
    from .ordering import OrderingStrategy


def render_node(
    node: Node,
    indent: int = 0,
    name: str | None = None,
    *,
    ordering: OrderingStrategy | None = None,
) -> str:
    """Render ``node`` as a text fragment.

    Parameters
    ----------
    node : Node
        Scalar, mapping, or sequence to render.
    indent : int, optional
        Number of spaces preceding the fragment's first line.
    name : str or None, optional
        Key the node is rendered under. Defaults to the node's own ``name``;
        when both are absent composites render without a header line and
        scalars render their bare value.
    ordering : OrderingStrategy or None, optional
        Key ordering used by every mapping that has no strategy of its own.
        Lexicographic order applies when neither is set.

    Returns
    -------
    str
        The rendered fragment without trailing whitespace.

    Raises
    ------
    StructuralError
        If ``node`` (or any descendant) is not a document node, or an ordering
        strategy does not return a permutation of a mapping's keys.
    """
    return _join(_render(node, indent, name, ordering))


def render_to_text(root: Mapping, *, ordering: OrderingStrategy | None = None) -> str:
    """Render ``root`` as a complete document.

    Each top-level entry of ``root`` is rendered as a named block and blocks
    are separated by exactly one blank line. The root itself is always treated
    as unnamed; its comments are emitted at the top and bottom of the document.

    Raises
    ------
    StructuralError
        If ``root`` is not a :class:`Mapping`.
    """
    if not isinstance(root, Mapping):
        msg = f"Document root must be a Mapping, got {type(root).__name__}"
        raise StructuralError(msg)
    above, inline, below = _comment_parts(root, 0, has_header=False)
    blocks = [
        _join(_render(root[key], 0, key, ordering))
        for key in root.ordered_keys(ordering)
    ]
    parts: list[str] = []
    if above:
        parts.append(_join(above))
    if root.tag:
        parts.append(root.tag + inline)
    parts.extend(block for block in blocks if block)
    if below:
        parts.append(_join(below))
    return "\n\n".join(parts)


def render_scalar_value(scalar: Scalar) -> str:
    """Return the single-line text for a non-literal scalar value.

    Examples
    --------
    >>> render_scalar_value(Scalar.string("123"))
    '"123"'
    >>> render_scalar_value(Scalar.secret("wifi_password"))
    '!secret wifi_password'
    """
    value = scalar.value
    match scalar.kind:
        case ScalarKind.SECRET:
            return f"{SECRET_TAG} {value}"
        case ScalarKind.STRING if scalar.tag:
            return f"{scalar.tag} {value}"
        case ScalarKind.STRING:
            text = render_string(typ.cast("str", value))
        case ScalarKind.BOOL:
            text = "true" if value else "false"
        case ScalarKind.NULL:
            text = "null"
        case ScalarKind.INT:
            text = str(value)
        case ScalarKind.FLOAT:
            text = _format_float(typ.cast("float", value))
        case ScalarKind.LITERAL:
            msg = "Literal blocks span several lines and have no single-line value"
            raise StructuralError(msg)
    return f"{scalar.tag} {text}" if scalar.tag else text


def _render(
    node: Node,
    indent: int,
    name: str | None,
    ordering: OrderingStrategy | None,
) -> list[str]:
    label = name if name is not None else node.name
    body = _render_body(node, indent, label, ordering)
    above, inline, below = _comment_parts(
        node, indent, has_header=_has_header(node, label)
    )
    if inline and body:
        body[0] += inline
    return [*above, *body, *below]


def _render_body(
    node: Node,
    indent: int,
    label: str | None,
    ordering: OrderingStrategy | None,
) -> list[str]:
    match node:
        case Scalar(kind=ScalarKind.LITERAL):
            return _render_literal(node, indent, label)
        case Scalar():
            value = render_scalar_value(node)
            return [f"{' ' * indent}{label}: {value}" if label else f"{' ' * indent}{value}"]
        case Mapping():
            return _render_mapping(node, indent, label, ordering)
        case Sequence():
            return _render_sequence(node, indent, label, ordering)
        case _:
            msg = f"Cannot render {type(node).__name__!s} as a document node"
            raise StructuralError(msg)


def _render_literal(scalar: Scalar, indent: int, label: str | None) -> list[str]:
    header = f"{scalar.tag} {LITERAL_BLOCK_HEADER}" if scalar.tag else LITERAL_BLOCK_HEADER
    padding = " " * indent
    lines = [f"{padding}{label}: {header}" if label else f"{padding}{header}"]
    text = typ.cast("str", scalar.value)
    if not text:
        return lines
    body_padding = " " * (indent + INDENT_WIDTH)
    lines.extend(f"{body_padding}{line}" if line else "" for line in text.split("\n"))
    return lines


def _render_mapping(
    mapping: Mapping,
    indent: int,
    label: str | None,
    ordering: OrderingStrategy | None,
) -> list[str]:
    lines, child_indent = _composite_header(mapping, indent, label)
    for key in mapping.ordered_keys(ordering):
        lines.extend(_render(mapping[key], child_indent, key, ordering))
    return lines


def _render_sequence(
    sequence: Sequence,
    indent: int,
    label: str | None,
    ordering: OrderingStrategy | None,
) -> list[str]:
    lines, item_indent = _composite_header(sequence, indent, label)
    for item in sequence:
        lines.extend(_render_item(item, item_indent, ordering))
    return lines


def _render_item(
    item: Node, item_indent: int, ordering: OrderingStrategy | None
) -> list[str]:
    """Render one sequence entry with its ``- `` marker at ``item_indent``.

    The item body is rendered two columns deeper and its first line is pulled
    back onto the marker; the remaining lines keep their own indentation.
    Above/below comments belong to the entry and are emitted around it.
    """
    content_indent = item_indent + INDENT_WIDTH
    body = _render_body(item, content_indent, None, ordering)
    above, inline, below = _comment_parts(item, item_indent, has_header=True)
    marker = " " * item_indent + SEQUENCE_ITEM_PREFIX
    if body:
        first = marker + body[0][content_indent:]
    else:
        first = marker.rstrip()
    return [*above, first + inline, *body[1:], *below]


def _composite_header(
    node: Mapping | Sequence, indent: int, label: str | None
) -> tuple[list[str], int]:
    """Return the header lines for a composite and the indent of its children."""
    padding = " " * indent
    if label:
        header = f"{padding}{label}:"
        if node.tag:
            header = f"{header} {node.tag}"
        return [header], indent + INDENT_WIDTH
    if node.tag:
        return [f"{padding}{node.tag}"], indent
    return [], indent


def _has_header(node: Node, label: str | None) -> bool:
    if isinstance(node, Scalar):
        return True
    return bool(label) or bool(node.tag)


def _comment_parts(
    node: Node, indent: int, *, has_header: bool
) -> tuple[list[str], str, list[str]]:
    """Split a node's comment into above lines, inline suffix, and below lines.

    Nodes without a header line (unnamed, untagged composites) have no line to
    carry an inline comment, so it is emitted as the last line above them.
    """
    comment = node.comment
    if comment is None or not comment.has_any:
        return [], "", []
    above = format_comment_lines(comment.above, indent)
    below = format_comment_lines(comment.below, indent)
    inline = format_inline(comment)
    if inline and not has_header:
        above.extend(format_comment_lines([typ.cast("str", comment.inline)], indent))
        inline = ""
    return above, inline, below


def _format_float(value: float) -> str:
    if math.isnan(value):
        return ".nan"
    if math.isinf(value):
        return ".inf" if value > 0 else "-.inf"
    text = repr(value)
    mantissa, separator, exponent = text.partition("e")
    if separator and "." not in mantissa:
        return f"{mantissa}.0e{exponent}"
    return text


def _join(lines: list[str]) -> str:
    return "\n".join(lines).rstrip()


__all__ = ["render_node", "render_scalar_value", "render_to_text"]
