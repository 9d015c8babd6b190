"""Alternate serialization of node trees through ruamel.yaml.

The hand-written renderer in :mod:`esp_yaml.document.renderer` is the primary
output path. This module converts the same tree into ruamel's round-trip
containers so it can be emitted by ruamel.yaml instead, which is useful for
cross-checking output or handing documents to tooling that already speaks
ruamel. Key order, secret tags, literal blocks, and comments carry over.

Examples
--------
>>> from esp_yaml.document import Mapping, Scalar
>>> from esp_yaml.document.plain import dump_yaml
>>> print(dump_yaml(Mapping({"password": Scalar.secret("wifi_password")})), end="")
password: !secret wifi_password
"""

from __future__ import annotations

import io
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq, TaggedScalar
from ruamel.yaml.scalarstring import LiteralScalarString

from .._constants import INDENT_WIDTH, SECRET_TAG
from .comments import normalize_lines
from .models import Mapping, Node, Scalar, ScalarKind, Sequence, StructuralError

if typ.TYPE_CHECKING:
    from .ordering import OrderingStrategy


def to_plain(
    node: Node, *, ordering: OrderingStrategy | None = None, _depth: int = 0
) -> typ.Any:
    """Convert ``node`` into ruamel round-trip data.

    Mappings become :class:`CommentedMap` in rendered key order, sequences
    become :class:`CommentedSeq`, secrets become ``!secret`` tagged scalars,
    and literal blocks become :class:`LiteralScalarString`.

    Raises
    ------
    StructuralError
        If ``node`` is not a document node.
    """
    match node:
        case Scalar(kind=ScalarKind.SECRET):
            return TaggedScalar(value=node.value, tag=SECRET_TAG)
        case Scalar(kind=ScalarKind.LITERAL):
            return LiteralScalarString(typ.cast("str", node.value))
        case Scalar() if node.tag:
            return TaggedScalar(value=node.value, tag=node.tag)
        case Scalar():
            return node.value
        case Mapping():
            return _mapping_to_plain(node, ordering, _depth)
        case Sequence():
            return _sequence_to_plain(node, ordering, _depth)
        case _:
            msg = f"Cannot convert {type(node).__name__} to YAML data"
            raise StructuralError(msg)


def dump_yaml(
    node: Node,
    *,
    name: str | None = None,
    ordering: OrderingStrategy | None = None,
) -> str:
    """Serialize ``node`` with ruamel.yaml and return the text.

    When ``name`` is given the node is wrapped in a single-key mapping, which
    mirrors rendering a named block with the primary renderer.
    """
    data = to_plain(node, ordering=ordering, _depth=1 if name else 0)
    if name:
        wrapper = CommentedMap()
        wrapper[name] = data
        _attach_comments(wrapper, name, node, 0)
        data = wrapper
    stream = io.StringIO()
    build_roundtrip_yaml().dump(data, stream)
    return stream.getvalue()


def build_roundtrip_yaml() -> YAML:
    """Return a round-trip emitter using the package's indentation."""
    yaml = YAML()
    yaml.width = 120
    yaml.indent(mapping=INDENT_WIDTH, sequence=INDENT_WIDTH * 2, offset=INDENT_WIDTH)
    return yaml


def _mapping_to_plain(
    mapping: Mapping, ordering: OrderingStrategy | None, depth: int
) -> CommentedMap:
    result = CommentedMap()
    for key in mapping.ordered_keys(ordering):
        child = mapping[key]
        result[key] = to_plain(child, ordering=ordering, _depth=depth + 1)
        _attach_comments(result, key, child, depth)
    return result


def _sequence_to_plain(
    sequence: Sequence, ordering: OrderingStrategy | None, depth: int
) -> CommentedSeq:
    result = CommentedSeq()
    for index, item in enumerate(sequence):
        result.append(to_plain(item, ordering=ordering, _depth=depth + 1))
        if item.comment is not None and item.comment.has_inline:
            result.yaml_add_eol_comment(f"# {item.comment.inline}", index)
    return result


def _attach_comments(
    container: CommentedMap, key: str, child: Node, depth: int
) -> None:
    comment = child.comment
    if comment is None or not comment.has_any:
        return
    if comment.has_above:
        container.yaml_set_comment_before_after_key(
            key,
            before="\n".join(normalize_lines(comment.above)),
            indent=depth * INDENT_WIDTH,
        )
    if comment.has_inline and isinstance(child, Scalar):
        container.yaml_add_eol_comment(f"# {comment.inline}", key)


__all__ = ["build_roundtrip_yaml", "dump_yaml", "to_plain"]
