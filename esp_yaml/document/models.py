"""Node model for in-memory ESPHome YAML documents.

A document is a tree of :class:`Scalar`, :class:`Mapping`, and
:class:`Sequence` nodes. Callers assemble the tree bottom-up and hand the root
to :func:`esp_yaml.document.renderer.render_to_text`. Every node may carry an
optional name (used when it is rendered outside a mapping), a
:class:`~esp_yaml.document.comments.Comment`, and a YAML tag.

Examples
--------
>>> from esp_yaml.document.models import Mapping, Scalar
>>> wifi = Mapping({"ssid": "MyWifi"})
>>> wifi.set_child("password", Scalar.secret("wifi_password"))  # doctest: +ELLIPSIS
Mapping(...)
>>> wifi.has_child("password")
True
"""

from __future__ import annotations

import collections.abc as cabc
import enum
import typing as typ

from .._constants import SECRET_TAG
from .comments import Comment
from .quoting import normalize_text

if typ.TYPE_CHECKING:
    from .ordering import OrderingStrategy


class DocumentError(Exception):
    """Base class for errors raised by the document core."""


class StructuralError(DocumentError, TypeError):
    """Raised when a node is used as the wrong kind of structure.

    This signals a programming error (for example a non-node value reaching
    the renderer, or an ordering strategy that drops keys) rather than a
    recoverable runtime condition.
    """


class ScalarKind(enum.Enum):
    """The typed value variants a :class:`Scalar` can carry."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    NULL = "null"
    SECRET = "secret"
    LITERAL = "literal"


class Node:
    """Common metadata shared by every document node."""

    __slots__ = ("comment", "name", "tag")

    def __init__(
        self,
        *,
        name: str | None = None,
        comment: Comment | None = None,
        tag: str | None = None,
    ) -> None:
        self.name = name
        self.comment = comment
        self.tag = tag

    def add_comment(self, text: str) -> typ.Self:
        """Append ``text`` to the lines rendered above this node."""
        self._ensure_comment().add_above(text)
        return self

    def add_comment_below(self, text: str) -> typ.Self:
        """Append ``text`` to the lines rendered below this node."""
        self._ensure_comment().add_below(text)
        return self

    def set_inline_comment(self, text: str | None) -> typ.Self:
        """Set (or clear, with ``None``) the comment on the node's first line."""
        self._ensure_comment().set_inline(text)
        return self

    def clear_comments(self) -> typ.Self:
        self.comment = None
        return self

    def _ensure_comment(self) -> Comment:
        if self.comment is None:
            self.comment = Comment()
        return self.comment

    def _metadata(self) -> tuple[str | None, Comment | None, str | None]:
        return (self.name, self.comment, self.tag)


class Scalar(Node):
    """An atomic value together with its :class:`ScalarKind`.

    The value is validated and normalized whenever it is assigned: strings have
    their line endings canonicalized, literal blocks additionally lose leading
    and trailing blank lines, and secret references are stripped.
    """

    __slots__ = ("_kind", "_value")

    def __init__(
        self,
        kind: ScalarKind,
        value: object = None,
        *,
        name: str | None = None,
        comment: Comment | None = None,
        tag: str | None = None,
    ) -> None:
        super().__init__(name=name, comment=comment, tag=tag)
        self._kind = kind
        self._value: object = None
        self.value = value

    @classmethod
    def string(cls, value: str, **metadata: typ.Any) -> Scalar:
        return cls(ScalarKind.STRING, value, **metadata)

    @classmethod
    def integer(cls, value: int, **metadata: typ.Any) -> Scalar:
        return cls(ScalarKind.INT, value, **metadata)

    @classmethod
    def floating(cls, value: float, **metadata: typ.Any) -> Scalar:
        return cls(ScalarKind.FLOAT, value, **metadata)

    @classmethod
    def boolean(cls, value: bool, **metadata: typ.Any) -> Scalar:  # noqa: FBT001
        return cls(ScalarKind.BOOL, value, **metadata)

    @classmethod
    def null(cls, **metadata: typ.Any) -> Scalar:
        return cls(ScalarKind.NULL, None, **metadata)

    @classmethod
    def secret(cls, reference: str, **metadata: typ.Any) -> Scalar:
        """Return a scalar rendered as ``!secret <reference>``."""
        metadata.setdefault("tag", SECRET_TAG)
        return cls(ScalarKind.SECRET, reference, **metadata)

    @classmethod
    def literal(cls, text: str, **metadata: typ.Any) -> Scalar:
        """Return a multi-line scalar rendered with a ``|-`` header."""
        return cls(ScalarKind.LITERAL, text, **metadata)

    @property
    def kind(self) -> ScalarKind:
        return self._kind

    @property
    def value(self) -> object:
        return self._value

    @value.setter
    def value(self, value: object) -> None:
        self._value = _coerce_scalar(self._kind, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scalar):
            return NotImplemented
        return (self._kind, self._value, self._metadata()) == (
            other._kind,
            other._value,
            other._metadata(),
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Scalar({self._kind.name}, {self._value!r})"


class Mapping(Node, cabc.MutableMapping[str, Node]):
    """An ordered, key-unique collection of named child nodes.

    Setting an existing key replaces its node (last write wins). Iteration
    follows insertion order; output order is decided at render time by
    ``ordering`` (see :mod:`esp_yaml.document.ordering`).
    """

    __slots__ = ("_children", "ordering")

    def __init__(
        self,
        children: cabc.Mapping[str, typ.Any] | None = None,
        *,
        ordering: OrderingStrategy | None = None,
        name: str | None = None,
        comment: Comment | None = None,
        tag: str | None = None,
    ) -> None:
        super().__init__(name=name, comment=comment, tag=tag)
        self._children: dict[str, Node] = {}
        self.ordering = ordering
        for key, value in (children or {}).items():
            self.set_child(key, value)

    def set_child(self, key: str, node: typ.Any) -> typ.Self:
        """Store ``node`` under ``key``, wrapping plain Python values."""
        if not isinstance(key, str) or not key:
            msg = f"Mapping keys must be non-empty strings, got {key!r}"
            raise StructuralError(msg)
        self._children[key] = to_node(node)
        return self

    def get_child(self, key: str) -> Node:
        """Return the node stored under ``key``; raise KeyError if absent."""
        return self._children[key]

    def has_child(self, key: str) -> bool:
        return key in self._children

    def remove_child(self, key: str) -> Node | None:
        """Remove and return the node under ``key``, or None if absent."""
        return self._children.pop(key, None)

    def ordered_keys(self, default: OrderingStrategy | None = None) -> list[str]:
        """Return the keys in output order.

        Raises
        ------
        StructuralError
            If the active ordering strategy does not return a permutation of
            the mapping's keys.
        """
        strategy = self.ordering or default
        keys = list(self._children)
        if strategy is None:
            return sorted(keys)
        ordered = list(strategy(keys))
        if len(ordered) != len(keys) or set(ordered) != set(keys):
            msg = (
                f"Ordering strategy {getattr(strategy, '__name__', strategy)!r} "
                f"returned {ordered!r} for keys {keys!r}"
            )
            raise StructuralError(msg)
        return ordered

    def __getitem__(self, key: str) -> Node:
        return self._children[key]

    def __setitem__(self, key: str, value: typ.Any) -> None:
        self.set_child(key, value)

    def __delitem__(self, key: str) -> None:
        del self._children[key]

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        return self._children == other._children and (
            self._metadata() == other._metadata()
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Mapping({list(self._children)!r})"


class Sequence(Node, cabc.MutableSequence[Node]):
    """An ordered list of unnamed child nodes; order is never changed."""

    __slots__ = ("_items",)

    def __init__(
        self,
        items: cabc.Iterable[typ.Any] | None = None,
        *,
        name: str | None = None,
        comment: Comment | None = None,
        tag: str | None = None,
    ) -> None:
        super().__init__(name=name, comment=comment, tag=tag)
        self._items: list[Node] = []
        for item in items or ():
            self.append_item(item)

    def append_item(self, node: typ.Any) -> typ.Self:
        """Append ``node``, wrapping plain Python values."""
        self._items.append(to_node(node))
        return self

    @typ.overload
    def __getitem__(self, index: int) -> Node: ...

    @typ.overload
    def __getitem__(self, index: slice) -> list[Node]: ...

    def __getitem__(self, index: int | slice) -> Node | list[Node]:
        return self._items[index]

    def __setitem__(self, index: typ.Any, value: typ.Any) -> None:
        if isinstance(index, slice):
            self._items[index] = [to_node(item) for item in value]
        else:
            self._items[index] = to_node(value)

    def __delitem__(self, index: int | slice) -> None:
        del self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def insert(self, index: int, value: typ.Any) -> None:
        self._items.insert(index, to_node(value))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sequence):
            return NotImplemented
        return self._items == other._items and self._metadata() == other._metadata()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Sequence({len(self._items)} items)"


def to_node(value: typ.Any) -> Node:
    """Wrap a plain Python value into the matching node type.

    Nodes pass through unchanged; ``bool``, ``int``, ``float``, ``str``, and
    ``None`` become scalars; mappings and lists/tuples become
    :class:`Mapping` and :class:`Sequence` trees.

    Raises
    ------
    TypeError
        If ``value`` has no document representation.
    """
    match value:
        case Node():
            return value
        case bool():
            return Scalar.boolean(value)
        case int():
            return Scalar.integer(value)
        case float():
            return Scalar.floating(value)
        case str():
            return Scalar.string(value)
        case None:
            return Scalar.null()
        case cabc.Mapping():
            return Mapping(value)
        case list() | tuple():
            return Sequence(value)
        case _:
            msg = f"Cannot convert {type(value).__name__} to a document node"
            raise TypeError(msg)


def _coerce_scalar(kind: ScalarKind, value: object) -> object:
    """Validate ``value`` for ``kind`` and return its stored form."""
    match kind:
        case ScalarKind.NULL:
            return None
        case ScalarKind.BOOL if isinstance(value, bool):
            return value
        case ScalarKind.INT if isinstance(value, int) and not isinstance(value, bool):
            return value
        case ScalarKind.FLOAT if isinstance(value, int | float) and not isinstance(
            value, bool
        ):
            return float(value)
        case ScalarKind.STRING if isinstance(value, str):
            return normalize_text(value)
        case ScalarKind.SECRET if isinstance(value, str) and value.strip():
            return value.strip()
        case ScalarKind.LITERAL if isinstance(value, str):
            return _trim_blank_lines(normalize_text(value))
        case _:
            msg = f"{value!r} is not a valid {kind.value} scalar value"
            raise TypeError(msg)


def _trim_blank_lines(text: str) -> str:
    lines = text.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


__all__ = [
    "DocumentError",
    "Mapping",
    "Node",
    "Scalar",
    "ScalarKind",
    "Sequence",
    "StructuralError",
    "to_node",
]
