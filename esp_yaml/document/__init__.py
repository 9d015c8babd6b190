"""In-memory document model and renderer for ESPHome YAML.

This subpackage is the core of esp_yaml: the node types (:class:`Scalar`,
:class:`Mapping`, :class:`Sequence`), the comment value object, the quoting
policy, key-ordering strategies, and the recursive renderer. Callers build a
tree bottom-up and call :func:`render_to_text` once to obtain the document.

Examples
--------
>>> from esp_yaml.document import Mapping, Scalar, render_to_text
>>> root = Mapping()
>>> root.set_child("logger", Mapping())  # doctest: +ELLIPSIS
Mapping(...)
>>> root.set_child("wifi", {"ssid": "MyWifi", "password": Scalar.secret("pw")})  # doctest: +ELLIPSIS
Mapping(...)
>>> print(render_to_text(root))
logger:
<BLANKLINE>
wifi:
  password: !secret pw
  ssid: MyWifi
"""

from .comments import Comment
from .models import (
    DocumentError,
    Mapping,
    Node,
    Scalar,
    ScalarKind,
    Sequence,
    StructuralError,
    to_node,
)
from .ordering import OrderingStrategy, insertion_order, lexicographic, pinned
from .quoting import needs_quoting, quote
from .renderer import render_node, render_scalar_value, render_to_text

__all__ = [
    "Comment",
    "DocumentError",
    "Mapping",
    "Node",
    "OrderingStrategy",
    "Scalar",
    "ScalarKind",
    "Sequence",
    "StructuralError",
    "insertion_order",
    "lexicographic",
    "needs_quoting",
    "pinned",
    "quote",
    "render_node",
    "render_scalar_value",
    "render_to_text",
    "to_node",
]
