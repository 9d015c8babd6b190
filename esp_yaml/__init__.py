"""Generate ESPHome device configurations as deterministic YAML text.

The package builds an in-memory document tree (scalars, mappings, sequences,
secrets, literal blocks, comments), renders it with ESPHome's formatting
conventions, and exposes schema-driven builders, a TOML device loader, and the
``esp-yaml`` command line.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- Document nodes and renderers re-exported from :mod:`esp_yaml.document`.
- ``DeviceBuilder`` and ``BlockBuilder`` from :mod:`esp_yaml.builders`.

Examples
--------
>>> from esp_yaml import Scalar, render_node
>>> render_node(Scalar.string("123"))
'"123"'
>>> from esp_yaml import main
>>> callable(main)
True
"""

from __future__ import annotations

from .builders import ActionBuilder, BlockBuilder, DeviceBuilder
from .cli import app, main
from .document import (
    Comment,
    Mapping,
    Scalar,
    Sequence,
    StructuralError,
    insertion_order,
    lexicographic,
    pinned,
    render_node,
    render_to_text,
)

__all__ = [
    "ActionBuilder",
    "BlockBuilder",
    "Comment",
    "DeviceBuilder",
    "Mapping",
    "Scalar",
    "Sequence",
    "StructuralError",
    "app",
    "insertion_order",
    "lexicographic",
    "main",
    "pinned",
    "render_node",
    "render_to_text",
]
