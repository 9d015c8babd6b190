"""Assemble a complete ESPHome device document from block builders."""

from __future__ import annotations

import typing as typ

from .._constants import DEVICE_PLATFORMS, SECTION_ORDER
from .._logging import get_logger
from ..document import (
    Mapping,
    Sequence,
    StructuralError,
    insertion_order,
    pinned,
    render_to_text,
)
from .block import BlockBuilder
from .schema import MissingRequiredFieldError

logger = get_logger(__name__)


class DeviceBuilder:
    """Collect top-level blocks and components for one device.

    Singleton blocks (``esphome``, ``wifi``, ...) are stored as mappings;
    repeated blocks (``sensor``, ``switch``, ...) collect their components in
    a sequence. The root mapping orders blocks by
    :data:`esp_yaml._constants.SECTION_ORDER`; unknown blocks follow in
    lexicographic order.

    Examples
    --------
    >>> device = DeviceBuilder()
    >>> _ = device.add_block("esphome", name="kitchen")
    >>> _ = device.add_block("esp8266", board="d1_mini")
    >>> print(device.render())
    esphome:
      name: kitchen
    <BLANKLINE>
    esp8266:
      board: d1_mini
    """

    def __init__(self, *, comment: str | None = None) -> None:
        self._root = Mapping(ordering=pinned(*SECTION_ORDER))
        if comment:
            self._root.add_comment(comment)

    @property
    def root(self) -> Mapping:
        return self._root

    def substitutions(self, **values: typ.Any) -> typ.Self:
        """Merge ``values`` into the ``substitutions`` block.

        Substitutions keep the order in which they were first given.
        """
        if not self._root.has_child("substitutions"):
            self._root.set_child("substitutions", Mapping(ordering=insertion_order))
        block = self._root.get_child("substitutions")
        if not isinstance(block, Mapping):
            msg = "'substitutions' must be a mapping"
            raise StructuralError(msg)
        for key, value in values.items():
            block.set_child(key, value)
        return self

    def add_block(self, block: BlockBuilder | str, **values: typ.Any) -> typ.Self:
        """Build ``block`` and store it at the top level.

        ``block`` may be a builder or a schema name, in which case ``values``
        seed a new builder. Repeated blocks are delegated to
        :meth:`add_component`. A later block with the same name replaces the
        earlier one.

        Raises
        ------
        MissingRequiredFieldError
            If the block lacks a required key.
        """
        builder = _as_builder(block, values)
        if builder.schema.repeated:
            return self.add_component(builder)
        self._root.set_child(builder.name, builder.build())
        logger.debug("Added block %r", builder.name)
        return self

    def add_component(
        self, component: BlockBuilder | str, **values: typ.Any
    ) -> typ.Self:
        """Build ``component`` and append it to its block's sequence.

        Raises
        ------
        MissingRequiredFieldError
            If the component lacks a required key.
        StructuralError
            If the target block already holds something other than a sequence.
        """
        builder = _as_builder(component, values)
        mapping = builder.build()
        if not self._root.has_child(builder.name):
            self._root.set_child(builder.name, Sequence())
        sequence = self._root.get_child(builder.name)
        if not isinstance(sequence, Sequence):
            msg = f"Block '{builder.name}' already holds a {type(sequence).__name__}"
            raise StructuralError(msg)
        sequence.append_item(mapping)
        logger.debug("Added %r component #%d", builder.name, len(sequence))
        return self

    def has_block(self, name: str) -> bool:
        return self._root.has_child(name)

    def build(self) -> Mapping:
        """Validate the device-level requirements and return the root mapping.

        Raises
        ------
        MissingRequiredFieldError
            If the ``esphome`` block or a platform block is missing.
        """
        if not self._root.has_child("esphome"):
            raise MissingRequiredFieldError("esphome", "device")
        if not any(self._root.has_child(platform) for platform in DEVICE_PLATFORMS):
            raise MissingRequiredFieldError(" or ".join(DEVICE_PLATFORMS), "device")
        return self._root

    def render(self) -> str:
        """Validate the device and render it as a document."""
        return render_to_text(self.build())


def _as_builder(block: BlockBuilder | str, values: dict[str, typ.Any]) -> BlockBuilder:
    if isinstance(block, BlockBuilder):
        for key, value in values.items():
            block.set(key, value)
        return block
    return BlockBuilder(block, **values)


__all__ = ["DeviceBuilder"]
