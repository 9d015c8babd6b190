"""Generic builder that assembles one block from its schema.

A :class:`BlockBuilder` collects values for a single ESPHome block (``wifi``)
or component (one ``sensor`` entry), wraps plain Python values into document
nodes using the schema's quoting hints, and validates required keys when
:meth:`BlockBuilder.build` is called.

Examples
--------
>>> from esp_yaml.builders import BlockBuilder
>>> from esp_yaml.document import render_node
>>> wifi = BlockBuilder("wifi").secret("password", "wifi_password").set("ssid", "MyWifi")
>>> print(render_node(wifi.build(), name="wifi"))
wifi:
  ssid: MyWifi
  password: !secret wifi_password
"""

from __future__ import annotations

import copy
import typing as typ

from .._logging import get_logger
from ..document import Mapping, Node, Scalar, Sequence, pinned, to_node
from .components import get_schema
from .schema import BlockSchema, MissingRequiredFieldError

if typ.TYPE_CHECKING:
    from .schema import FieldKind

logger = get_logger(__name__)


class BlockBuilder:
    """Collect and validate the values of one block described by a schema."""

    def __init__(self, schema: BlockSchema | str, **values: typ.Any) -> None:
        """Create a builder for ``schema``, optionally seeding ``values``.

        Parameters
        ----------
        schema : BlockSchema or str
            Schema instance or the name of a registered schema.
        **values : Any
            Initial keys, passed through :meth:`set`.

        Raises
        ------
        UnknownBlockError
            If ``schema`` names no registered schema.
        """
        self.schema = get_schema(schema) if isinstance(schema, str) else schema
        self._block = Mapping(ordering=pinned(*self.schema.key_order))
        for key, value in values.items():
            self.set(key, value)

    @property
    def name(self) -> str:
        """Return the top-level block name the built mapping belongs to."""
        return self.schema.target

    def set(self, key: str, value: typ.Any, *, secret: bool = False) -> typ.Self:
        """Store ``value`` under ``key``, replacing any previous value.

        Builders and document nodes are stored as they are; other values are
        wrapped according to the field's quoting hint (``secret=True`` forces
        a secret reference).
        """
        self._block.set_child(key, self._wrap(key, value, secret=secret))
        return self

    def secret(self, key: str, reference: str) -> typ.Self:
        """Store ``!secret <reference>`` under ``key``."""
        return self.set(key, reference, secret=True)

    def literal(self, key: str, text: str) -> typ.Self:
        """Store ``text`` under ``key`` as a ``|-`` literal block."""
        self._block.set_child(key, Scalar.literal(text))
        return self

    def nested(self, key: str, value: BlockBuilder | ActionBuilder | typ.Any) -> typ.Self:
        """Store a nested block, action list, or mapping under ``key``."""
        self._block.set_child(key, self._wrap(key, value, secret=False))
        return self

    def comment(self, key: str, text: str) -> typ.Self:
        """Attach ``text`` as a comment above the value stored under ``key``.

        Keys that are not set yet are ignored.
        """
        if self._block.has_child(key):
            self._block.get_child(key).add_comment(text)
        else:
            logger.debug("Ignoring comment for unset key %r in %r", key, self.name)
        return self

    def has(self, key: str) -> bool:
        return self._block.has_child(key)

    def get(self, key: str) -> Node:
        return self._block.get_child(key)

    def build(self) -> Mapping:
        """Apply defaults, validate required keys, and return a copy of the block.

        Each call returns a new mapping, so one builder can seed several
        components without their entries sharing nodes.

        Raises
        ------
        MissingRequiredFieldError
            If a required key, or every key of a ``require_any`` group, is
            absent.
        """
        for spec in self.schema.fields:
            if spec.default is not None and not self._block.has_child(spec.key):
                logger.debug(
                    "Applying default %r=%r to %r", spec.key, spec.default, self.name
                )
                self.set(spec.key, spec.default)
        for key in self.schema.required:
            if not self._block.has_child(key):
                logger.debug("Block %r is missing required key %r", self.name, key)
                raise MissingRequiredFieldError(key, self.name)
        for group in self.schema.require_any:
            if not any(self._block.has_child(key) for key in group):
                raise MissingRequiredFieldError(" or ".join(group), self.name)
        return copy.deepcopy(self._block)

    def _wrap(self, key: str, value: typ.Any, *, secret: bool) -> Node:
        if isinstance(value, BlockBuilder | ActionBuilder):
            return value.build()
        if isinstance(value, Node):
            return value
        spec = self.schema.field(key)
        kind: FieldKind | None = "secret" if secret else spec.kind if spec else None
        return _coerce(value, kind)


class ActionBuilder:
    """Build an ESPHome action list (``on_press``, ``on_boot``, ...).

    Each action is a single-key mapping such as ``light.toggle: lamp``;
    lambdas are rendered as ``lambda: |-`` literal blocks.
    """

    def __init__(self) -> None:
        self._actions = Sequence()

    def light_toggle(self, light_id: str) -> typ.Self:
        return self._simple("light.toggle", light_id)

    def light_turn_on(self, light_id: str) -> typ.Self:
        return self._simple("light.turn_on", light_id)

    def light_turn_off(self, light_id: str) -> typ.Self:
        return self._simple("light.turn_off", light_id)

    def switch_toggle(self, switch_id: str) -> typ.Self:
        return self._simple("switch.toggle", switch_id)

    def switch_turn_on(self, switch_id: str) -> typ.Self:
        return self._simple("switch.turn_on", switch_id)

    def switch_turn_off(self, switch_id: str) -> typ.Self:
        return self._simple("switch.turn_off", switch_id)

    def delay(self, duration: str) -> typ.Self:
        return self._simple("delay", duration)

    def lambda_(self, code: str) -> typ.Self:
        """Append a C++ lambda action."""
        self._actions.append_item(Mapping({"lambda": Scalar.literal(code)}))
        return self

    def add_action(self, action: typ.Any) -> typ.Self:
        self._actions.append_item(action)
        return self

    def build(self) -> Sequence:
        return copy.deepcopy(self._actions)

    def _simple(self, action: str, target: str) -> typ.Self:
        self._actions.append_item(Mapping({action: Scalar.string(target)}))
        return self


def _coerce(value: typ.Any, kind: FieldKind | None) -> Node:
    match kind:
        case "secret":
            return Scalar.secret(str(value))
        case "literal":
            return Scalar.literal(str(value))
        case "string":
            return Scalar.string(str(value))
        case "int":
            return Scalar.integer(value)
        case "float":
            return Scalar.floating(value)
        case "bool":
            return Scalar.boolean(value)
        case _:
            return to_node(value)


__all__ = ["ActionBuilder", "BlockBuilder"]
