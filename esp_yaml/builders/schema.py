"""Typed dataclasses describing ESPHome block schemas."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

FieldKind = typ.Literal["string", "secret", "literal", "int", "float", "bool"]


class MissingRequiredFieldError(ValueError):
    """Raised when a block is built without one of its required fields."""

    def __init__(self, field: str, block: str) -> None:
        self.field = field
        self.block = block
        super().__init__(f"'{field}' is required in the '{block}' block.")


class UnknownBlockError(KeyError):
    """Raised when a block name has no entry in the schema table."""


@dc.dataclass(frozen=True, slots=True)
class FieldSpec:
    """A single key of a block and how its value is treated.

    Attributes
    ----------
    key : str
        Key under which the value is stored.
    required : bool
        Whether :meth:`BlockBuilder.build` fails when the key is absent.
    default : object
        Value applied at build time when the key is absent; ``None`` means no
        default.
    kind : FieldKind or None
        Quoting hint used to wrap plain values (for example ``"secret"`` or
        ``"literal"``); ``None`` infers the scalar kind from the Python type.
    """

    key: str
    required: bool = False
    default: object = None
    kind: FieldKind | None = None


@dc.dataclass(frozen=True, slots=True)
class BlockSchema:
    """Declarative description of one ESPHome block or component.

    Attributes
    ----------
    name : str
        Schema identifier used to look the schema up (for example ``"dht"``).
    fields : tuple[FieldSpec, ...]
        Known keys; their order is the rendered key order.
    block : str or None
        Top-level block the component belongs to when it differs from
        ``name`` (the ``"dht"`` schema builds entries of the ``"sensor"``
        block).
    repeated : bool
        Whether the block holds a list of components (``sensor``) rather than
        a single mapping (``wifi``).
    require_any : tuple[tuple[str, ...], ...]
        Key groups of which at least one key must be present.
    """

    name: str
    fields: tuple[FieldSpec, ...] = ()
    block: str | None = None
    repeated: bool = False
    require_any: tuple[tuple[str, ...], ...] = ()

    @property
    def target(self) -> str:
        """Return the top-level block name this schema builds."""
        return self.block or self.name

    @property
    def key_order(self) -> tuple[str, ...]:
        return tuple(spec.key for spec in self.fields)

    @property
    def required(self) -> tuple[str, ...]:
        return tuple(spec.key for spec in self.fields if spec.required)

    def field(self, key: str) -> FieldSpec | None:
        """Return the spec registered for ``key``, if any."""
        return next((spec for spec in self.fields if spec.key == key), None)


def required(key: str, kind: FieldKind | None = None) -> FieldSpec:
    return FieldSpec(key, required=True, kind=kind)


def optional(
    key: str, default: object = None, kind: FieldKind | None = None
) -> FieldSpec:
    return FieldSpec(key, default=default, kind=kind)


__all__ = [
    "BlockSchema",
    "FieldKind",
    "FieldSpec",
    "MissingRequiredFieldError",
    "UnknownBlockError",
    "optional",
    "required",
]
