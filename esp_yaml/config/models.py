"""Typed dataclasses describing a device definition file."""

from __future__ import annotations

import dataclasses as dc
import typing as typ


class DeviceDefinitionError(ValueError):
    """Raised when a device definition is invalid or incomplete."""


@dc.dataclass(slots=True)
class DeviceDefinition:
    """Device identity plus the blocks and components to render for it.

    Values under ``substitutions``, ``blocks`` and ``components`` are plain
    Python values or document nodes (secrets and literal blocks), ready to be
    handed to the builders.
    """

    name: str
    platform: str
    board: str
    friendly_name: str | None = None
    comment: str | None = None
    substitutions: dict[str, typ.Any] = dc.field(default_factory=dict)
    blocks: dict[str, dict[str, typ.Any]] = dc.field(default_factory=dict)
    components: dict[str, list[dict[str, typ.Any]]] = dc.field(
        default_factory=dict
    )

    @property
    def component_count(self) -> int:
        """Return the number of repeated components across all blocks."""
        return sum(len(entries) for entries in self.components.values())


__all__ = ["DeviceDefinition", "DeviceDefinitionError"]
