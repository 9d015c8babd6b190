"""Schema-driven builders that populate ESPHome device documents.

Blocks are described declaratively in :data:`SCHEMAS` (field order, required
keys, defaults, quoting hints) and assembled by the generic
:class:`BlockBuilder`. :class:`DeviceBuilder` collects blocks into the root
mapping and renders the finished document.

Examples
--------
>>> from esp_yaml.builders import BlockBuilder, DeviceBuilder
>>> device = DeviceBuilder()
>>> _ = device.add_block("esphome", name="porch")
>>> _ = device.add_block("esp32", board="esp32dev")
>>> _ = device.add_component("switch", pin="GPIO5", name="Relay")
>>> "switch:\\n  - platform: gpio" in device.render()
True
"""

from .block import ActionBuilder, BlockBuilder
from .components import SCHEMAS, get_schema
from .device import DeviceBuilder
from .schema import (
    BlockSchema,
    FieldSpec,
    MissingRequiredFieldError,
    UnknownBlockError,
)

__all__ = [
    "SCHEMAS",
    "ActionBuilder",
    "BlockBuilder",
    "BlockSchema",
    "DeviceBuilder",
    "FieldSpec",
    "MissingRequiredFieldError",
    "UnknownBlockError",
    "get_schema",
]
