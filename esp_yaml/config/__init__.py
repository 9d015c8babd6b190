"""Load and validate TOML device definitions for esp_yaml builds.

A device definition names the device (``[device]``), its substitutions, its
singleton blocks (``[blocks.wifi]``) and its repeated components
(``[[components.sensor]]``). :func:`load_device_definition` parses and
validates the file into a :class:`DeviceDefinition`; :func:`build_device`
feeds that definition through the schema-driven builders.

Examples
--------
>>> from pathlib import Path
>>> from esp_yaml.config import build_device, load_device_definition
>>> definition = load_device_definition(Path("devices/porch.toml"))  # doctest: +SKIP
>>> print(build_device(definition).render())  # doctest: +SKIP
esphome:
  name: porch
...
"""

from .loader import build_device, load_device_definition, parse_device_definition
from .models import DeviceDefinition, DeviceDefinitionError

__all__ = [
    "DeviceDefinition",
    "DeviceDefinitionError",
    "build_device",
    "load_device_definition",
    "parse_device_definition",
]
