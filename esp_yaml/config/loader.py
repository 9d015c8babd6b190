"""Load TOML device definitions and turn them into device builders."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import tomlkit
import tomlkit.exceptions

from .._constants import DEVICE_PLATFORMS
from .._logging import get_logger
from ..builders import SCHEMAS, DeviceBuilder
from ..document import Scalar
from ..naming import is_valid_device_name, to_device_name
from .models import DeviceDefinition, DeviceDefinitionError

logger = get_logger(__name__)

_IDENTITY_KEYS = frozenset({"name", "friendly_name", "platform", "board", "comment"})


def load_device_definition(path: Path) -> DeviceDefinition:
    """Parse the TOML device definition stored at ``path``.

    Parameters
    ----------
    path : Path
        Filesystem path to the definition (for example ``devices/porch.toml``).

    Returns
    -------
    DeviceDefinition
        Device identity plus blocks and components. Inline tables of the form
        ``{ secret = "ref" }`` and ``{ literal = "text" }`` are converted into
        secret and literal-block scalars.

    Raises
    ------
    FileNotFoundError
        If no file exists at ``path``.
    DeviceDefinitionError
        If the TOML cannot be parsed, the ``[device]`` table is missing or
        incomplete, the platform is unknown, the device name is invalid, or a
        block or component has no registered schema.

    Examples
    --------
    >>> from pathlib import Path
    >>> definition = load_device_definition(Path("devices/porch.toml"))  # doctest: +SKIP
    >>> definition.platform  # doctest: +SKIP
    'esp8266'
    """
    if not path.exists():
        msg = f"Device definition '{path}' not found."
        raise FileNotFoundError(msg)

    try:
        document = tomlkit.parse(path.read_text(encoding="utf-8"))
    except tomlkit.exceptions.ParseError as exc:
        msg = f"Unable to parse device definition TOML at {path}: {exc}"
        raise DeviceDefinitionError(msg) from exc

    raw: dict[str, typ.Any] = document.unwrap()
    definition = parse_device_definition(raw)
    logger.info(
        "Loaded device %r from %s (%d blocks, %d components)",
        definition.name,
        path,
        len(definition.blocks),
        definition.component_count,
    )
    return definition


def parse_device_definition(raw: dict[str, typ.Any]) -> DeviceDefinition:
    """Validate an already-parsed TOML document and build the definition.

    Raises
    ------
    DeviceDefinitionError
        If the document is structurally invalid.
    """
    device = raw.get("device")
    if not isinstance(device, dict):
        msg = "Device definition requires a [device] table."
        raise DeviceDefinitionError(msg)

    name = _require_text(device, "name")
    platform = _require_text(device, "platform")
    board = _require_text(device, "board")
    if platform not in DEVICE_PLATFORMS:
        available = ", ".join(DEVICE_PLATFORMS)
        msg = f"Unknown platform '{platform}'. Expected one of: {available}"
        raise DeviceDefinitionError(msg)
    if not is_valid_device_name(name):
        msg = (
            f"Invalid device name '{name}': use up to 24 lowercase letters, "
            "digits, or hyphens."
        )
        if suggestion := to_device_name(name):
            msg = f"{msg} Try '{suggestion}'."
        raise DeviceDefinitionError(msg)
    unknown_keys = sorted(set(device) - _IDENTITY_KEYS)
    if unknown_keys:
        logger.warning("Ignoring unknown [device] keys: %s", ", ".join(unknown_keys))

    substitutions = _require_table(raw.get("substitutions", {}), "substitutions")
    blocks = _require_table(raw.get("blocks", {}), "blocks")
    components = _require_table(raw.get("components", {}), "components")

    definition = DeviceDefinition(
        name=name,
        platform=platform,
        board=board,
        friendly_name=_optional_text(device, "friendly_name"),
        comment=_optional_text(device, "comment"),
        substitutions={
            key: _convert(value, f"substitutions.{key}")
            for key, value in substitutions.items()
        },
    )
    for block_name, values in blocks.items():
        _require_schema(block_name, repeated=None)
        table = _require_table(values, f"blocks.{block_name}")
        definition.blocks[block_name] = {
            key: _convert(value, f"blocks.{block_name}.{key}")
            for key, value in table.items()
        }
    for component_name, entries in components.items():
        _require_schema(component_name, repeated=True)
        if not isinstance(entries, list):
            msg = f"'components.{component_name}' must be an array of tables."
            raise DeviceDefinitionError(msg)
        definition.components[component_name] = [
            {
                key: _convert(value, f"components.{component_name}.{key}")
                for key, value in _require_table(
                    entry, f"components.{component_name}[{index}]"
                ).items()
            }
            for index, entry in enumerate(entries)
        ]
    return definition


def build_device(definition: DeviceDefinition) -> DeviceBuilder:
    """Populate a :class:`DeviceBuilder` from ``definition``.

    The ``esphome`` and platform blocks are derived from the ``[device]``
    table; matching ``[blocks.esphome]`` or ``[blocks.<platform>]`` tables add
    further keys but never override the device identity.

    Raises
    ------
    MissingRequiredFieldError
        If a block or component lacks a required key.
    """
    device = DeviceBuilder(comment=definition.comment)
    if definition.substitutions:
        device.substitutions(**definition.substitutions)

    identity: dict[str, typ.Any] = {"name": definition.name}
    if definition.friendly_name:
        identity["friendly_name"] = definition.friendly_name
    device.add_block("esphome", **{**definition.blocks.get("esphome", {}), **identity})
    device.add_block(
        definition.platform,
        **{**definition.blocks.get(definition.platform, {}), "board": definition.board},
    )

    for block_name, values in definition.blocks.items():
        if block_name in {"esphome", definition.platform}:
            continue
        device.add_block(block_name, **values)
    for component_name, entries in definition.components.items():
        for values in entries:
            device.add_component(component_name, **values)
    logger.debug("Built device %r", definition.name)
    return device


def _convert(value: typ.Any, where: str) -> typ.Any:
    match value:
        case {"secret": str(reference)} if len(value) == 1:
            return Scalar.secret(reference)
        case {"literal": str(text)} if len(value) == 1:
            return Scalar.literal(text)
        case dict():
            return {key: _convert(item, f"{where}.{key}") for key, item in value.items()}
        case list():
            return [_convert(item, f"{where}[{index}]") for index, item in enumerate(value)]
        case bool() | int() | float() | str():
            return value
        case _:
            msg = f"Unsupported value at '{where}': {type(value).__name__}"
            raise DeviceDefinitionError(msg)


def _require_text(table: dict[str, typ.Any], key: str) -> str:
    value = table.get(key)
    if not isinstance(value, str) or not value.strip():
        msg = f"'{key}' is required in the [device] table."
        raise DeviceDefinitionError(msg)
    return value.strip()


def _optional_text(table: dict[str, typ.Any], key: str) -> str | None:
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"'device.{key}' must be a string."
        raise DeviceDefinitionError(msg)
    return value


def _require_table(value: typ.Any, where: str) -> dict[str, typ.Any]:
    if not isinstance(value, dict):
        msg = f"'{where}' must be a table."
        raise DeviceDefinitionError(msg)
    return value


def _require_schema(name: str, *, repeated: bool | None) -> None:
    schema = SCHEMAS.get(name)
    if schema is None:
        available = ", ".join(sorted(SCHEMAS))
        msg = f"Unknown block '{name}'. Known blocks: {available}"
        raise DeviceDefinitionError(msg)
    if repeated and not schema.repeated:
        msg = f"'{name}' is a single block; declare it under [blocks.{name}]."
        raise DeviceDefinitionError(msg)


__all__ = ["build_device", "load_device_definition", "parse_device_definition"]
