"""Schema table for the ESPHome blocks and components esp_yaml can build.

Each entry lists the keys a block accepts in the order they are rendered,
which of them are required, and any defaults. Keys not listed here may still
be set on a builder; they render after the listed keys in lexicographic order.
"""

from __future__ import annotations

import types

from .schema import BlockSchema, UnknownBlockError, optional, required

_SCHEMAS: tuple[BlockSchema, ...] = (
    BlockSchema(
        "esphome",
        (
            required("name"),
            optional("friendly_name"),
            optional("comment"),
            optional("min_version"),
            optional("name_add_mac_suffix", kind="bool"),
            optional("on_boot"),
        ),
    ),
    BlockSchema(
        "esp8266",
        (
            required("board"),
            optional("framework"),
            optional("restore_from_flash", kind="bool"),
            optional("early_pin_init", kind="bool"),
        ),
    ),
    BlockSchema(
        "esp32",
        (required("board"), optional("variant"), optional("framework")),
    ),
    BlockSchema("rp2040", (required("board"), optional("framework"))),
    BlockSchema("bk72xx", (required("board"), optional("framework"))),
    BlockSchema(
        "wifi",
        (
            required("ssid"),
            required("password"),
            optional("manual_ip"),
            optional("fast_connect", kind="bool"),
            optional("power_save_mode"),
            optional("domain"),
            optional("ap"),
        ),
    ),
    BlockSchema("ap", (required("ssid"), optional("password"))),
    BlockSchema(
        "api",
        (
            optional("password"),
            optional("encryption"),
            optional("reboot_timeout"),
            optional("services"),
        ),
    ),
    BlockSchema(
        "ota",
        (
            optional("platform", default="esphome"),
            optional("password"),
            optional("port", kind="int"),
        ),
        repeated=True,
    ),
    BlockSchema(
        "mqtt",
        (
            required("broker"),
            optional("port", kind="int"),
            optional("username"),
            optional("password"),
            optional("client_id"),
            optional("discovery", kind="bool"),
            optional("topic_prefix"),
        ),
    ),
    BlockSchema(
        "i2c",
        (
            optional("id"),
            optional("sda"),
            optional("scl"),
            optional("scan", kind="bool"),
            optional("frequency"),
        ),
    ),
    BlockSchema(
        "spi",
        (
            optional("id"),
            required("clk_pin"),
            optional("mosi_pin"),
            optional("miso_pin"),
        ),
    ),
    BlockSchema("logger", (optional("level"), optional("baud_rate", kind="int"))),
    BlockSchema("captive_portal"),
    BlockSchema("web_server", (optional("port", kind="int"), optional("version"))),
    BlockSchema(
        "time",
        (
            required("platform"),
            optional("id"),
            optional("timezone"),
            optional("servers"),
        ),
        repeated=True,
    ),
    BlockSchema(
        "sensor",
        (
            required("platform"),
            optional("name"),
            optional("id"),
            optional("pin"),
            optional("update_interval"),
            optional("unit_of_measurement"),
            optional("accuracy_decimals", kind="int"),
            optional("filters"),
        ),
        repeated=True,
    ),
    BlockSchema(
        "dht",
        (
            optional("platform", default="dht"),
            required("pin"),
            optional("model"),
            optional("temperature"),
            optional("humidity"),
            optional("update_interval"),
        ),
        block="sensor",
        repeated=True,
        require_any=(("temperature", "humidity"),),
    ),
    BlockSchema(
        "environmental",
        (
            required("platform"),
            optional("address"),
            optional("temperature"),
            optional("pressure"),
            optional("humidity"),
            optional("update_interval"),
        ),
        block="sensor",
        repeated=True,
        require_any=(("temperature", "pressure", "humidity"),),
    ),
    BlockSchema(
        "binary_sensor",
        (
            optional("platform", default="gpio"),
            required("pin"),
            required("name"),
            optional("id"),
            optional("device_class"),
            optional("filters"),
            optional("on_press"),
            optional("on_release"),
        ),
        repeated=True,
    ),
    BlockSchema(
        "switch",
        (
            optional("platform", default="gpio"),
            required("pin"),
            required("name"),
            optional("id"),
            optional("icon"),
            optional("restore_mode"),
            optional("inverted", kind="bool"),
        ),
        repeated=True,
    ),
    BlockSchema(
        "output",
        (
            optional("platform", default="gpio"),
            required("pin"),
            required("id"),
        ),
        repeated=True,
    ),
    BlockSchema(
        "ledc",
        (
            optional("platform", default="ledc"),
            required("pin"),
            required("id"),
            optional("frequency"),
        ),
        block="output",
        repeated=True,
    ),
    BlockSchema(
        "light",
        (
            optional("platform", default="monochromatic"),
            required("name"),
            required("output"),
            optional("id"),
            optional("effects"),
        ),
        repeated=True,
    ),
)

SCHEMAS: types.MappingProxyType[str, BlockSchema] = types.MappingProxyType(
    {schema.name: schema for schema in _SCHEMAS}
)


def get_schema(name: str) -> BlockSchema:
    """Return the schema registered under ``name``.

    Raises
    ------
    UnknownBlockError
        If no schema is registered for ``name``.
    """
    try:
        return SCHEMAS[name]
    except KeyError as exc:
        available = ", ".join(sorted(SCHEMAS))
        msg = f"Unknown block '{name}'. Known blocks: {available}"
        raise UnknownBlockError(msg) from exc


__all__ = ["SCHEMAS", "get_schema"]
