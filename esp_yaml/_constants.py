"""Common literal values used across esp_yaml.

These constants keep indentation widths, quoting character sets, and block
ordering centralized so the renderer, builders, and tests can import the same
values without drifting. Intended for internal use within the esp_yaml package.

Examples
--------
>>> from esp_yaml import _constants
>>> _constants.INDENT_WIDTH
2
>>> _constants.SECTION_ORDER[:3]
('substitutions', 'packages', 'esphome')
"""

INDENT_WIDTH = 2

SEQUENCE_ITEM_PREFIX = "- "

LITERAL_BLOCK_HEADER = "|-"

COMMENT_PREFIX = "#"

SECRET_TAG = "!secret"

SPECIAL_CHARACTERS = frozenset(":{}[],&*#?|-<>!%@`")

BOOLEAN_LITERALS = frozenset({"true", "false"})

NULL_LITERAL = "null"

SECTION_ORDER: tuple[str, ...] = (
    "substitutions",
    "packages",
    "esphome",
    "esp8266",
    "esp32",
    "rp2040",
    "bk72xx",
    "rtl87xx",
    "wifi",
    "api",
    "ota",
    "time",
    "web_server",
    "mqtt",
    "captive_portal",
    "logger",
    "i2c",
    "spi",
    "uart",
    "sensor",
    "switch",
    "binary_sensor",
    "output",
    "light",
)

DEVICE_PLATFORMS: tuple[str, ...] = ("esp8266", "esp32", "rp2040", "bk72xx")

MAX_DEVICE_NAME_LENGTH = 24

LOG_LEVEL_ENV = "ESP_YAML_LOG_LEVEL"
