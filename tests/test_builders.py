"""Tests for the schema-driven block, action, and device builders."""

from __future__ import annotations

import typing as typ

import pytest

from esp_yaml._constants import SECTION_ORDER
from esp_yaml.builders import (
    SCHEMAS,
    ActionBuilder,
    BlockBuilder,
    DeviceBuilder,
    MissingRequiredFieldError,
    UnknownBlockError,
    get_schema,
)
from esp_yaml.document import Mapping, Scalar, ScalarKind, StructuralError, render_node
from esp_yaml.naming import is_valid_device_name, to_device_name


def test_wifi_block_renders_in_schema_order() -> None:
    """Schema field order decides the rendered key order."""
    wifi = BlockBuilder("wifi").secret("password", "wifi_password").set("ssid", "MyWifi")
    assert render_node(wifi.build(), name="wifi") == (
        "wifi:\n  ssid: MyWifi\n  password: !secret wifi_password"
    )


def test_missing_required_field_names_field_and_block() -> None:
    """Validation errors identify the missing key and its block."""
    with pytest.raises(MissingRequiredFieldError) as excinfo:
        BlockBuilder("wifi", ssid="MyWifi").build()
    assert excinfo.value.field == "password"
    assert excinfo.value.block == "wifi"
    assert str(excinfo.value) == "'password' is required in the 'wifi' block."


def test_defaults_are_applied_at_build_time() -> None:
    """Missing keys with defaults are filled in when the block is built."""
    relay = BlockBuilder("switch", name="Relay", pin="D2")
    assert not relay.has("platform"), "defaults must not be applied before build()"
    rendered = render_node(relay.build())
    assert rendered == "platform: gpio\npin: D2\nname: Relay", (
        f"unexpected switch block:\n{rendered}"
    )


def test_explicit_value_overrides_default() -> None:
    """A value set by the caller wins over the schema default."""
    block = BlockBuilder("ota", platform="web_server").build()
    assert block["platform"] == Scalar.string("web_server")


def test_require_any_group_is_reported_as_alternatives() -> None:
    """Components needing one of several keys list the whole group."""
    with pytest.raises(MissingRequiredFieldError, match="temperature or humidity"):
        BlockBuilder("dht", pin="D1").build()


def test_unknown_schema_names_are_rejected() -> None:
    """Builders only accept registered schemas."""
    with pytest.raises(UnknownBlockError, match="Known blocks"):
        BlockBuilder("does_not_exist")
    with pytest.raises(KeyError):
        get_schema("does_not_exist")


def test_quoting_hints_pick_the_scalar_kind() -> None:
    """Field kinds override inference from the Python type."""
    esphome = BlockBuilder("esphome", name="porch", name_add_mac_suffix=True)
    logger = BlockBuilder("logger", baud_rate=0)
    assert esphome.get("name_add_mac_suffix").kind is ScalarKind.BOOL  # type: ignore[union-attr]
    assert render_node(logger.build(), name="logger") == "logger:\n  baud_rate: 0"


def test_nested_builders_are_built_in_place() -> None:
    """A nested builder is validated and stored as a mapping."""
    wifi = BlockBuilder("wifi", ssid="MyWifi").secret("password", "wifi_password")
    wifi.nested("ap", BlockBuilder("ap", ssid="Fallback Hotspot"))
    rendered = render_node(wifi.build(), name="wifi")
    assert rendered.endswith("  ap:\n    ssid: Fallback Hotspot"), rendered


def test_comment_is_attached_to_existing_keys_only() -> None:
    """Comments for unset keys are ignored."""
    wifi = BlockBuilder("wifi", ssid="MyWifi", password="pw")
    wifi.comment("ssid", "Home network").comment("domain", "ignored")
    rendered = render_node(wifi.build(), name="wifi")
    assert rendered == "wifi:\n  # Home network\n  ssid: MyWifi\n  password: pw"


def test_action_builder_produces_action_lists(
    yaml_load: typ.Callable[[str], typ.Any],
) -> None:
    """Actions render as single-key items and lambdas as literal blocks."""
    button = BlockBuilder("binary_sensor", pin="D5", name="Button").nested(
        "on_press",
        ActionBuilder()
        .light_toggle("lamp")
        .lambda_('ESP_LOGD("btn", "pressed");'),
    )
    rendered = render_node(button.build())
    assert rendered == (
        "platform: gpio\n"
        "pin: D5\n"
        "name: Button\n"
        "on_press:\n"
        "  - light.toggle: lamp\n"
        "  - lambda: |-\n"
        '      ESP_LOGD("btn", "pressed");'
    ), f"unexpected binary sensor:\n{rendered}"
    assert yaml_load(rendered)["on_press"] == [
        {"light.toggle": "lamp"},
        {"lambda": 'ESP_LOGD("btn", "pressed");'},
    ]


def test_switch_and_delay_actions_keep_their_order() -> None:
    """Actions are emitted in the order they were added."""
    actions = ActionBuilder().switch_turn_on("relay").delay("500ms").switch_turn_off("relay")
    assert render_node(actions.build()) == (
        "- switch.turn_on: relay\n- delay: 500ms\n- switch.turn_off: relay"
    )


@pytest.fixture
def device() -> DeviceBuilder:
    """Return a device with identity, wifi, logger, and two components."""
    device = DeviceBuilder(comment="Porch light")
    device.substitutions(room="porch", devicename="porch-light")
    device.add_block("esphome", name="porch")
    device.add_block("esp8266", board="d1_mini")
    device.add_block(
        BlockBuilder("wifi").secret("ssid", "wifi_ssid").secret("password", "wifi_password")
    )
    device.add_block("logger")
    device.add_component("switch", pin="D2", name="Relay")
    device.add_component(
        "dht", pin="D1", temperature={"name": "Temperature"}, humidity={"name": "Humidity"}
    )
    return device


def test_device_renders_blocks_in_section_order(device: DeviceBuilder) -> None:
    """Blocks follow the section order with one blank line between them."""
    assert device.render() == (
        "# Porch light\n"
        "\n"
        "substitutions:\n"
        "  room: porch\n"
        '  devicename: "porch-light"\n'
        "\n"
        "esphome:\n"
        "  name: porch\n"
        "\n"
        "esp8266:\n"
        "  board: d1_mini\n"
        "\n"
        "wifi:\n"
        "  ssid: !secret wifi_ssid\n"
        "  password: !secret wifi_password\n"
        "\n"
        "logger:\n"
        "\n"
        "sensor:\n"
        "  - platform: dht\n"
        "    pin: D1\n"
        "    temperature:\n"
        "      name: Temperature\n"
        "    humidity:\n"
        "      name: Humidity\n"
        "\n"
        "switch:\n"
        "  - platform: gpio\n"
        "    pin: D2\n"
        "    name: Relay"
    )


def test_device_output_is_valid_yaml(
    device: DeviceBuilder, yaml_load: typ.Callable[[str], typ.Any]
) -> None:
    """The rendered device loads with a safe YAML loader."""
    loaded = yaml_load(device.render())
    assert loaded["wifi"] == {
        "ssid": "<secret:wifi_ssid>",
        "password": "<secret:wifi_password>",
    }
    assert loaded["sensor"][0]["temperature"] == {"name": "Temperature"}
    assert loaded["logger"] is None


def test_repeated_components_accumulate() -> None:
    """Each add_component call appends one entry."""
    device = DeviceBuilder()
    device.add_component("output", pin="D3", id="out_1")
    device.add_component("ledc", pin="D4", id="out_2")
    outputs = device.root.get_child("output")
    assert len(outputs) == 2, f"expected two outputs, got {len(outputs)}"  # type: ignore[arg-type]


def test_reused_builder_yields_independent_components() -> None:
    """Changing a builder after adding it leaves earlier entries untouched."""
    device = DeviceBuilder()
    relay = BlockBuilder("switch", pin="D2", name="Relay")
    device.add_component(relay)
    relay.set("name", "Other")
    device.add_component(relay)
    switches = device.root.get_child("switch")
    assert switches[0] is not switches[1], "components must not share a mapping"  # type: ignore[index]
    rendered = render_node(switches, name="switch")
    assert rendered == (
        "switch:\n"
        "  - platform: gpio\n"
        "    pin: D2\n"
        "    name: Relay\n"
        "  - platform: gpio\n"
        "    pin: D2\n"
        "    name: Other"
    ), f"unexpected switches:\n{rendered}"


def test_action_builder_returns_a_fresh_sequence() -> None:
    """Each build() call hands out its own action list."""
    actions = ActionBuilder().light_toggle("lamp")
    first = actions.build()
    actions.delay("1s")
    assert first is not actions.build(), "expected a new sequence per build"
    assert render_node(first) == "- light.toggle: lamp", "built list changed later"


def test_device_requires_esphome_and_platform_blocks() -> None:
    """A device without identity or platform cannot be rendered."""
    device = DeviceBuilder()
    with pytest.raises(MissingRequiredFieldError, match="'esphome'"):
        device.render()
    device.add_block("esphome", name="porch")
    with pytest.raises(MissingRequiredFieldError, match="esp8266 or esp32"):
        device.build()


def test_component_block_holding_a_mapping_is_a_structural_error() -> None:
    """Components cannot be appended to a block that is not a sequence."""
    device = DeviceBuilder()
    device.root.set_child("sensor", Mapping())
    with pytest.raises(StructuralError, match="sensor"):
        device.add_component("dht", pin="D1", temperature={"name": "T"})


def test_every_schema_targets_a_known_section() -> None:
    """Schema targets resolve to a top-level section or the nested ``ap`` block."""
    for name, schema in SCHEMAS.items():
        assert schema.name == name, f"schema registered under {name!r} is {schema.name!r}"
        assert schema.target in SECTION_ORDER or schema.target == "ap", (
            f"{name} targets unknown section {schema.target!r}"
        )


@pytest.mark.parametrize(
    ("name", "valid"),
    [("og-sz-bett", True), ("porch1", True), ("Porch", False), ("a" * 25, False), ("", False)],
)
def test_device_name_validation(name: str, valid: bool) -> None:  # noqa: FBT001
    """Device names are short lowercase hostnames."""
    assert is_valid_device_name(name) is valid


def test_device_name_derivation() -> None:
    """Free text is reduced to a valid device name."""
    assert to_device_name("OG SZ_Bett") == "ogsz-bett"
    assert to_device_name("Küche Licht") == "kchelicht"
    assert is_valid_device_name(to_device_name("A" * 40))
