"""Tests for the ruamel.yaml based alternate serializer."""

from __future__ import annotations

import typing as typ

import pytest
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.scalarstring import LiteralScalarString

from esp_yaml.document import Mapping, Scalar, Sequence, StructuralError, pinned
from esp_yaml.document.plain import dump_yaml, to_plain


@pytest.fixture
def wifi() -> Mapping:
    """Return a wifi block with a secret password and a commented ssid."""
    ssid = Scalar.string("MyWifi").add_comment("Network name")
    return Mapping(
        {"password": Scalar.secret("wifi_password"), "ssid": ssid, "channel": "6"},
        ordering=pinned("ssid", "password"),
    )


def test_to_plain_uses_round_trip_containers(wifi: Mapping) -> None:
    """Mappings and sequences become ruamel's commented containers."""
    data = to_plain(Mapping({"wifi": wifi, "filters": Sequence(["a"])}))
    assert isinstance(data, CommentedMap), f"expected CommentedMap, got {type(data)}"
    assert isinstance(data["filters"], CommentedSeq), "expected CommentedSeq"
    assert list(data["wifi"]) == ["ssid", "password", "channel"], (
        f"expected pinned key order, got {list(data['wifi'])!r}"
    )


def test_literal_blocks_become_literal_scalar_strings() -> None:
    """Literal blocks keep their block style through ruamel."""
    data = to_plain(Scalar.literal("a();\nb();"))
    assert isinstance(data, LiteralScalarString)
    text = dump_yaml(Mapping({"lambda": Scalar.literal("a();\nb();")}))
    assert text == "lambda: |-\n  a();\n  b();\n", f"unexpected dump:\n{text}"


def test_dump_yaml_matches_primary_structure(
    wifi: Mapping, yaml_load: typ.Callable[[str], typ.Any]
) -> None:
    """Both serializers describe the same data."""
    text = dump_yaml(wifi, name="wifi")
    assert "password: !secret wifi_password" in text, f"missing secret tag:\n{text}"
    assert "# Network name" in text, f"missing above comment:\n{text}"
    assert yaml_load(text) == {
        "wifi": {
            "ssid": "MyWifi",
            "password": "<secret:wifi_password>",
            "channel": "6",
        }
    }, f"unexpected structure:\n{text}"


def test_dump_yaml_indents_sequences_like_the_renderer(
    yaml_load: typ.Callable[[str], typ.Any],
) -> None:
    """Sequence items are offset by two spaces under their key."""
    sensors = Sequence(
        [Mapping({"platform": "dht", "pin": "D1"}, ordering=pinned("platform"))]
    )
    text = dump_yaml(sensors, name="sensor")
    assert text == "sensor:\n  - platform: dht\n    pin: D1\n", f"unexpected dump:\n{text}"
    assert yaml_load(text) == {"sensor": [{"platform": "dht", "pin": "D1"}]}


def test_to_plain_rejects_non_nodes() -> None:
    """Only document nodes can be converted."""
    with pytest.raises(StructuralError):
        to_plain("plain string")  # type: ignore[arg-type]
