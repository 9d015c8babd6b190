"""Tests for the ``esp-yaml`` Cyclopts commands."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from esp_yaml import cli

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture

PORCH_TOML = dedent(
    """
    [device]
    name = "porch"
    platform = "esp32"
    board = "esp32dev"

    [blocks.wifi]
    ssid = "MyWifi"
    password = { secret = "wifi_password" }

    [[components.switch]]
    pin = "GPIO5"
    name = "Relay"
    """
).lstrip()


@pytest.fixture(autouse=True)
def _quiet_logging(mocker: MockerFixture) -> None:
    """Keep the commands from reconfiguring the root logger during tests."""
    mocker.patch("esp_yaml.cli.setup_logging")


@pytest.fixture
def definition(tmp_path: Path) -> Path:
    """Write a small valid device definition and return its path."""
    path = tmp_path / "porch.toml"
    path.write_text(PORCH_TOML, encoding="utf-8")
    return path


def _run(tokens: list[str]) -> int | None:
    """Invoke the app and return its exit code (None when it returns)."""
    try:
        cli.app(tokens)
    except SystemExit as exc:
        return typ.cast("int | None", exc.code)
    return None


def test_render_prints_yaml_to_stdout(
    definition: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Without --output the document goes to stdout with a final newline."""
    cli.render(definition)
    out = capsys.readouterr().out
    assert out.startswith("esphome:\n  name: porch\n\nesp32:\n  board: esp32dev\n"), out
    assert "  password: !secret wifi_password\n" in out
    assert out.endswith("  - platform: gpio\n    pin: GPIO5\n    name: Relay\n"), out


def test_render_writes_output_file(
    definition: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """With --output the file is written and its path reported."""
    target = tmp_path / "build" / "porch.yaml"
    cli.render(definition, output=target)
    assert target.read_text(encoding="utf-8").endswith("name: Relay\n"), (
        "expected the written document to end with a newline"
    )
    assert capsys.readouterr().out == f"wrote {target}\n"


def test_render_with_ruamel_uses_alternate_serializer(
    definition: Path, mocker: MockerFixture, capsys: pytest.CaptureFixture[str]
) -> None:
    """--ruamel routes the document through dump_yaml."""
    dump = mocker.patch("esp_yaml.cli.dump_yaml", return_value="stub: true\n")
    cli.render(definition, ruamel=True)
    dump.assert_called_once()
    assert capsys.readouterr().out == "stub: true\n"


def test_check_reports_ok_for_valid_definitions(
    definition: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A valid definition prints ``ok <name>``."""
    cli.check(definition)
    assert capsys.readouterr().out == "ok porch\n"


def test_check_exits_non_zero_with_the_validation_message(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Invalid definitions exit with status 1 and explain why."""
    path = tmp_path / "broken.toml"
    path.write_text(PORCH_TOML.replace('ssid = "MyWifi"\n', ""), encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        cli.check(path)
    assert excinfo.value.code == 1
    assert capsys.readouterr().err == "error: 'ssid' is required in the 'wifi' block.\n"


def test_missing_definition_exits_non_zero(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A missing file is reported rather than raised."""
    with pytest.raises(SystemExit) as excinfo:
        cli.render(tmp_path / "absent.toml")
    assert excinfo.value.code == 1
    assert "not found" in capsys.readouterr().err


def test_blocks_lists_schemas_with_required_fields(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Each schema is listed with its kind, target, and required keys."""
    cli.blocks()
    lines = capsys.readouterr().out.splitlines()
    assert "wifi (block): ssid, password" in lines, lines
    assert "dht (component -> sensor): pin" in lines, lines
    assert "captive_portal (block): -" in lines, lines
    assert lines == sorted(lines), "expected schemas in alphabetical order"


def test_app_parses_render_arguments(
    definition: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """The Cyclopts app maps tokens onto the render command."""
    target = tmp_path / "out.yaml"
    code = _run(["render", str(definition), "--output", str(target)])
    assert code in (None, 0), f"expected success, got exit code {code!r}"
    assert target.exists(), "expected the output file to be written"
    assert "wrote" in capsys.readouterr().out


def test_app_reads_output_from_environment(
    definition: Path,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """ESP_YAML_OUTPUT supplies --output when it is not given."""
    target = tmp_path / "env.yaml"
    monkeypatch.setenv("ESP_YAML_OUTPUT", str(target))
    code = _run(["render", str(definition)])
    assert code in (None, 0), f"expected success, got exit code {code!r}"
    assert target.read_text(encoding="utf-8").startswith("esphome:\n")
