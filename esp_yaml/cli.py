"""Cyclopts CLI entrypoint for rendering ESPHome device configurations.

The ``esp-yaml`` console script defined here reads a TOML device definition,
assembles it with the schema-driven builders, and prints or writes the
resulting ESPHome YAML. Typical usage involves running ``esp-yaml render``
for each device in CI and ``esp-yaml check`` as a quick validation step.

Examples
--------
Render a device to stdout:

>>> from esp_yaml.cli import main
>>> main()  # doctest: +SKIP

Write the rendered YAML next to the definition:

>>> from esp_yaml.cli import app
>>> app(
...     ["render", "devices/porch.toml", "--output", "porch.yaml"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._logging import get_logger, setup_logging
from .builders import SCHEMAS, MissingRequiredFieldError, UnknownBlockError
from .config import DeviceDefinitionError, build_device, load_device_definition
from .document import DocumentError
from .document.plain import dump_yaml

logger = get_logger(__name__)

app = App(name="esp-yaml", config=cyclopts.config.Env("ESP_YAML_", command=False))  # type: ignore[unknown-argument]

_BUILD_ERRORS = (
    DeviceDefinitionError,
    DocumentError,
    MissingRequiredFieldError,
    UnknownBlockError,
)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _fail(message: str) -> typ.NoReturn:
    print(f"error: {message}", file=sys.stderr)
    raise SystemExit(1)


@app.command(help="Render a TOML device definition as ESPHome YAML.")
def render(
    definition: typ.Annotated[
        Path, Parameter(help="Path to the TOML device definition")
    ],
    *,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Write the YAML to this file", env_var="ESP_YAML_OUTPUT"),
    ] = None,
    ruamel: typ.Annotated[
        bool,
        Parameter(
            help="Serialize through ruamel.yaml instead of the built-in renderer",
            env_var="ESP_YAML_RUAMEL",
        ),
    ] = False,
) -> None:
    """Render ``definition`` to stdout or to ``output``.

    Parameters
    ----------
    definition : Path
        TOML file describing the device.
    output : Path or None, optional
        Destination file; when ``None`` (default) the YAML is printed.
    ruamel : bool, optional
        Emit through :func:`esp_yaml.document.plain.dump_yaml` rather than the
        primary renderer.

    Returns
    -------
    None
        Prints the YAML, or writes it and prints ``wrote <path>``.
    """
    setup_logging()
    try:
        device = build_device(load_device_definition(definition))
        text = dump_yaml(device.build()) if ruamel else device.render() + "\n"
    except FileNotFoundError as exc:
        _fail(str(exc))
    except _BUILD_ERRORS as exc:
        _fail(_describe(exc))

    if output is None:
        print(text, end="")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    logger.info("Rendered %s to %s", definition, output)
    print(f"wrote {_format_path(output)}")


@app.command(help="Validate a TOML device definition without writing anything.")
def check(
    definition: typ.Annotated[
        Path, Parameter(help="Path to the TOML device definition")
    ],
) -> None:
    """Build ``definition`` and report whether it is valid.

    Prints ``ok <name>`` on success; otherwise prints the validation message
    to stderr and exits with status 1.
    """
    setup_logging()
    try:
        loaded = load_device_definition(definition)
        build_device(loaded).build()
    except FileNotFoundError as exc:
        _fail(str(exc))
    except _BUILD_ERRORS as exc:
        _fail(_describe(exc))
    print(f"ok {loaded.name}")


@app.command(help="List the blocks and components that can be built.")
def blocks() -> None:
    """Print each registered schema with its required keys."""
    for name in sorted(SCHEMAS):
        schema = SCHEMAS[name]
        kind = "component" if schema.repeated else "block"
        target = f" -> {schema.target}" if schema.target != name else ""
        required = ", ".join(schema.required) or "-"
        print(f"{name} ({kind}{target}): {required}")


def _describe(exc: Exception) -> str:
    # KeyError subclasses quote their message in str().
    if isinstance(exc, KeyError) and exc.args:
        return str(exc.args[0])
    return str(exc)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``esp-yaml`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
