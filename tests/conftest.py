"""Shared fixtures for the esp_yaml test suite."""

from __future__ import annotations

import typing as typ

import pytest
from ruamel.yaml import YAML
from ruamel.yaml.constructor import SafeConstructor

if typ.TYPE_CHECKING:
    from ruamel.yaml.nodes import ScalarNode


class _SecretAwareConstructor(SafeConstructor):
    """Safe constructor that resolves ``!secret`` tags to marker strings."""


def _construct_secret(constructor: SafeConstructor, node: ScalarNode) -> str:
    return f"<secret:{constructor.construct_scalar(node)}>"


_SecretAwareConstructor.add_constructor("!secret", _construct_secret)


@pytest.fixture(scope="session")
def yaml_load() -> typ.Callable[[str], typ.Any]:
    """Return a loader that parses rendered text with ruamel's safe loader.

    ``!secret name`` values load as ``"<secret:name>"`` so assertions can
    check both structure and secret references.
    """
    loader = YAML(typ="safe", pure=True)
    loader.Constructor = _SecretAwareConstructor

    def _load(text: str) -> typ.Any:
        return loader.load(text)

    return _load
