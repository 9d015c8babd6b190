"""Helpers for ESPHome device names.

ESPHome device names become hostnames, so they are limited to lowercase
letters, digits, and hyphens, and kept short.

Examples
--------
>>> is_valid_device_name("og-sz-bett")
True
>>> to_device_name("OG SZ_Bett")
'ogsz-bett'
"""

from __future__ import annotations

from ._constants import MAX_DEVICE_NAME_LENGTH


def is_valid_device_name(name: str) -> bool:
    """Return True when ``name`` is usable as an ESPHome device name."""
    return (
        0 < len(name) <= MAX_DEVICE_NAME_LENGTH
        and all(_is_allowed(char) for char in name)
    )


def to_device_name(name: str) -> str:
    """Derive a valid device name from free text.

    Characters other than letters, digits, ``-`` and ``_`` are dropped,
    underscores become hyphens, and the result is truncated to the maximum
    device name length.
    """
    kept = "".join(char for char in name.lower() if _is_allowed(char) or char == "_")
    return kept.replace("_", "-")[:MAX_DEVICE_NAME_LENGTH]


def _is_allowed(char: str) -> bool:
    return char == "-" or (char.isascii() and (char.islower() or char.isdigit()))


__all__ = ["is_valid_device_name", "to_device_name"]
