"""Key-ordering strategies for mapping rendering.

An ordering strategy is a plain function taking the mapping's keys (in
insertion order) and returning them in output order. Mappings may carry their
own strategy; the renderer falls back to a render-time default and finally to
:func:`lexicographic`.

Examples
--------
>>> lexicographic(["ssid", "channel", "password"])
['channel', 'password', 'ssid']
>>> pinned("ssid", "password")(["channel", "password", "ssid"])
['ssid', 'password', 'channel']
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

OrderingStrategy = typ.Callable[[cabc.Sequence[str]], list[str]]


def lexicographic(keys: cabc.Sequence[str]) -> list[str]:
    """Return ``keys`` in ordinal (code point) order."""
    return sorted(keys)


def insertion_order(keys: cabc.Sequence[str]) -> list[str]:
    """Return ``keys`` unchanged."""
    return list(keys)


def pinned(*order: str) -> OrderingStrategy:
    """Build a strategy that emits ``order`` first, then the rest sorted.

    Pinned names match keys case-insensitively; keys that tie (unpinned keys,
    or keys differing only by case) fall back to ordinal order.
    """
    priorities: dict[str, int] = {}
    for index, key in enumerate(order):
        priorities.setdefault(key.lower(), index)
    unpinned = len(order)

    def _ordered(keys: cabc.Sequence[str]) -> list[str]:
        return sorted(keys, key=lambda key: (priorities.get(key.lower(), unpinned), key))

    _ordered.__name__ = f"pinned{tuple(order)!r}"
    return _ordered


__all__ = ["OrderingStrategy", "insertion_order", "lexicographic", "pinned"]
