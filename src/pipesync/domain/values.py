"""Free-form configuration payload values.

Sources and destinations carry arbitrary JSON-shaped configuration. Equality
between two payloads is structural: mappings compare by key set and recursive
value equality independent of insertion order, sequences compare element-wise
in order. Booleans are a distinct variant and never equal a number, which
plain ``==`` would otherwise allow (``True == 1``).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import cast

type ConfigScalar = str | int | float | bool | None
type ConfigValue = ConfigScalar | Mapping[str, ConfigValue] | Sequence[ConfigValue]
type ConfigMapping = Mapping[str, ConfigValue]


def values_equal(left: object, right: object) -> bool:
    """Return whether two configuration values are structurally equal."""

    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, str) or isinstance(right, str):
        return isinstance(left, str) and isinstance(right, str) and left == right
    if isinstance(left, int | float) and isinstance(right, int | float):
        return left == right
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        return _mappings_equal(
            cast(Mapping[str, object], left),
            cast(Mapping[str, object], right),
        )
    if _is_sequence(left) and _is_sequence(right):
        left_items = cast(Sequence[object], left)
        right_items = cast(Sequence[object], right)
        return len(left_items) == len(right_items) and all(
            values_equal(a, b) for a, b in zip(left_items, right_items, strict=True)
        )
    if left is None or right is None:
        return left is None and right is None
    return False


def configs_equal(left: ConfigMapping, right: ConfigMapping) -> bool:
    """Structural equality for two top-level configuration payloads."""

    return _mappings_equal(left, right)


def _mappings_equal(left: Mapping[str, object], right: Mapping[str, object]) -> bool:
    if left.keys() != right.keys():
        return False
    return all(values_equal(value, right[key]) for key, value in left.items())


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)
