"""Identity-preserving change detection for derived card state."""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Mapping, Sequence, TypeVar

from zwave_cards.logic.models import (
    ControllerSummary,
    Device,
    DeviceBundle,
    HealthPartitions,
    NodeRecord,
    Value,
)

T = TypeVar("T")

# Shapes compared field by field; anything else falls back to containers/scalars.
KNOWN_SHAPES: tuple[type, ...] = (
    DeviceBundle,
    HealthPartitions,
    NodeRecord,
    ControllerSummary,
    Device,
    Value,
)


def structurally_equal(left: Any, right: Any) -> bool:
    """Deep equality over bundles, partitions and the containers they hold."""

    if left is right:
        return True
    if isinstance(left, KNOWN_SHAPES) or isinstance(right, KNOWN_SHAPES):
        if type(left) is not type(right):
            return False
        return all(
            structurally_equal(getattr(left, item.name), getattr(right, item.name))
            for item in fields(left)
        )
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if left.keys() != right.keys():
            return False
        return all(structurally_equal(left[key], right[key]) for key in left)
    if _is_sequence(left) and _is_sequence(right):
        if len(left) != len(right):
            return False
        return all(structurally_equal(a, b) for a, b in zip(left, right))
    if _is_sequence(left) or _is_sequence(right):
        return False
    if isinstance(left, Mapping) or isinstance(right, Mapping):
        return False
    return type(left) is type(right) and left == right


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def reconcile(previous: T | None, candidate: T) -> T:
    """Return ``previous`` when ``candidate`` carries no change, else ``candidate``."""

    if previous is None:
        return candidate
    if structurally_equal(previous, candidate):
        return previous
    return candidate
