"""Argument checks applied before raw host data reaches the card logic."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence


class SnapshotValidationError(TypeError):
    """Raised when a caller passes arguments of the wrong shape."""


def require_mapping(value: Any, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise SnapshotValidationError(f"{name} must be a mapping, got {type(value).__name__}")
    return value


def require_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise SnapshotValidationError(f"{name} must be a string, got {type(value).__name__}")
    return value


def require_number(value: Any, name: str) -> float:
    # bool is an int subclass but never a meaningful width
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SnapshotValidationError(f"{name} must be a number, got {type(value).__name__}")
    return float(value)


def require_str_sequence(values: Any, name: str) -> tuple[str, ...]:
    if isinstance(values, (str, bytes, bytearray)) or not isinstance(values, Iterable):
        raise SnapshotValidationError(f"{name} must be a sequence of strings")
    result: list[str] = []
    for item in values:
        result.append(require_str(item, f"{name} item"))
    return tuple(result)


def clean_attributes(attributes: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a shallow copy of an attribute map with string keys only."""

    if not attributes or not isinstance(attributes, Mapping):
        return {}
    cleaned: dict[str, Any] = {}
    for key, item in attributes.items():
        key_str = str(key)
        if key_str.startswith("__"):
            continue
        cleaned[key_str] = _freeze(item)
    return cleaned


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(key): _freeze(item) for key, item in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return tuple(_freeze(item) for item in value)
    return value
