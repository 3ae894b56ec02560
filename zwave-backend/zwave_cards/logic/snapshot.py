"""Conversion of raw host payloads into :class:`Snapshot` objects."""

from __future__ import annotations

from typing import Any, Mapping

from zwave_cards.core.validation import (
    SnapshotValidationError,
    clean_attributes,
    require_mapping,
)
from zwave_cards.logic.models import Device, Entity, Snapshot, Value


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _str_items(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(item) for item in value)


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes", "on"}
    return value is True or (isinstance(value, int) and value == 1)


def _coerce_device(device_id: str, raw: Mapping[str, Any] | Device) -> Device:
    if isinstance(raw, Device):
        return raw
    identifiers = raw.get("identifiers")
    if not isinstance(identifiers, (list, tuple)):
        identifiers = ()
    return Device(
        id=str(raw.get("id") or device_id),
        name=_optional_str(raw.get("name")),
        name_by_user=_optional_str(raw.get("name_by_user")),
        manufacturer=_optional_str(raw.get("manufacturer")),
        model=_optional_str(raw.get("model")),
        area_id=_optional_str(raw.get("area_id")),
        labels=_str_items(raw.get("labels")),
        identifiers=tuple(
            _str_items(pair) for pair in identifiers if isinstance(pair, (list, tuple))
        ),
    )


def _coerce_entity(entity_id: str, raw: Mapping[str, Any] | Entity) -> Entity:
    if isinstance(raw, Entity):
        return raw
    return Entity(
        entity_id=str(raw.get("entity_id") or entity_id),
        device_id=str(raw.get("device_id") or ""),
        entity_category=_optional_str(raw.get("entity_category")),
        translation_key=_optional_str(raw.get("translation_key")),
        hidden=_flag(raw.get("hidden", False)),
    )


def _coerce_value(entity_id: str, raw: Mapping[str, Any] | Value) -> Value:
    if isinstance(raw, Value):
        return raw
    return Value(
        entity_id=str(raw.get("entity_id") or entity_id),
        state=str(raw.get("state", "unknown")),
        attributes=clean_attributes(raw.get("attributes")),
    )


def coerce_snapshot(raw: Mapping[str, Any] | Snapshot) -> Snapshot:
    """Build a snapshot from host data.

    Accepts the Home Assistant frontend shape (``devices``, ``entities`` and
    ``states`` keyed by id); ``values`` is accepted as an alias of ``states``.
    Entities without a device and values without an entity are dropped.
    """

    if isinstance(raw, Snapshot):
        return raw
    raw = require_mapping(raw, "snapshot")

    devices: dict[str, Device] = {}
    for device_id, item in require_mapping(raw.get("devices") or {}, "devices").items():
        if not isinstance(item, (Mapping, Device)):
            raise SnapshotValidationError(f"device {device_id!r} must be a mapping")
        device = _coerce_device(str(device_id), item)
        devices[device.id] = device

    entities: dict[str, Entity] = {}
    for entity_id, item in require_mapping(raw.get("entities") or {}, "entities").items():
        if not isinstance(item, (Mapping, Entity)):
            raise SnapshotValidationError(f"entity {entity_id!r} must be a mapping")
        entity = _coerce_entity(str(entity_id), item)
        if not entity.device_id:
            continue
        entities[entity.entity_id] = entity

    raw_values = raw.get("states")
    if raw_values is None:
        raw_values = raw.get("values") or {}
    values: dict[str, Value] = {}
    for entity_id, item in require_mapping(raw_values, "states").items():
        if not isinstance(item, (Mapping, Value)):
            raise SnapshotValidationError(f"state {entity_id!r} must be a mapping")
        value = _coerce_value(str(entity_id), item)
        if value.entity_id not in entities:
            continue
        values[value.entity_id] = value

    return Snapshot(devices=devices, entities=entities, values=values)
