"""Bucket a device's entities into the semantic slots used by device cards."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any, Iterable, Mapping, Sequence

from zwave_cards.core.validation import require_str, require_str_sequence
from zwave_cards.logic.models import DeviceBundle, Entity, Snapshot, Value
from zwave_cards.logic.sensor_heuristic import is_statistic
from zwave_cards.logic.snapshot import coerce_snapshot

logger = logging.getLogger(__name__)

# diagnostic indicators live in these domains whatever the card controls
DIAGNOSTIC_DOMAINS: tuple[str, ...] = ("sensor", "update")
CONTROLLER_STATUS_KEY = "controller_status"


class EntityKind(StrEnum):
    """Slots of a :class:`DeviceBundle`, in classification priority order."""

    FIRMWARE = "firmware"
    LAST_SEEN = "last_seen"
    NODE_STATUS = "node_status"
    BATTERY = "battery"
    NAMED = "named"
    STATISTIC = "statistic"
    ENTITY = "entity"


class EntityClassifier:
    """Classify entity/value pairs with a fixed, first-match-wins predicate order."""

    def __init__(
        self,
        *,
        firmware_suffix: str = "_firmware",
        last_seen_suffix: str = "_last_seen",
        node_status_suffix: str = "_node_status",
        battery_suffix: str = "_battery_level",
    ) -> None:
        self._firmware_suffix = firmware_suffix
        self._last_seen_suffix = last_seen_suffix
        self._node_status_suffix = node_status_suffix
        self._battery_suffix = battery_suffix

    def classify_entity(
        self,
        entity: Entity,
        value: Value,
        suffix_matchers: Sequence[str] = (),
    ) -> EntityKind:
        if self.is_firmware(entity, value):
            return EntityKind.FIRMWARE
        if self.is_last_seen(entity):
            return EntityKind.LAST_SEEN
        if self.is_node_status(entity):
            return EntityKind.NODE_STATUS
        if self.is_battery(entity, value):
            return EntityKind.BATTERY
        if any(suffix and entity.entity_id.endswith(suffix) for suffix in suffix_matchers):
            return EntityKind.NAMED
        if is_statistic(value):
            return EntityKind.STATISTIC
        return EntityKind.ENTITY

    def is_firmware(self, entity: Entity, value: Value) -> bool:
        if entity.translation_key == "firmware":
            return True
        if entity.entity_id.endswith(self._firmware_suffix):
            return True
        return value.device_class == "firmware"

    def is_last_seen(self, entity: Entity) -> bool:
        return entity.translation_key == "last_seen" or entity.entity_id.endswith(
            self._last_seen_suffix
        )

    def is_node_status(self, entity: Entity) -> bool:
        return entity.translation_key == "node_status" or entity.entity_id.endswith(
            self._node_status_suffix
        )

    def is_battery(self, entity: Entity, value: Value) -> bool:
        if value.device_class == "battery" and value.state_class == "measurement":
            return True
        # older firmwares expose the level as a bare diagnostic sensor
        return (
            entity.domain == "sensor"
            and entity.entity_category == "diagnostic"
            and entity.entity_id.endswith(self._battery_suffix)
        )

    def classify(
        self,
        snapshot: Snapshot | Mapping[str, Any],
        device_id: str,
        allowed_domains: Iterable[str],
        suffix_matchers: Iterable[str] = (),
    ) -> DeviceBundle:
        """Build a fresh :class:`DeviceBundle` for ``device_id``."""

        snapshot = coerce_snapshot(snapshot)
        device_id = require_str(device_id, "device_id")
        domains = {
            domain.lower()
            for domain in (*require_str_sequence(allowed_domains, "allowed_domains"), *DIAGNOSTIC_DOMAINS)
        }
        suffixes = require_str_sequence(suffix_matchers, "suffix_matchers")

        slots: dict[EntityKind, Value] = {}
        buckets: dict[EntityKind, list[Value]] = {
            EntityKind.NAMED: [],
            EntityKind.STATISTIC: [],
            EntityKind.ENTITY: [],
        }
        is_controller = False
        seen_any = False

        for entity in snapshot.entities.values():
            if entity.device_id != device_id:
                continue
            seen_any = True
            if entity.translation_key == CONTROLLER_STATUS_KEY:
                is_controller = True
            if entity.hidden or entity.domain not in domains:
                continue
            value = snapshot.values.get(entity.entity_id)
            if value is None:
                continue

            kind = self.classify_entity(entity, value, suffixes)
            if kind in buckets:
                buckets[kind].append(value)
            elif kind not in slots:
                slots[kind] = value
            else:
                logger.debug(
                    "Ignoring duplicate %s entity %s on device %s",
                    kind.value,
                    entity.entity_id,
                    device_id,
                )

        device = snapshot.devices.get(device_id)
        return DeviceBundle(
            device_id=device_id,
            found=device is not None or seen_any,
            name=device.display_name if device else None,
            manufacturer=device.manufacturer if device else None,
            model=device.model if device else None,
            is_controller=is_controller,
            firmware=slots.get(EntityKind.FIRMWARE),
            last_seen=slots.get(EntityKind.LAST_SEEN),
            node_status=slots.get(EntityKind.NODE_STATUS),
            battery=slots.get(EntityKind.BATTERY),
            named=tuple(buckets[EntityKind.NAMED]),
            statistics=tuple(buckets[EntityKind.STATISTIC]),
            entities=tuple(buckets[EntityKind.ENTITY]),
        )


_DEFAULT_CLASSIFIER = EntityClassifier()


def classify(
    snapshot: Snapshot | Mapping[str, Any],
    device_id: str,
    allowed_domains: Iterable[str],
    suffix_matchers: Iterable[str] = (),
) -> DeviceBundle:
    """Classify a device's entities with the shared classifier."""

    return _DEFAULT_CLASSIFIER.classify(snapshot, device_id, allowed_domains, suffix_matchers)


def default_classifier() -> EntityClassifier:
    """Expose the shared classifier instance."""

    return _DEFAULT_CLASSIFIER
