"""Snapshot and derived data structures shared by the card logic."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Mapping


class EntityCategory(StrEnum):
    """Home Assistant entity categories relevant for card classification."""

    CONFIG = "config"
    DIAGNOSTIC = "diagnostic"


class NodeStatus(StrEnum):
    """Node statuses with a partition of their own; anything else is dead."""

    ALIVE = "alive"
    ASLEEP = "asleep"


@dataclass(slots=True, frozen=True)
class Device:
    """A physical device tracked by the hub."""

    id: str
    name: str | None = None
    name_by_user: str | None = None
    manufacturer: str | None = None
    model: str | None = None
    area_id: str | None = None
    labels: tuple[str, ...] = ()
    identifiers: tuple[tuple[str, ...], ...] = ()

    @property
    def display_name(self) -> str | None:
        return self.name_by_user or self.name

    def has_label(self, label: str) -> bool:
        return label in self.labels


@dataclass(slots=True, frozen=True)
class Entity:
    """An addressable capability belonging to exactly one device."""

    entity_id: str
    device_id: str
    entity_category: str | None = None
    translation_key: str | None = None
    hidden: bool = False

    @property
    def domain(self) -> str:
        return self.entity_id.split(".", maxsplit=1)[0].lower() if self.entity_id else ""


@dataclass(slots=True, frozen=True)
class Value:
    """The current reading of an entity."""

    entity_id: str
    state: str
    attributes: Mapping[str, Any] = field(default_factory=dict)

    @property
    def domain(self) -> str:
        return self.entity_id.split(".", maxsplit=1)[0].lower() if self.entity_id else ""

    @property
    def device_class(self) -> str:
        return str(self.attributes.get("device_class") or "").lower()

    @property
    def state_class(self) -> str:
        return str(self.attributes.get("state_class") or "").lower()


@dataclass(slots=True, frozen=True)
class Snapshot:
    """Flat view of devices, entities and values delivered by the host."""

    devices: Mapping[str, Device] = field(default_factory=dict)
    entities: Mapping[str, Entity] = field(default_factory=dict)
    values: Mapping[str, Value] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class DeviceBundle:
    """Semantically labelled view of one device's entities."""

    device_id: str
    found: bool = False
    name: str | None = None
    manufacturer: str | None = None
    model: str | None = None
    is_controller: bool = False
    firmware: Value | None = None
    last_seen: Value | None = None
    node_status: Value | None = None
    battery: Value | None = None
    named: tuple[Value, ...] = ()
    statistics: tuple[Value, ...] = ()
    entities: tuple[Value, ...] = ()


@dataclass(slots=True, frozen=True)
class NodeRecord:
    """A device seen from the network health perspective."""

    device_id: str
    name: str | None = None
    status: Value | None = None
    last_seen_value: Value | None = None
    last_seen: int | None = None

    @property
    def status_state(self) -> str | None:
        return self.status.state if self.status else None


@dataclass(slots=True, frozen=True)
class HealthPartitions:
    dead: tuple[NodeRecord, ...] = ()
    live: tuple[NodeRecord, ...] = ()
    asleep: tuple[NodeRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.dead) + len(self.live) + len(self.asleep)

    @property
    def is_empty(self) -> bool:
        return not len(self)


@dataclass(slots=True, frozen=True)
class ControllerSummary:
    """Network controller overview, or the reason one could not be built."""

    device_id: str | None = None
    name: str = ""
    status: Value | None = None
    rssi: tuple[Value, ...] = ()
    connected_devices: tuple[Device, ...] = ()
    error: str = ""
