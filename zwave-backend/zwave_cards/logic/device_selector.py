"""Helpers for picking Z-Wave devices out of a snapshot."""

from __future__ import annotations

from typing import Any, Mapping

from zwave_cards.logic.models import Device, Snapshot
from zwave_cards.logic.snapshot import coerce_snapshot

ZWAVE_INTEGRATION = "zwave_js"
HUB_LABEL = "hub"


def is_zwave_device(device: Device) -> bool:
    return any(ZWAVE_INTEGRATION in parts for parts in device.identifiers)


def get_zwave_devices(
    snapshot: Snapshot | Mapping[str, Any],
    *,
    hubs_only: bool = False,
    no_hubs: bool = False,
    model: str | None = None,
    area: str | None = None,
) -> list[Device]:
    """
    Return Z-Wave devices in snapshot order, optionally narrowed.

    Only the first applicable filter is used: ``hubs_only`` wins over
    ``no_hubs``, which wins over ``model``, which wins over ``area``.
    """

    snapshot = coerce_snapshot(snapshot)
    devices = [device for device in snapshot.devices.values() if is_zwave_device(device)]

    if hubs_only:
        return [device for device in devices if device.has_label(HUB_LABEL)]
    if no_hubs:
        return [device for device in devices if not device.has_label(HUB_LABEL)]
    if model:
        return [device for device in devices if device.model == model]
    if area:
        return [device for device in devices if device.area_id == area]
    return devices


def get_zwave_hubs(snapshot: Snapshot | Mapping[str, Any]) -> list[Device]:
    return get_zwave_devices(snapshot, hubs_only=True)


def get_zwave_non_hubs(snapshot: Snapshot | Mapping[str, Any]) -> list[Device]:
    return get_zwave_devices(snapshot, no_hubs=True)


def get_zwave_device(snapshot: Snapshot | Mapping[str, Any], device_id: str) -> Device | None:
    """Return the device only when it exists and belongs to the Z-Wave integration."""

    snapshot = coerce_snapshot(snapshot)
    device = snapshot.devices.get(device_id)
    if device is None or not is_zwave_device(device):
        return None
    return device
