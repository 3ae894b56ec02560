"""Z-Wave controller (hub) selection and summary."""

from __future__ import annotations

from typing import Any, Mapping

from zwave_cards.logic.device_selector import get_zwave_device, get_zwave_hubs, get_zwave_non_hubs
from zwave_cards.logic.entity_classifier import CONTROLLER_STATUS_KEY
from zwave_cards.logic.models import ControllerSummary, Device, Snapshot, Value
from zwave_cards.logic.snapshot import coerce_snapshot

RSSI_KEY = "current_background_rssi"
CONTROLLER_DOMAINS = ("switch", "light", "sensor", "update")

NO_HUB_ERROR = "No Z-Wave hub found."
MULTIPLE_HUBS_ERROR = "Multiple Z-Wave hubs found. Please specify one."
INVALID_DEVICE_ERROR = "Invalid Z-Wave device configured."
NOT_A_CONTROLLER_ERROR = "Doesn't seem to be a Z-Wave Controller.."
DEFAULT_CONTROLLER_NAME = "Z-Wave Hub"


def _select_hub(snapshot: Snapshot, device_id: str | None) -> tuple[Device | None, str]:
    if device_id:
        device = get_zwave_device(snapshot, device_id)
        if device is None:
            return None, INVALID_DEVICE_ERROR
        return device, ""

    hubs = get_zwave_hubs(snapshot)
    if len(hubs) > 1:
        return None, MULTIPLE_HUBS_ERROR
    if not hubs:
        return None, NO_HUB_ERROR
    return hubs[0], ""


def summarize_controller(
    snapshot: Snapshot | Mapping[str, Any],
    device_id: str | None = None,
) -> ControllerSummary:
    """
    Describe the network controller.

    Selection problems are reported through ``ControllerSummary.error``
    rather than raised, so the card can show the message as-is.
    """

    snapshot = coerce_snapshot(snapshot)
    hub, error = _select_hub(snapshot, device_id)
    if hub is None:
        return ControllerSummary(device_id=device_id, error=error)

    status: Value | None = None
    rssi: list[Value] = []
    is_controller = False
    for entity in snapshot.entities.values():
        if entity.device_id != hub.id:
            continue
        if entity.translation_key == CONTROLLER_STATUS_KEY:
            is_controller = True
        if entity.hidden or entity.domain not in CONTROLLER_DOMAINS:
            continue
        value = snapshot.values.get(entity.entity_id)
        if value is None:
            continue
        if entity.translation_key == CONTROLLER_STATUS_KEY:
            status = value
        elif entity.translation_key == RSSI_KEY:
            rssi.append(value)

    if not is_controller:
        return ControllerSummary(device_id=hub.id, error=NOT_A_CONTROLLER_ERROR)

    return ControllerSummary(
        device_id=hub.id,
        name=hub.name or DEFAULT_CONTROLLER_NAME,
        status=status,
        rssi=tuple(rssi),
        connected_devices=tuple(get_zwave_non_hubs(snapshot)),
    )


def rssi_quality(raw: str | None) -> str | None:
    """Bucket a background RSSI reading in dBm."""

    if raw is None or raw == "N/A":
        return None
    try:
        rssi = int(float(raw))
    except (TypeError, ValueError):
        return None
    if rssi > -60:
        return "good"
    if rssi > -80:
        return "warning"
    return "bad"
