"""Fuzzy device lookup used by card editors and stub configs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from rapidfuzz import fuzz, process
from rapidfuzz.utils import default_process

from zwave_cards.logic.device_selector import get_zwave_devices, get_zwave_non_hubs
from zwave_cards.logic.models import Device, Snapshot
from zwave_cards.logic.snapshot import coerce_snapshot


@dataclass(slots=True, frozen=True)
class DeviceMatch:
    device: Device
    score: float


def _search_text(device: Device) -> str:
    parts = [device.display_name or "", device.name or "", device.model or "", device.manufacturer or ""]
    return " ".join(part for part in parts if part)


class DeviceSearch:
    def __init__(self, *, min_score: int = 65) -> None:
        self._min_score = min_score

    def search(
        self,
        snapshot: Snapshot | Mapping[str, Any],
        query: str,
        *,
        limit: int = 5,
        model: str | None = None,
        area: str | None = None,
    ) -> list[DeviceMatch]:
        """Return Z-Wave devices ordered by fuzzy similarity to the query.

        ``model`` takes precedence over ``area`` when both are given.
        """

        if not query:
            return []
        snapshot = coerce_snapshot(snapshot)
        devices = get_zwave_devices(snapshot, model=model, area=area)
        choices: dict[str, str] = {
            device.id: _search_text(device) for device in devices if _search_text(device)
        }
        if not choices:
            return []

        by_id = {device.id: device for device in devices}
        matches = process.extract(
            query, choices, scorer=fuzz.WRatio, processor=default_process, limit=limit
        )
        results: list[DeviceMatch] = []
        for _, score, device_id in matches:
            if score < self._min_score:
                continue
            results.append(DeviceMatch(device=by_id[device_id], score=float(score)))
        return results


def stub_device_id(snapshot: Snapshot | Mapping[str, Any], model: str | None = None) -> str:
    """Pick the first matching device for a freshly added card, or ``""``."""

    devices = get_zwave_devices(snapshot, model=model) if model else get_zwave_non_hubs(snapshot)
    return devices[0].id if devices else ""
