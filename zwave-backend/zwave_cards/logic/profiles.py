"""Per-model card defaults expressed as data instead of card subclasses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping

from zwave_cards.logic.entity_classifier import EntityClassifier, default_classifier
from zwave_cards.logic.models import DeviceBundle, Snapshot


@dataclass(slots=True, frozen=True)
class DeviceProfile:
    card_type: str
    model: str
    title: str
    icon: str
    entity_domains: tuple[str, ...]
    suffixes: tuple[str, ...] = ()
    description: str = ""

    def build_bundle(
        self,
        snapshot: Snapshot | Mapping[str, Any],
        device_id: str,
        *,
        classifier: EntityClassifier | None = None,
    ) -> DeviceBundle:
        classifier = classifier or default_classifier()
        return classifier.classify(snapshot, device_id, self.entity_domains, self.suffixes)


class ProfileRegistry:
    """Explicit registry of device profiles keyed by card type."""

    def __init__(self, profiles: Iterable[DeviceProfile] = ()) -> None:
        self._profiles: dict[str, DeviceProfile] = {}
        for profile in profiles:
            self.register(profile)

    def register(self, profile: DeviceProfile) -> None:
        if profile.card_type in self._profiles:
            raise ValueError(f"Profile {profile.card_type!r} is already registered")
        self._profiles[profile.card_type] = profile

    def get(self, card_type: str) -> DeviceProfile | None:
        return self._profiles.get(card_type)

    def for_model(self, model: str | None) -> DeviceProfile | None:
        if not model:
            return None
        return next((profile for profile in self._profiles.values() if profile.model == model), None)

    def __iter__(self) -> Iterator[DeviceProfile]:
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)

    def __contains__(self, card_type: object) -> bool:
        return card_type in self._profiles


DEFAULT_PROFILES: tuple[DeviceProfile, ...] = (
    DeviceProfile(
        card_type="zwave-smart-plug",
        model="ZEN04 800LR",
        title="ZEN04 800LR - Smart Plug",
        icon="mdi:power-socket-us",
        entity_domains=("switch",),
        description="A card to control and monitor a Z-Wave smart plug device.",
    ),
    DeviceProfile(
        card_type="zwave-multi-relay",
        model="ZEN16",
        title="ZEN16 - Multi Relay",
        icon="mdi:garage-open-variant",
        entity_domains=("switch",),
        description="A card to control and monitor a Z-Wave multi relay device.",
    ),
    DeviceProfile(
        card_type="zwave-double-switch",
        model="ZEN30",
        title="ZEN30 - Double Switch",
        icon="mdi:ceiling-light-multiple-outline",
        entity_domains=("light", "switch"),
        description="A card to control and monitor a Z-Wave double switch device.",
    ),
    DeviceProfile(
        card_type="zwave-scene-controller",
        model="ZEN32",
        title="ZEN32 - Scene Controller",
        icon="mdi:gesture-double-tap",
        entity_domains=("switch", "light"),
        description="A card to control and monitor a Z-Wave scene controller.",
    ),
    DeviceProfile(
        card_type="zwave-dry-contact-relay",
        model="ZEN51",
        title="ZEN51 - Dry Contact Relay",
        icon="mdi:electric-switch",
        entity_domains=("switch",),
        description="A card to control and monitor a Z-Wave dry contact relay device.",
    ),
    DeviceProfile(
        card_type="zwave-double-relay",
        model="ZEN52",
        title="ZEN52 - Double Relay",
        icon="mdi:lightbulb-on-outline",
        entity_domains=("switch",),
        description="A card to control and monitor a Z-Wave double relay device.",
    ),
    DeviceProfile(
        card_type="zwave-dc-signal-sensor",
        model="ZEN55 LR",
        title="ZEN55 LR - DC Signal Sensor",
        icon="mdi:fire",
        entity_domains=("binary_sensor",),
        suffixes=("_smoke_detected", "_carbon_monoxide_detected"),
        description="A card to monitor a Z-Wave DC signal sensor device.",
    ),
    DeviceProfile(
        card_type="zwave-on-off-switch",
        model="ZEN71",
        title="ZEN71 - On/Off Switch",
        icon="mdi:toggle-switch-variant-off",
        entity_domains=("switch",),
        description="A card to control and monitor a Z-Wave on/off switch device.",
    ),
    DeviceProfile(
        card_type="zwave-open-close-sensor",
        model="ZSE41",
        title="ZSE41 - Open Close Sensor",
        icon="mdi:door-open",
        entity_domains=("binary_sensor",),
        description="A card to monitor a Z-Wave open close sensor device.",
    ),
    DeviceProfile(
        card_type="zwave-tilt-shock-sensor",
        model="ZSE43",
        title="ZSE43 - Tilt Shock Sensor",
        icon="mdi:angle-acute",
        entity_domains=("binary_sensor",),
        description="A card to monitor a Z-Wave tilt shock sensor device.",
    ),
    DeviceProfile(
        card_type="zwave-temperature-humidity-sensor",
        model="ZSE44",
        title="ZSE44 - Temperature Humidity Sensor",
        icon="mdi:thermometer",
        entity_domains=("sensor",),
        description="A card to monitor a Z-Wave temperature humidity sensor device.",
    ),
)

GENERIC_PROFILE = DeviceProfile(
    card_type="zwave-node-info",
    model="",
    title="Z-Wave Node Info",
    icon="mdi:z-wave",
    entity_domains=("switch", "light", "binary_sensor", "event"),
    description="A card to monitor any Z-Wave device.",
)


def default_registry() -> ProfileRegistry:
    """Return a new registry holding the built-in profiles."""

    return ProfileRegistry((*DEFAULT_PROFILES, GENERIC_PROFILE))
