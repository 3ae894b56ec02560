"""Per-card holders that recompute derived state on every snapshot."""

from __future__ import annotations

import logging
from typing import Any, Generic, Mapping, TypeVar

from zwave_cards.core.config import Settings
from zwave_cards.logic.change_detector import reconcile
from zwave_cards.logic.controller import summarize_controller
from zwave_cards.logic.entity_classifier import EntityClassifier, default_classifier
from zwave_cards.logic.layout import LayoutMode
from zwave_cards.logic.models import ControllerSummary, DeviceBundle, HealthPartitions, Snapshot
from zwave_cards.logic.node_categorizer import NodeFilterFlags, categorize
from zwave_cards.logic.profiles import DeviceProfile
from zwave_cards.services.resize_debouncer import ResizeDebouncer

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _PublishedState(Generic[T]):
    def __init__(self, label: str) -> None:
        self._label = label
        self._published: T | None = None
        self._revision = 0
        self._changed = False

    @property
    def revision(self) -> int:
        """Number of times the published value was replaced."""

        return self._revision

    @property
    def changed(self) -> bool:
        """Whether the last recompute replaced the published value."""

        return self._changed

    def _publish(self, candidate: T) -> T:
        published = reconcile(self._published, candidate)
        self._changed = published is not self._published
        if self._changed:
            self._revision += 1
            logger.debug("%s changed (revision %d)", self._label, self._revision)
        self._published = published
        return published


class DeviceCardState(_PublishedState[DeviceBundle]):
    """Hold the published bundle for one device card."""

    def __init__(
        self,
        profile: DeviceProfile,
        device_id: str,
        *,
        classifier: EntityClassifier | None = None,
    ) -> None:
        super().__init__(f"Bundle for {device_id}")
        self._profile = profile
        self._device_id = device_id
        self._classifier = classifier or default_classifier()

    @property
    def bundle(self) -> DeviceBundle | None:
        return self._published

    def recompute(self, snapshot: Snapshot | Mapping[str, Any]) -> DeviceBundle:
        candidate = self._profile.build_bundle(
            snapshot, self._device_id, classifier=self._classifier
        )
        return self._publish(candidate)


class NodeHealthState(_PublishedState[HealthPartitions]):
    """Hold the published node partitions for a node-states card."""

    def __init__(self, flags: NodeFilterFlags | None = None) -> None:
        super().__init__("Node partitions")
        self._flags = flags or NodeFilterFlags()

    @property
    def partitions(self) -> HealthPartitions | None:
        return self._published

    def recompute(self, snapshot: Snapshot | Mapping[str, Any]) -> HealthPartitions:
        return self._publish(categorize(snapshot, self._flags))


class ControllerCardState(_PublishedState[ControllerSummary]):
    """Hold the published controller summary for a controller card."""

    def __init__(self, device_id: str | None = None) -> None:
        super().__init__(f"Controller summary for {device_id or 'default hub'}")
        self._device_id = device_id

    @property
    def summary(self) -> ControllerSummary | None:
        return self._published

    def recompute(self, snapshot: Snapshot | Mapping[str, Any]) -> ControllerSummary:
        candidate = summarize_controller(snapshot, self._device_id)
        if candidate.error:
            logger.debug("Controller card error: %s", candidate.error)
        return self._publish(candidate)


class CardStore:
    """
    Long-lived card holders, created on first use.

    Device cards are keyed by the effective profile and device id, node-states
    cards by their filter flags, controller cards by the configured device id
    and layouts by the caller's card id.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._devices: dict[tuple[DeviceProfile, str], DeviceCardState] = {}
        self._nodes: dict[NodeFilterFlags, NodeHealthState] = {}
        self._controllers: dict[str | None, ControllerCardState] = {}
        self._layouts: dict[str, ResizeDebouncer] = {}

    def device(self, profile: DeviceProfile, device_id: str) -> DeviceCardState:
        key = (profile, device_id)
        state = self._devices.get(key)
        if state is None:
            state = self._devices[key] = DeviceCardState(profile, device_id)
        return state

    def nodes(self, flags: NodeFilterFlags) -> NodeHealthState:
        state = self._nodes.get(flags)
        if state is None:
            state = self._nodes[flags] = NodeHealthState(flags)
        return state

    def controller(self, device_id: str | None) -> ControllerCardState:
        state = self._controllers.get(device_id)
        if state is None:
            state = self._controllers[device_id] = ControllerCardState(device_id)
        return state

    def layout(self, card_id: str) -> ResizeDebouncer:
        debouncer = self._layouts.get(card_id)
        if debouncer is None:

            def _log_layout(mode: LayoutMode) -> None:
                logger.debug("Card %s settled on %s layout", card_id, mode.value)

            debouncer = ResizeDebouncer.from_settings(_log_layout, self._settings)
            self._layouts[card_id] = debouncer
        return debouncer

    def close(self) -> None:
        for debouncer in self._layouts.values():
            debouncer.cancel()
        self._layouts.clear()
