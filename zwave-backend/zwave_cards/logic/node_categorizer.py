"""Fleet health: split Z-Wave nodes into dead, live and asleep groups."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, Iterable, Mapping

from zwave_cards.logic.device_selector import get_zwave_non_hubs
from zwave_cards.logic.entity_classifier import EntityClassifier, default_classifier
from zwave_cards.logic.models import Device, HealthPartitions, NodeRecord, NodeStatus, Snapshot
from zwave_cards.logic.snapshot import coerce_snapshot

_HOUR_MS = 60 * 60 * 1000


class Freshness(StrEnum):
    RECENT = "recent"
    STALE = "stale"
    OLD = "old"
    UNKNOWN = "unknown"


@dataclass(slots=True, frozen=True)
class NodeFilterFlags:
    """Drop whole partitions from the result."""

    hide_dead: bool = False
    hide_live: bool = False
    hide_asleep: bool = False


def parse_last_seen(raw: str | None) -> int | None:
    """Parse an ISO-8601 timestamp into epoch milliseconds, ``None`` if unusable."""

    if not raw or not isinstance(raw, str):
        return None
    try:
        parsed = datetime.fromisoformat(raw.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


def build_node_record(
    snapshot: Snapshot | Mapping[str, Any],
    device: Device,
    *,
    classifier: EntityClassifier | None = None,
) -> NodeRecord:
    classifier = classifier or default_classifier()
    bundle = classifier.classify(snapshot, device.id, ("sensor",))
    last_seen_value = bundle.last_seen
    return NodeRecord(
        device_id=device.id,
        name=device.display_name,
        status=bundle.node_status,
        last_seen_value=last_seen_value,
        last_seen=parse_last_seen(last_seen_value.state) if last_seen_value else None,
    )


def _by_recency(records: Iterable[NodeRecord]) -> tuple[NodeRecord, ...]:
    # sorted() is stable, so records without a timestamp keep encounter order
    return tuple(
        sorted(
            records,
            key=lambda record: (record.last_seen is None, -(record.last_seen or 0)),
        )
    )


def categorize_nodes(
    records: Iterable[NodeRecord],
    flags: NodeFilterFlags | None = None,
) -> HealthPartitions:
    """Partition node records; unknown or missing status counts as dead."""

    flags = flags or NodeFilterFlags()
    dead: list[NodeRecord] = []
    live: list[NodeRecord] = []
    asleep: list[NodeRecord] = []
    for record in records:
        status = record.status_state
        if status == NodeStatus.ALIVE.value:
            live.append(record)
        elif status == NodeStatus.ASLEEP.value:
            asleep.append(record)
        else:
            dead.append(record)

    return HealthPartitions(
        dead=() if flags.hide_dead else tuple(dead),
        live=() if flags.hide_live else _by_recency(live),
        asleep=() if flags.hide_asleep else _by_recency(asleep),
    )


def categorize(
    snapshot: Snapshot | Mapping[str, Any],
    flags: NodeFilterFlags | None = None,
    *,
    classifier: EntityClassifier | None = None,
) -> HealthPartitions:
    """Build node records for every Z-Wave non-hub device and partition them."""

    snapshot = coerce_snapshot(snapshot)
    records = [
        build_node_record(snapshot, device, classifier=classifier)
        for device in get_zwave_non_hubs(snapshot)
    ]
    return categorize_nodes(records, flags)


def last_seen_freshness(last_seen_ms: int | None, now_ms: int) -> Freshness:
    if last_seen_ms is None:
        return Freshness.UNKNOWN
    age_hours = (now_ms - last_seen_ms) / _HOUR_MS
    if age_hours < 2:
        return Freshness.RECENT
    if age_hours < 24:
        return Freshness.STALE
    return Freshness.OLD
