import pytest

from zwave_cards.core.validation import SnapshotValidationError
from zwave_cards.logic.change_detector import structurally_equal
from zwave_cards.logic.entity_classifier import EntityClassifier, EntityKind, classify
from zwave_cards.logic.models import Entity, Snapshot, Value


def _ids(values) -> list[str]:
    return [value.entity_id for value in values]


def test_plug_bundle(raw_snapshot):
    bundle = classify(raw_snapshot, "plug", ["switch"])

    assert bundle.found is True
    assert bundle.name == "Kitchen Plug"
    assert bundle.manufacturer == "Zooz"
    assert bundle.model == "ZEN04 800LR"
    assert bundle.is_controller is False
    assert bundle.firmware.entity_id == "update.kitchen_plug_firmware"
    assert bundle.last_seen.state == "2024-05-01T12:00:00+00:00"
    assert bundle.node_status.state == "alive"
    assert bundle.battery is None
    assert _ids(bundle.statistics) == ["sensor.kitchen_plug_electric_consumption_w"]
    assert _ids(bundle.entities) == ["switch.kitchen_plug", "sensor.kitchen_plug_temperature"]
    assert bundle.named == ()


def test_hidden_unlisted_domain_and_stateless_entities_are_skipped(raw_snapshot):
    bundle = classify(raw_snapshot, "plug", ["switch"])
    all_ids = _ids(bundle.entities) + _ids(bundle.statistics) + _ids(bundle.named)

    assert "sensor.kitchen_plug_hidden" not in all_ids
    assert "button.kitchen_plug_ping" not in all_ids
    assert "sensor.kitchen_plug_no_state" not in all_ids


def test_suffix_matchers_fill_named_bucket(raw_snapshot):
    bundle = classify(
        raw_snapshot,
        "smoke",
        ["binary_sensor"],
        ["_smoke_detected", "_carbon_monoxide_detected"],
    )

    assert _ids(bundle.named) == [
        "binary_sensor.smoke_sensor_smoke_detected",
        "binary_sensor.smoke_sensor_carbon_monoxide_detected",
    ]
    assert bundle.node_status.state == "dead"
    assert bundle.battery.state == "87"
    assert bundle.entities == ()


def test_controller_flag_is_set_for_hub(raw_snapshot):
    assert classify(raw_snapshot, "hub", []).is_controller is True


def test_controller_flag_ignores_domain_filter():
    snapshot = Snapshot(
        entities={
            "button.stick_status": Entity("button.stick_status", "hub", translation_key="controller_status"),
        },
        values={"button.stick_status": Value("button.stick_status", "ready")},
    )

    bundle = classify(snapshot, "hub", ["switch"])

    assert bundle.is_controller is True
    assert bundle.entities == ()


def test_device_without_entities_yields_empty_bundle():
    bundle = classify({"devices": {}, "entities": {}, "states": {}}, "missing", ["switch"])

    assert bundle.found is False
    assert bundle.firmware is None
    assert bundle.last_seen is None
    assert bundle.node_status is None
    assert bundle.battery is None
    assert bundle.named == ()
    assert bundle.statistics == ()
    assert bundle.entities == ()
    assert bundle.is_controller is False


def test_known_device_with_zero_matching_entities(raw_snapshot):
    bundle = classify(raw_snapshot, "bulb", ["switch"])

    assert bundle.found is True
    assert bundle.name == "Hue Bulb"
    assert bundle.entities == ()


def test_classification_is_deterministic(raw_snapshot):
    first = classify(raw_snapshot, "plug", ["switch"])
    second = classify(raw_snapshot, "plug", ["switch"])

    assert first is not second
    assert structurally_equal(first, second)


def test_wrong_argument_types_raise():
    with pytest.raises(SnapshotValidationError):
        classify([], "plug", ["switch"])
    with pytest.raises(SnapshotValidationError):
        classify({}, 42, ["switch"])
    with pytest.raises(SnapshotValidationError):
        classify({}, "plug", "switch")


def _pair(entity_id: str, translation_key=None, category=None, **attributes):
    return (
        Entity(entity_id, "dev", entity_category=category, translation_key=translation_key),
        Value(entity_id, "1", attributes),
    )


def test_firmware_wins_over_last_seen():
    entity, value = _pair("sensor.dev_firmware", translation_key="last_seen")
    assert EntityClassifier().classify_entity(entity, value) == EntityKind.FIRMWARE


def test_last_seen_wins_over_node_status():
    entity, value = _pair("sensor.dev_node_status", translation_key="last_seen")
    assert EntityClassifier().classify_entity(entity, value) == EntityKind.LAST_SEEN


def test_battery_wins_over_named_suffix():
    entity, value = _pair("sensor.dev_level", device_class="battery", state_class="measurement")
    assert EntityClassifier().classify_entity(entity, value, ("_level",)) == EntityKind.BATTERY


def test_named_suffix_wins_over_statistic():
    entity, value = _pair("sensor.dev_power", device_class="power", state_class="measurement")
    assert EntityClassifier().classify_entity(entity, value, ("_power",)) == EntityKind.NAMED


def test_legacy_battery_level_sensor():
    entity, value = _pair("sensor.dev_battery_level", category="diagnostic")
    assert EntityClassifier().classify_entity(entity, value) == EntityKind.BATTERY


def test_fallback_is_generic_entity():
    entity, value = _pair("switch.dev")
    assert EntityClassifier().classify_entity(entity, value) == EntityKind.ENTITY


def test_first_slot_match_is_kept():
    snapshot = Snapshot(
        entities={
            "sensor.a_node_status": Entity("sensor.a_node_status", "dev"),
            "sensor.b_node_status": Entity("sensor.b_node_status", "dev"),
        },
        values={
            "sensor.a_node_status": Value("sensor.a_node_status", "alive"),
            "sensor.b_node_status": Value("sensor.b_node_status", "dead"),
        },
    )

    assert classify(snapshot, "dev", []).node_status.entity_id == "sensor.a_node_status"


def test_malformed_neighbour_device_does_not_break_classification(raw_snapshot):
    raw_snapshot["devices"]["bulb"]["labels"] = 5
    raw_snapshot["devices"]["bulb"]["identifiers"] = 5
    raw_snapshot["entities"]["switch.kitchen_plug"]["hidden"] = "false"

    bundle = classify(raw_snapshot, "plug", ["switch"])

    assert bundle.found is True
    assert _ids(bundle.entities)[0] == "switch.kitchen_plug"
