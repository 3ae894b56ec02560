import pytest


def _device(device_id: str, name: str, model: str, *, labels=(), integration="zwave_js", **extra) -> dict:
    return {
        "id": device_id,
        "name": name,
        "manufacturer": "Zooz",
        "model": model,
        "labels": list(labels),
        "identifiers": [[integration, f"{device_id}-node"]],
        **extra,
    }


def _entity(entity_id: str, device_id: str, **extra) -> dict:
    return {"entity_id": entity_id, "device_id": device_id, **extra}


def _state(entity_id: str, state: str, **attributes) -> dict:
    return {"entity_id": entity_id, "state": state, "attributes": attributes}


@pytest.fixture
def raw_snapshot() -> dict:
    devices = [
        _device("hub", "Z-Stick", "ZST39", labels=("hub",)),
        _device("plug", "Smart Plug", "ZEN04 800LR", name_by_user="Kitchen Plug", area_id="kitchen"),
        _device("smoke", "Smoke Sensor", "ZEN55 LR", area_id="hallway"),
        _device("door", "Front Door", "ZSE41", area_id="hallway"),
        _device("bulb", "Hue Bulb", "LCT015", integration="hue"),
    ]
    entities = [
        _entity("sensor.z_stick_status", "hub", translation_key="controller_status", entity_category="diagnostic"),
        _entity("sensor.z_stick_rssi_1", "hub", translation_key="current_background_rssi"),
        _entity("sensor.z_stick_rssi_2", "hub", translation_key="current_background_rssi"),
        _entity("switch.kitchen_plug", "plug"),
        _entity("update.kitchen_plug_firmware", "plug", entity_category="config"),
        _entity("sensor.kitchen_plug_last_seen", "plug", entity_category="diagnostic", translation_key="last_seen"),
        _entity("sensor.kitchen_plug_node_status", "plug", entity_category="diagnostic", translation_key="node_status"),
        _entity("sensor.kitchen_plug_electric_consumption_w", "plug"),
        _entity("sensor.kitchen_plug_temperature", "plug"),
        _entity("sensor.kitchen_plug_hidden", "plug", hidden=True),
        _entity("button.kitchen_plug_ping", "plug", entity_category="config"),
        _entity("sensor.kitchen_plug_no_state", "plug"),
        _entity("binary_sensor.smoke_sensor_smoke_detected", "smoke"),
        _entity("binary_sensor.smoke_sensor_carbon_monoxide_detected", "smoke"),
        _entity("sensor.smoke_sensor_node_status", "smoke", entity_category="diagnostic"),
        _entity("sensor.smoke_sensor_battery_level", "smoke", entity_category="diagnostic"),
        _entity("sensor.front_door_node_status", "door", entity_category="diagnostic"),
        _entity("sensor.front_door_last_seen", "door", entity_category="diagnostic"),
        _entity("binary_sensor.front_door_door", "door"),
        _entity("light.hue_bulb", "bulb"),
    ]
    states = [
        _state("sensor.z_stick_status", "ready"),
        _state("sensor.z_stick_rssi_1", "-95"),
        _state("sensor.z_stick_rssi_2", "-55"),
        _state("switch.kitchen_plug", "on"),
        _state("update.kitchen_plug_firmware", "off", device_class="firmware"),
        _state("sensor.kitchen_plug_last_seen", "2024-05-01T12:00:00+00:00", device_class="timestamp"),
        _state("sensor.kitchen_plug_node_status", "alive"),
        _state(
            "sensor.kitchen_plug_electric_consumption_w",
            "12.5",
            device_class="power",
            state_class="measurement",
        ),
        _state(
            "sensor.kitchen_plug_temperature",
            "21.3",
            device_class="temperature",
            state_class="measurement",
        ),
        _state("sensor.kitchen_plug_hidden", "1"),
        _state("button.kitchen_plug_ping", "unknown"),
        _state("binary_sensor.smoke_sensor_smoke_detected", "off", device_class="smoke"),
        _state("binary_sensor.smoke_sensor_carbon_monoxide_detected", "off", device_class="carbon_monoxide"),
        _state("sensor.smoke_sensor_node_status", "dead"),
        _state("sensor.smoke_sensor_battery_level", "87", device_class="battery", state_class="measurement"),
        _state("sensor.front_door_node_status", "asleep"),
        _state("sensor.front_door_last_seen", "2024-05-01T10:00:00Z", device_class="timestamp"),
        _state("binary_sensor.front_door_door", "off", device_class="door"),
        _state("light.hue_bulb", "on"),
    ]
    return {
        "devices": {device["id"]: device for device in devices},
        "entities": {entity["entity_id"]: entity for entity in entities},
        "states": {state["entity_id"]: state for state in states},
    }
