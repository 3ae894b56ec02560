from types import SimpleNamespace

import pytest

from zwave_cards.logic.features import Feature, NodeStatesCardConfig, has_feature
from zwave_cards.logic.profiles import GENERIC_PROFILE, DeviceProfile, ProfileRegistry, default_registry


def test_default_registry_contents():
    registry = default_registry()

    assert len(registry) == 12
    assert "zwave-double-relay" in registry
    assert registry.get("zwave-double-relay").model == "ZEN52"
    assert registry.for_model("ZSE44").entity_domains == ("sensor",)
    assert registry.for_model("nope") is None
    assert registry.for_model(None) is None


def test_registries_are_independent():
    first = default_registry()
    second = default_registry()
    first.register(DeviceProfile("custom", "X1", "X1", "mdi:x", ("switch",)))

    assert "custom" in first
    assert "custom" not in second


def test_duplicate_registration_rejected():
    registry = ProfileRegistry([GENERIC_PROFILE])

    with pytest.raises(ValueError):
        registry.register(GENERIC_PROFILE)


def test_has_feature():
    config = NodeStatesCardConfig(features=["compact"])

    assert has_feature(config, Feature.COMPACT)
    assert has_feature(config, "compact")
    assert not has_feature(config, Feature.HIDE_DEAD)
    assert not has_feature(None, Feature.COMPACT)
    assert not has_feature(NodeStatesCardConfig(), Feature.COMPACT)


def test_has_feature_with_missing_feature_list():
    assert not has_feature(SimpleNamespace(features=None), Feature.COMPACT)
    assert has_feature(SimpleNamespace(features=("hide_live",)), Feature.HIDE_LIVE)


def test_node_states_config_flags():
    config = NodeStatesCardConfig(features=["hide_dead", "compact"], unknown_key=True)
    flags = config.filter_flags()

    assert flags.hide_dead is True
    assert flags.hide_live is False
    assert flags.hide_asleep is False
