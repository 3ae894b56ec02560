"""Decide whether a reading is statistic data or a status indicator."""

from __future__ import annotations

from zwave_cards.logic.models import Value

STATISTIC_STATE_CLASSES = frozenset({"measurement", "total_increasing"})
CLIMATE_DEVICE_CLASSES = frozenset({"temperature", "humidity"})


def is_statistic(value: Value) -> bool:
    """
    Return ``True`` when a value belongs in the statistics bucket.

    Rules are evaluated in order; climate readings are excluded before the
    generic measurement check so temperature and humidity stay visible as
    status entities.

    Parameters
    ----------
    value: Value
        The entity reading, including its attribute map.

    Returns
    -------
    bool
        ``True`` for power/energy-like measurements, heat readings and events.
    """

    if value.state_class in STATISTIC_STATE_CLASSES:
        return value.device_class not in CLIMATE_DEVICE_CLASSES
    if value.device_class == "heat":
        return True
    if value.domain == "event":
        return True
    return False
