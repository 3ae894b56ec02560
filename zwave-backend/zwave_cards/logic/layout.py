"""Width based layout selection for device cards."""

from __future__ import annotations

from enum import StrEnum

from zwave_cards.core.validation import require_number
from zwave_cards.logic.models import DeviceBundle, Value

COMPACT_BREAKPOINT_PX = 450


class LayoutMode(StrEnum):
    COMPACT = "compact"
    FULL = "full"


def select_layout(width_px: float, breakpoint_px: int = COMPACT_BREAKPOINT_PX) -> LayoutMode:
    """Cards narrower than the breakpoint use the compact layout."""

    width = require_number(width_px, "width_px")
    return LayoutMode.COMPACT if width < breakpoint_px else LayoutMode.FULL


def fold_for_layout(bundle: DeviceBundle, mode: LayoutMode) -> tuple[Value, ...]:
    """Return the sensor row for a card.

    In compact mode the node status and last seen values join the generic
    entity list instead of getting their own header fields.
    """

    if mode != LayoutMode.COMPACT:
        return bundle.entities
    extras = tuple(value for value in (bundle.node_status, bundle.last_seen) if value is not None)
    return bundle.entities + extras
