"""Coalesce bursts of width measurements before choosing a layout."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from zwave_cards.core.config import Settings
from zwave_cards.core.validation import require_number
from zwave_cards.logic.layout import COMPACT_BREAKPOINT_PX, LayoutMode, select_layout

logger = logging.getLogger(__name__)

LayoutCallback = Callable[[LayoutMode], None]


class ResizeDebouncer:
    """Trailing-edge debounce of resize notifications.

    Every call to :meth:`notify` restarts the window; once no measurement has
    arrived for ``delay_seconds`` the latest width is run through
    :func:`select_layout` and the callback receives the result.
    """

    def __init__(
        self,
        callback: LayoutCallback,
        *,
        delay_seconds: float = 0.1,
        breakpoint_px: int = COMPACT_BREAKPOINT_PX,
    ) -> None:
        self._callback = callback
        self._delay = delay_seconds
        self._breakpoint = breakpoint_px
        self._pending_width: float | None = None
        self._handle: asyncio.TimerHandle | None = None
        self._layout: LayoutMode | None = None

    @classmethod
    def from_settings(cls, callback: LayoutCallback, settings: Settings) -> ResizeDebouncer:
        return cls(
            callback,
            delay_seconds=settings.resize_debounce_seconds,
            breakpoint_px=settings.compact_breakpoint_px,
        )

    @property
    def layout(self) -> LayoutMode | None:
        return self._layout

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def notify(self, width_px: float) -> None:
        """Record a measurement; must be called from inside a running loop."""

        width = require_number(width_px, "width_px")
        loop = asyncio.get_running_loop()
        self._pending_width = width
        if self._handle is not None:
            self._handle.cancel()
        self._handle = loop.call_later(self._delay, self._fire)

    def flush(self) -> LayoutMode | None:
        """Apply the pending measurement immediately."""

        if self._handle is None:
            return self._layout
        self._handle.cancel()
        self._fire()
        return self._layout

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending_width = None

    def _fire(self) -> None:
        self._handle = None
        width = self._pending_width
        self._pending_width = None
        if width is None:
            return
        self._layout = select_layout(width, self._breakpoint)
        logger.debug("Layout for width %s -> %s", width, self._layout.value)
        self._callback(self._layout)
