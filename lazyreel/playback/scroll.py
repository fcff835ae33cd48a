"""Timer-driven virtual scrolling through the current document.

The driver keeps exactly one timer armed. Each tick either advances the
offset by ``step`` rows or, once nothing is left to scroll, reports
end-of-document. Documents that fit the viewport are held for
``grace_seconds`` first so they stay visible.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .timers import TimerHandle, TimerScheduler

logger = logging.getLogger(__name__)

DEFAULT_SCROLL_STEP = 1
DEFAULT_GRACE_SECONDS = 1.5


class ScrollDriver:
    """Single repeating scroll timer for one playback session."""

    def __init__(
        self,
        scheduler: TimerScheduler,
        *,
        on_scroll: Callable[[int], None],
        on_end: Callable[[], None],
        step: int = DEFAULT_SCROLL_STEP,
        grace_seconds: float = DEFAULT_GRACE_SECONDS,
    ) -> None:
        if step <= 0:
            raise ValueError("scroll step must be >= 1")
        self._scheduler = scheduler
        self._on_scroll = on_scroll
        self._on_end = on_end
        self.step = step
        self.grace_seconds = grace_seconds
        self._timer: TimerHandle | None = None
        self._holding = False
        self._offset = 0
        self._max_offset = 0
        self._interval = 0.0

    @property
    def active(self) -> bool:
        return self._timer is not None

    @property
    def holding(self) -> bool:
        """Whether the driver is in the short-document grace hold."""
        return self._timer is not None and self._holding

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def interval(self) -> float:
        return self._interval

    def start(self, total_rows: int, viewport_rows: int, interval: float, offset: int = 0) -> None:
        """Retire any live timer and begin driving a document from ``offset``."""
        if interval <= 0:
            raise ValueError("tick interval must be positive")
        self.stop()
        scrollable = total_rows - viewport_rows
        self._interval = interval
        self._max_offset = max(0, scrollable)
        self._offset = max(0, min(offset, self._max_offset))
        if total_rows <= 0 or scrollable <= 0:
            self._holding = True
            logger.debug("holding short document for %.2fs", self.grace_seconds)
            self._timer = self._scheduler.call_later(self.grace_seconds, self._finish_hold)
            return
        self._holding = False
        self._timer = self._scheduler.call_later(interval, self._tick)

    def set_interval(self, interval: float) -> None:
        """Re-arm a ticking driver at ``interval``; the grace hold is unaffected."""
        if interval <= 0:
            raise ValueError("tick interval must be positive")
        self._interval = interval
        if self._timer is None or self._holding:
            return
        self._timer.cancel()
        self._timer = self._scheduler.call_later(interval, self._tick)

    def stop(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._holding = False

    def _tick(self) -> None:
        self._timer = None
        remaining = self._max_offset - self._offset
        if remaining <= 0:
            self._on_end()
            return
        self._offset += min(self.step, remaining)
        self._timer = self._scheduler.call_later(self._interval, self._tick)
        self._on_scroll(self._offset)

    def _finish_hold(self) -> None:
        self._timer = None
        self._holding = False
        self._on_end()


__all__ = ["DEFAULT_SCROLL_STEP", "DEFAULT_GRACE_SECONDS", "ScrollDriver"]
