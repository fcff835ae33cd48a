"""Single-threaded timer queue polled by the runtime loop.

Callbacks run inside ``run_due`` on the caller's thread. While a callback
runs, ``now()`` reports that timer's deadline plus however long the callback
has been running, so periodic timers re-armed from a callback keep a fixed
cadence when the loop polls late, and work done inside a callback still
counts as elapsed time.

Timers armed during a ``run_due`` pass wait for the next pass even when they
are already due, so a loop that stalled catches up one step per pass and can
repaint in between.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class TimerHandle:
    """Cancelable reference to one scheduled callback."""

    __slots__ = ("deadline", "callback", "cancelled")

    def __init__(self, deadline: float, callback: Callable[[], None]) -> None:
        self.deadline = deadline
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class TimerScheduler:
    """Heap of one-shot timers ordered by deadline, then by scheduling order."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._heap: list[tuple[float, int, TimerHandle]] = []
        self._sequence = itertools.count()
        self._dispatch_time: float | None = None
        self._dispatch_started = 0.0

    def now(self) -> float:
        if self._dispatch_time is not None:
            return self._dispatch_time + max(0.0, self._clock() - self._dispatch_started)
        return self._clock()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule ``callback`` to run ``delay`` seconds from ``now()``."""
        handle = TimerHandle(self.now() + max(0.0, float(delay)), callback)
        heapq.heappush(self._heap, (handle.deadline, next(self._sequence), handle))
        return handle

    def _discard_cancelled(self) -> None:
        while self._heap and self._heap[0][2].cancelled:
            heapq.heappop(self._heap)

    def next_deadline(self) -> float | None:
        """Return the earliest live deadline, or ``None`` when idle."""
        self._discard_cancelled()
        if not self._heap:
            return None
        return self._heap[0][0]

    def pending_count(self) -> int:
        return sum(1 for _deadline, _seq, handle in self._heap if not handle.cancelled)

    def run_due(self) -> int:
        """Run the timers due now that were armed before this call; return how many ran."""
        limit = self._clock()
        fence = next(self._sequence)
        deferred: list[tuple[float, int, TimerHandle]] = []
        ran = 0
        while True:
            self._discard_cancelled()
            if not self._heap or self._heap[0][0] > limit:
                break
            entry = heapq.heappop(self._heap)
            deadline, sequence, handle = entry
            if sequence > fence:
                deferred.append(entry)
                continue
            self._dispatch_time = deadline
            self._dispatch_started = self._clock()
            try:
                handle.callback()
            finally:
                self._dispatch_time = None
            ran += 1
        for entry in deferred:
            heapq.heappush(self._heap, entry)
        return ran


__all__ = ["TimerHandle", "TimerScheduler"]
