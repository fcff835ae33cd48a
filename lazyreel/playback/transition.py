"""Fixed-duration hand-off from the current document to the next one."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .timers import TimerHandle, TimerScheduler

logger = logging.getLogger(__name__)

DEFAULT_TRANSITION_SECONDS = 1.0


@dataclass(frozen=True)
class Transition:
    """One in-flight hand-off; ``content`` is the incoming document."""

    from_path: str | None
    to_path: str
    content: str
    started_at: float
    duration: float

    def progress(self, now: float) -> float:
        """Fraction of the hand-off elapsed at ``now``, clamped to ``[0, 1]``."""
        if self.duration <= 0:
            return 1.0
        return max(0.0, min(1.0, (now - self.started_at) / self.duration))


class TransitionAnimator:
    """Runs at most one transition and reports completion once."""

    def __init__(self, scheduler: TimerScheduler, *, duration: float = DEFAULT_TRANSITION_SECONDS) -> None:
        self._scheduler = scheduler
        self.duration = duration
        self._active: Transition | None = None
        self._timer: TimerHandle | None = None

    @property
    def active(self) -> Transition | None:
        return self._active

    def start(
        self,
        from_path: str | None,
        to_path: str,
        content: str,
        on_complete: Callable[[Transition], None],
        duration: float | None = None,
    ) -> Transition:
        """Begin a hand-off; ``on_complete`` runs after ``duration`` seconds."""
        self.cancel()
        transition = Transition(
            from_path=from_path,
            to_path=to_path,
            content=content,
            started_at=self._scheduler.now(),
            duration=self.duration if duration is None else max(0.0, duration),
        )
        self._active = transition

        def finish() -> None:
            if self._active is not transition:
                return
            self._active = None
            self._timer = None
            on_complete(transition)

        self._timer = self._scheduler.call_later(transition.duration, finish)
        logger.info("transition %s -> %s (%.2fs)", from_path, to_path, transition.duration)
        return transition

    def progress(self) -> float:
        if self._active is None:
            return 0.0
        return self._active.progress(self._scheduler.now())

    def cancel(self) -> bool:
        """Abandon the active transition without committing; return if one ran."""
        if self._active is None:
            return False
        if self._timer is not None:
            self._timer.cancel()
        logger.info("transition to %s abandoned", self._active.to_path)
        self._active = None
        self._timer = None
        return True


__all__ = ["DEFAULT_TRANSITION_SECONDS", "Transition", "TransitionAnimator"]
