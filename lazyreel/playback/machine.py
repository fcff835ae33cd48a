"""Playback state machine: selection, play/pause, and auto-advance.

``PlaybackStateMachine`` is the only writer of ``PlaybackSession``. The
scroll driver, look-ahead cache, and transition animator report back through
callbacks; every asynchronous result carries the selection generation it was
issued for and is dropped once that generation is stale.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ..document_tree import predecessor_path, successor_path
from ..errors import ConfigurationMissing
from .fetch import CONTENT_ROLE, ContentRequester
from .lookahead import LookAheadCache
from .scroll import DEFAULT_GRACE_SECONDS, DEFAULT_SCROLL_STEP, ScrollDriver
from .session import PlaybackSession, PlaybackStatus
from .timers import TimerHandle, TimerScheduler
from .transition import DEFAULT_TRANSITION_SECONDS, Transition, TransitionAnimator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaybackTiming:
    """Timing constants controlling playback behavior."""

    base_tick_seconds: float = 0.2
    scroll_step: int = DEFAULT_SCROLL_STEP
    grace_seconds: float = DEFAULT_GRACE_SECONDS
    transition_seconds: float = DEFAULT_TRANSITION_SECONDS
    advance_retry_seconds: float = 0.1
    advance_max_retries: int = 20


def content_row_count(content: str | None) -> int:
    """Number of display rows a document occupies (unwrapped)."""
    if not content:
        return 0
    return len(content.splitlines())


class PlaybackStateMachine:
    """Owns the playback session and mediates every transition."""

    def __init__(
        self,
        requester: ContentRequester,
        scheduler: TimerScheduler,
        *,
        timing: PlaybackTiming | None = None,
        credentials_present: Callable[[], bool] | None = None,
        prepare_content: Callable[[str, str], None] | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.timing = timing or PlaybackTiming()
        self.session = PlaybackSession()
        self._requester = requester
        self._scheduler = scheduler
        self._credentials_present = credentials_present or (lambda: True)
        self._prepare_content = prepare_content
        self._on_change = on_change
        self._sequence: tuple[str, ...] = ()
        self._viewport_rows = 1
        self._selection_generation = 0
        self._advance_attempts = 0
        self._advance_timer: TimerHandle | None = None
        self.lookahead = LookAheadCache(requester, can_request=self._credentials_present)
        self.scroll = ScrollDriver(
            scheduler,
            on_scroll=self._on_scroll,
            on_end=self.advance,
            step=self.timing.scroll_step,
            grace_seconds=self.timing.grace_seconds,
        )
        self.animator = TransitionAnimator(scheduler, duration=self.timing.transition_seconds)

    @property
    def sequence(self) -> tuple[str, ...]:
        return self._sequence

    @property
    def transition(self) -> Transition | None:
        return self.animator.active

    @property
    def viewport_rows(self) -> int:
        return self._viewport_rows

    def tick_interval(self) -> float:
        """Seconds between scroll steps at the current speed."""
        return self.timing.base_tick_seconds / self.session.speed_multiplier

    def next_path(self) -> str | None:
        return successor_path(self._sequence, self.session.current_path)

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def _cancel_advance_retry(self) -> None:
        if self._advance_timer is not None:
            self._advance_timer.cancel()
            self._advance_timer = None
        self._advance_attempts = 0

    def _start_scroll(self) -> None:
        session = self.session
        self.scroll.start(
            content_row_count(session.content),
            self._viewport_rows,
            self.tick_interval(),
            offset=session.scroll_offset,
        )

    def _on_scroll(self, offset: int) -> None:
        self.session.scroll_offset = offset
        self._notify()

    def _halt(self) -> None:
        """Stop every timer-driven activity tied to the current selection."""
        self.animator.cancel()
        self._cancel_advance_retry()
        self.scroll.stop()

    def load_sequence(self, paths: Sequence[str]) -> None:
        """Install a new ordered sequence and re-derive the look-ahead."""
        self._sequence = tuple(paths)
        session = self.session
        if session.current_path is not None and session.current_path not in self._sequence:
            logger.info("%s left the sequence; resetting", session.current_path)
            self._halt()
            self._selection_generation += 1
            self.lookahead.clear()
            session.current_path = None
            session.content = None
            session.is_playing = False
            session.status = PlaybackStatus.IDLE
            session.error_message = None
            session.scroll_offset = 0
        else:
            self.lookahead.refresh(session.current_path, self._sequence)
        self._notify()

    def select_document(self, path: str, auto_play: bool = False, use_cache: bool = False) -> None:
        """Make ``path`` current and load it, overriding anything in flight."""
        session = self.session
        self._halt()
        self._selection_generation += 1
        generation = self._selection_generation
        cached = self.lookahead.entry_for(path) if use_cache else None

        session.current_path = path
        session.content = None
        session.scroll_offset = 0
        session.error_message = None
        session.is_playing = auto_play
        session.status = PlaybackStatus.LOADING
        logger.info("selected %s (auto_play=%s, cached=%s)", path, auto_play, cached is not None)

        if cached is not None:
            self.lookahead.refresh(path, self._sequence)
            self._show_content(cached.content)
            return

        if not self._credentials_present():
            self.lookahead.refresh(path, self._sequence)
            self._fail(ConfigurationMissing("github token", "set LAZYREEL_GITHUB_TOKEN or GITHUB_TOKEN"))
            return

        def on_content(result_path: str, content: str | None, error: Exception | None) -> None:
            if generation != self._selection_generation:
                logger.debug("discarding stale content for %s", result_path)
                return
            if error is not None or content is None:
                self._fail(error)
                return
            self._show_content(content)

        self._requester.request(path, on_content, role=CONTENT_ROLE)
        self.lookahead.refresh(path, self._sequence)
        self._notify()

    def _show_content(self, content: str) -> None:
        session = self.session
        session.content = content
        session.scroll_offset = 0
        if session.is_playing:
            session.status = PlaybackStatus.PLAYING
            self._start_scroll()
        else:
            session.status = PlaybackStatus.READY
        self._notify()

    def _fail(self, error: Exception | None) -> None:
        session = self.session
        self.scroll.stop()
        session.status = PlaybackStatus.ERROR
        session.error_message = str(error) if error is not None else "Could not fetch file content."
        session.is_playing = False
        logger.warning("playback error for %s: %s", session.current_path, session.error_message)
        self._notify()

    def toggle_play(self) -> bool:
        """Flip play/pause; return ``False`` when the toggle is not allowed."""
        session = self.session
        if session.current_path is None:
            return False
        if session.status in (PlaybackStatus.IDLE, PlaybackStatus.LOADING, PlaybackStatus.ERROR):
            return False

        if session.status is PlaybackStatus.TRANSITIONING:
            # Takes effect when the hand-off commits.
            session.is_playing = not session.is_playing
        elif session.status is PlaybackStatus.PLAYING:
            session.is_playing = False
            session.status = PlaybackStatus.READY
            self._cancel_advance_retry()
            self.scroll.stop()
        else:
            session.is_playing = True
            session.status = PlaybackStatus.PLAYING
            self._start_scroll()
        self._notify()
        return True

    def advance(self) -> None:
        """Hand off to the next document once the current one has ended."""
        self._advance_timer = None
        session = self.session
        if session.status is not PlaybackStatus.PLAYING:
            return
        self.scroll.stop()

        next_path = self.next_path()
        if next_path is None:
            logger.info("reached end of sequence at %s", session.current_path)
            self._advance_attempts = 0
            session.is_playing = False
            session.status = PlaybackStatus.READY
            self._notify()
            return

        entry = self.lookahead.entry_for(next_path)
        if entry is None:
            if self.lookahead.is_pending(next_path) and self._advance_attempts < self.timing.advance_max_retries:
                self._advance_attempts += 1
                logger.debug("look-ahead for %s not ready (attempt %d)", next_path, self._advance_attempts)
                self._advance_timer = self._scheduler.call_later(self.timing.advance_retry_seconds, self.advance)
                return
            logger.info("look-ahead for %s unavailable; fetching directly", next_path)
            self.select_document(next_path, auto_play=True)
            return

        self._advance_attempts = 0
        session.status = PlaybackStatus.TRANSITIONING
        if self._prepare_content is not None:
            self._prepare_content(entry.path, entry.content)
        self.animator.start(session.current_path, entry.path, entry.content, self._commit_transition)
        self._notify()

    def _commit_transition(self, transition: Transition) -> None:
        session = self.session
        self._selection_generation += 1
        session.current_path = transition.to_path
        session.content = transition.content
        session.scroll_offset = 0
        session.error_message = None
        self.lookahead.refresh(session.current_path, self._sequence)
        if session.is_playing:
            session.status = PlaybackStatus.PLAYING
            self._start_scroll()
        else:
            session.status = PlaybackStatus.READY
        self._notify()

    def set_speed(self, multiplier: float) -> None:
        """Change scroll speed; a ticking driver is re-armed at the new rate."""
        if isinstance(multiplier, bool) or not isinstance(multiplier, (int, float)):
            raise ValueError(f"speed must be a number, got {multiplier!r}")
        if not math.isfinite(multiplier) or multiplier <= 0:
            raise ValueError(f"speed must be positive, got {multiplier!r}")
        self.session.speed_multiplier = float(multiplier)
        if self.scroll.active:
            self.scroll.set_interval(self.tick_interval())
        self._notify()

    def set_viewport_rows(self, rows: int) -> None:
        """Record the visible row count; an active driver restarts in place."""
        rows = max(1, int(rows))
        if rows == self._viewport_rows:
            return
        self._viewport_rows = rows
        if self.scroll.active:
            self._start_scroll()

    def next(self) -> bool:
        """Jump to the following document, keeping the play state."""
        session = self.session
        if session.current_path is None:
            if not self._sequence:
                return False
            self.select_document(self._sequence[0], auto_play=session.is_playing)
            return True
        target = self.next_path()
        if target is None:
            return False
        self.select_document(target, auto_play=session.is_playing, use_cache=True)
        return True

    def previous(self) -> bool:
        """Jump to the preceding document, keeping the play state."""
        session = self.session
        target = predecessor_path(self._sequence, session.current_path)
        if target is None:
            return False
        self.select_document(target, auto_play=session.is_playing)
        return True


__all__ = ["PlaybackTiming", "PlaybackStateMachine", "content_row_count"]
