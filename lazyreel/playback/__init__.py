"""Sequential playback and prefetch engine.

Wires the scroll driver, look-ahead cache, and transition animator under a
single ``PlaybackStateMachine`` that owns the ``PlaybackSession``.
"""

from __future__ import annotations

from .fetch import CONTENT_ROLE, LOOKAHEAD_ROLE, ContentCallback, ContentFetcher, ContentRequester, ContentResult
from .lookahead import LookAheadCache
from .machine import PlaybackStateMachine, PlaybackTiming, content_row_count
from .scroll import ScrollDriver
from .session import LookAheadEntry, PlaybackSession, PlaybackStatus
from .timers import TimerHandle, TimerScheduler
from .transition import Transition, TransitionAnimator

__all__ = [
    "CONTENT_ROLE",
    "LOOKAHEAD_ROLE",
    "ContentCallback",
    "ContentFetcher",
    "ContentRequester",
    "ContentResult",
    "LookAheadCache",
    "LookAheadEntry",
    "PlaybackSession",
    "PlaybackStateMachine",
    "PlaybackStatus",
    "PlaybackTiming",
    "ScrollDriver",
    "TimerHandle",
    "TimerScheduler",
    "Transition",
    "TransitionAnimator",
    "content_row_count",
]
