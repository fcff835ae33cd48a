"""Playback session state owned by the playback state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..config import DEFAULT_SPEED


class PlaybackStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    PLAYING = "playing"
    TRANSITIONING = "transitioning"
    ERROR = "error"


@dataclass
class PlaybackSession:
    """Mutable playback state.

    ``content`` is ``None`` until the current document has loaded; an empty
    string is a loaded, empty document.
    """

    current_path: str | None = None
    content: str | None = None
    is_playing: bool = False
    speed_multiplier: float = DEFAULT_SPEED
    status: PlaybackStatus = PlaybackStatus.IDLE
    error_message: str | None = None
    scroll_offset: int = 0


@dataclass(frozen=True)
class LookAheadEntry:
    """Prefetched content for the document after the current selection."""

    path: str
    content: str


__all__ = ["PlaybackStatus", "PlaybackSession", "LookAheadEntry"]
