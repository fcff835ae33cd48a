"""Main interactive event loop for the player.

Each pass delivers finished fetches, fires due timers, repaints when
needed, and waits for one key no longer than the next timer deadline.
Playback logic stays in ``PlaybackStateMachine``; this loop only wires it.
"""

from __future__ import annotations

import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from ..config import next_speed_option, previous_speed_option
from ..document_tree import DocumentNode
from ..playback import ContentFetcher, PlaybackStateMachine, TimerScheduler
from ..ui_theme import next_theme_name, resolve_theme
from .input import read_key
from .render import RenderedDocumentCache, build_frame, compute_layout
from .terminal import TerminalController


@dataclass(frozen=True)
class PlayerLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    idle_poll_seconds: float = 0.12
    animation_frame_seconds: float = 1 / 30


@dataclass
class PlayerViewState:
    """Sidebar and chrome state that is not part of the playback session."""

    tree_rows: list[tuple[int, DocumentNode]] = field(default_factory=list)
    cursor: int = 0
    tree_start: int = 0
    theme_name: str = ""
    no_color: bool = False
    dirty: bool = True
    synced_path: str | None = None


@dataclass(frozen=True)
class PlayerKeyCallbacks:
    """Persistence hooks invoked after user-initiated setting changes."""

    save_speed: Callable[[float], None]
    save_theme_name: Callable[[str], None]


def _file_row_index(view: PlayerViewState, path: str | None) -> int | None:
    for idx, (_depth, node) in enumerate(view.tree_rows):
        if not node.is_folder and node.path == path:
            return idx
    return None


def sync_cursor_to_current(view: PlayerViewState, current_path: str | None) -> None:
    """Move the sidebar cursor onto ``current_path`` when the selection moved."""
    if current_path == view.synced_path:
        return
    view.synced_path = current_path
    idx = _file_row_index(view, current_path)
    if idx is not None:
        view.cursor = idx
    view.dirty = True


def clamp_tree_start(view: PlayerViewState, visible_rows: int) -> None:
    """Scroll the sidebar so the cursor row stays visible."""
    if view.cursor < view.tree_start:
        view.tree_start = view.cursor
    elif view.cursor >= view.tree_start + visible_rows:
        view.tree_start = view.cursor - visible_rows + 1
    view.tree_start = max(0, min(view.tree_start, max(0, len(view.tree_rows) - visible_rows)))


def handle_player_key(
    key: str,
    machine: PlaybackStateMachine,
    view: PlayerViewState,
    cache: RenderedDocumentCache,
    callbacks: PlayerKeyCallbacks,
) -> bool:
    """Dispatch one key; return ``True`` when the player should quit."""
    if key in {"q", "Q", "CTRL_C"}:
        return True

    session = machine.session
    if key == "SPACE":
        machine.toggle_play()
    elif key in {"n", "RIGHT"}:
        machine.next()
    elif key in {"p", "LEFT"}:
        machine.previous()
    elif key in {"+", "="}:
        speed = next_speed_option(session.speed_multiplier)
        machine.set_speed(speed)
        callbacks.save_speed(speed)
    elif key in {"-", "_"}:
        speed = previous_speed_option(session.speed_multiplier)
        machine.set_speed(speed)
        callbacks.save_speed(speed)
    elif key == "t":
        view.theme_name = next_theme_name(view.theme_name)
        cache.set_theme(resolve_theme(view.theme_name, no_color=view.no_color))
        callbacks.save_theme_name(view.theme_name)
    elif key in {"UP", "k"}:
        view.cursor = max(0, view.cursor - 1)
    elif key in {"DOWN", "j"}:
        view.cursor = min(max(0, len(view.tree_rows) - 1), view.cursor + 1)
    elif key == "ENTER":
        if 0 <= view.cursor < len(view.tree_rows):
            _depth, node = view.tree_rows[view.cursor]
            if not node.is_folder:
                machine.select_document(node.path)
    else:
        return False
    view.dirty = True
    return False


def run_player_loop(
    machine: PlaybackStateMachine,
    fetcher: ContentFetcher,
    scheduler: TimerScheduler,
    view: PlayerViewState,
    cache: RenderedDocumentCache,
    terminal: TerminalController,
    stdin_fd: int,
    callbacks: PlayerKeyCallbacks,
    timing: PlayerLoopTiming = PlayerLoopTiming(),
) -> None:
    """Run the player until the user quits."""
    last_size: tuple[int, int] | None = None
    with terminal.raw_mode():
        while True:
            if fetcher.drain_results():
                view.dirty = True
            if scheduler.run_due():
                view.dirty = True

            term = shutil.get_terminal_size((80, 24))
            if (term.columns, term.lines) != last_size:
                last_size = (term.columns, term.lines)
                view.dirty = True
            layout = compute_layout(term.columns, term.lines)
            machine.set_viewport_rows(layout.content_rows)
            sync_cursor_to_current(view, machine.session.current_path)
            clamp_tree_start(view, layout.content_rows)

            transition = machine.transition
            if view.dirty or transition is not None:
                terminal.write_frame(
                    build_frame(
                        layout,
                        machine.session,
                        view.tree_rows,
                        view.tree_start,
                        view.cursor,
                        cache,
                        transition=transition,
                        progress=machine.animator.progress(),
                    )
                )
                view.dirty = False

            timeout = timing.idle_poll_seconds
            if transition is not None:
                timeout = min(timeout, timing.animation_frame_seconds)
            deadline = scheduler.next_deadline()
            if deadline is not None:
                timeout = min(timeout, max(0.0, deadline - time.monotonic()))

            key = read_key(stdin_fd, timeout_ms=int(timeout * 1000))
            if key == "":
                continue
            if handle_player_key(key, machine, view, cache, callbacks):
                break


__all__ = [
    "PlayerLoopTiming",
    "PlayerViewState",
    "PlayerKeyCallbacks",
    "sync_cursor_to_current",
    "clamp_tree_start",
    "handle_player_key",
    "run_player_loop",
]
