"""Frame composition for the player view.

Builds the sidebar (document tree with the current file marked), the
document pane at the session's scroll offset, and the status row. While a
transition runs, the incoming document slides up from the bottom of the
pane in proportion to the transition's progress.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass

from ..ansi import fit_ansi_line
from ..document_tree import DocumentNode
from ..highlight import language_for_path, render_document
from ..playback import PlaybackSession, PlaybackStatus, Transition
from ..ui_theme import ReelTheme

RENDER_CACHE_SIZE = 4
MIN_SIDEBAR_WIDTH = 16
MAX_SIDEBAR_WIDTH = 40

_STATUS_ICONS = {
    PlaybackStatus.IDLE: "■",
    PlaybackStatus.LOADING: "…",
    PlaybackStatus.READY: "❚❚",
    PlaybackStatus.PLAYING: "▶",
    PlaybackStatus.TRANSITIONING: "»",
    PlaybackStatus.ERROR: "!",
}


class RenderedDocumentCache:
    """Small LRU of rendered document lines keyed by path and content."""

    def __init__(self, theme: ReelTheme, max_entries: int = RENDER_CACHE_SIZE) -> None:
        self.theme = theme
        self.max_entries = max_entries
        self._entries: OrderedDict[tuple[str, str, int], list[str]] = OrderedDict()

    def set_theme(self, theme: ReelTheme) -> None:
        if theme == self.theme:
            return
        self.theme = theme
        self._entries.clear()

    def lines_for(self, path: str, content: str) -> list[str]:
        key = (path, self.theme.name, hash(content))
        lines = self._entries.get(key)
        if lines is not None:
            self._entries.move_to_end(key)
            return lines
        lines = render_document(content, path, self.theme).splitlines()
        self._entries[key] = lines
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
        return lines

    def prepare(self, path: str, content: str) -> None:
        """Render ahead of time so a transition never waits on highlighting."""
        self.lines_for(path, content)


@dataclass(frozen=True)
class FrameLayout:
    width: int
    height: int
    sidebar_width: int
    content_width: int
    content_rows: int


def compute_layout(columns: int, lines: int) -> FrameLayout:
    """Split the terminal into sidebar, divider, document pane, and status row."""
    width = max(MIN_SIDEBAR_WIDTH + 3, columns)
    height = max(2, lines)
    sidebar_width = max(MIN_SIDEBAR_WIDTH, min(MAX_SIDEBAR_WIDTH, width // 4))
    return FrameLayout(
        width=width,
        height=height,
        sidebar_width=sidebar_width,
        content_width=max(1, width - sidebar_width - 1),
        content_rows=height - 1,
    )


def selected_with_ansi(text: str) -> str:
    """Apply cursor styling without discarding existing ANSI colors."""
    if not text:
        return text

    # Keep reverse video active even when the text contains internal resets.
    return "\033[7m" + text.replace("\033[0m", "\033[0;7m")


def format_tree_row(depth: int, node: DocumentNode, current_path: str | None, theme: ReelTheme) -> str:
    """Render one sidebar row as ANSI-styled text."""
    indent = "  " * depth
    if node.is_folder:
        return f"{indent}{theme.tree_dir}▾ {node.name}/{theme.reset}"
    if node.path == current_path:
        return f"{indent}{theme.tree_current}● {node.name}{theme.reset}"
    return f"{indent}  {theme.tree_file}{node.name}{theme.reset}"


def document_pane_rows(
    lines: list[str],
    offset: int,
    rows: int,
    incoming: list[str] | None = None,
    progress: float = 0.0,
) -> list[str]:
    """Return the ``rows`` visible document lines, sliding ``incoming`` in."""
    shift = 0
    if incoming is not None:
        shift = max(0, min(rows, round(progress * rows)))
    outgoing = lines[offset + shift : offset + rows]
    outgoing += [""] * (rows - shift - len(outgoing))
    if incoming is None or shift == 0:
        return outgoing
    arriving = incoming[:shift]
    arriving += [""] * (shift - len(arriving))
    return outgoing + arriving


def build_status_text(
    session: PlaybackSession,
    total_rows: int,
    content_rows: int,
    theme: ReelTheme,
) -> str:
    """Compose the status row (path, state, speed, theme, position)."""
    icon = _STATUS_ICONS[session.status]
    path = session.current_path or "No file selected"
    if session.status is PlaybackStatus.ERROR:
        color = theme.status_error
    elif session.status in (PlaybackStatus.PLAYING, PlaybackStatus.TRANSITIONING):
        color = theme.status_playing
    else:
        color = theme.status_paused
    parts = [f" {color}{icon}{theme.reset}{theme.reverse} {path}", f"[{session.status.value}]"]
    language = language_for_path(session.current_path) if session.current_path else None
    if language:
        parts.append(language)
    if total_rows:
        first = min(total_rows, session.scroll_offset + 1)
        last = min(total_rows, session.scroll_offset + content_rows)
        parts.append(f"{first}-{last}/{total_rows}")
    parts.append(f"{session.speed_multiplier:g}x")
    parts.append(theme.name)
    if session.error_message:
        parts.append(f"{theme.status_error}{session.error_message}{theme.reset}{theme.reverse}")
    return "  ".join(parts)


def build_frame(
    layout: FrameLayout,
    session: PlaybackSession,
    tree_rows: list[tuple[int, DocumentNode]],
    tree_start: int,
    cursor: int,
    cache: RenderedDocumentCache,
    transition: Transition | None = None,
    progress: float = 0.0,
) -> list[str]:
    """Return the full screen as a list of terminal rows."""
    theme = cache.theme
    lines: list[str] = []
    if session.content:
        lines = cache.lines_for(session.current_path or "", session.content)
    elif session.status is PlaybackStatus.LOADING:
        lines = ["Loading file..."]
    elif session.status is PlaybackStatus.ERROR:
        lines = [session.error_message or "Could not fetch file content."]
    elif session.current_path is None:
        lines = ["No file selected. Select a file to start playing."]

    incoming: list[str] | None = None
    if transition is not None:
        incoming = cache.lines_for(transition.to_path, transition.content)
    pane = document_pane_rows(lines, session.scroll_offset, layout.content_rows, incoming, progress)

    divider = f"{theme.divider}│{theme.reset}"
    frame: list[str] = []
    for row in range(layout.content_rows):
        tree_idx = tree_start + row
        sidebar = ""
        if tree_idx < len(tree_rows):
            depth, node = tree_rows[tree_idx]
            sidebar = format_tree_row(depth, node, session.current_path, theme)
            if tree_idx == cursor:
                sidebar = selected_with_ansi(sidebar)
        frame.append(
            fit_ansi_line(sidebar, layout.sidebar_width)
            + divider
            + fit_ansi_line(pane[row], layout.content_width)
        )

    status = build_status_text(session, len(lines) if session.content else 0, layout.content_rows, theme)
    frame.append(fit_ansi_line(theme.reverse + status, layout.width - 1))
    return frame


__all__ = [
    "RenderedDocumentCache",
    "FrameLayout",
    "compute_layout",
    "format_tree_row",
    "document_pane_rows",
    "build_status_text",
    "build_frame",
]
