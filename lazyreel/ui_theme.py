"""Reel theme definitions and selection helpers.

Each theme pairs a Pygments style (document syntax colors) with an ANSI
palette for the sidebar and status chrome. The set is closed: unknown names
are normalized to the default at the settings boundary.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReelTheme:
    """Syntax style plus semantic ANSI palette used by renderers."""

    name: str
    pygments_style: str
    divider: str
    reverse: str
    reset: str
    tree_dir: str
    tree_file: str
    tree_current: str
    status_playing: str
    status_paused: str
    status_error: str


DEFAULT_THEME = ReelTheme(
    name="monokai",
    pygments_style="monokai",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    tree_dir="\033[1;34m",
    tree_file="\033[38;5;252m",
    tree_current="\033[1;38;5;42m",
    status_playing="\033[38;5;42m",
    status_paused="\033[38;5;214m",
    status_error="\033[1;38;5;203m",
)

DRACULA_THEME = ReelTheme(
    name="dracula",
    pygments_style="dracula",
    divider="\033[2;38;5;61m",
    reverse="\033[7m",
    reset="\033[0m",
    tree_dir="\033[1;38;5;141m",
    tree_file="\033[38;5;189m",
    tree_current="\033[1;38;5;84m",
    status_playing="\033[38;5;84m",
    status_paused="\033[38;5;228m",
    status_error="\033[1;38;5;210m",
)

NORD_THEME = ReelTheme(
    name="nord",
    pygments_style="nord",
    divider="\033[2;38;5;60m",
    reverse="\033[7m",
    reset="\033[0m",
    tree_dir="\033[1;38;5;110m",
    tree_file="\033[38;5;253m",
    tree_current="\033[1;38;5;150m",
    status_playing="\033[38;5;150m",
    status_paused="\033[38;5;222m",
    status_error="\033[1;38;5;174m",
)

GITHUB_DARK_THEME = ReelTheme(
    name="github-dark",
    pygments_style="github-dark",
    divider="\033[2;38;5;240m",
    reverse="\033[7m",
    reset="\033[0m",
    tree_dir="\033[1;38;5;75m",
    tree_file="\033[38;5;251m",
    tree_current="\033[1;38;5;71m",
    status_playing="\033[38;5;71m",
    status_paused="\033[38;5;179m",
    status_error="\033[1;38;5;203m",
)

SOLARIZED_DARK_THEME = ReelTheme(
    name="solarized-dark",
    pygments_style="solarized-dark",
    divider="\033[2;38;5;23m",
    reverse="\033[7m",
    reset="\033[0m",
    tree_dir="\033[1;38;5;33m",
    tree_file="\033[38;5;247m",
    tree_current="\033[1;38;5;106m",
    status_playing="\033[38;5;106m",
    status_paused="\033[38;5;136m",
    status_error="\033[1;38;5;160m",
)

PLAIN_THEME = ReelTheme(
    name="plain",
    pygments_style="",
    divider="",
    reverse="\033[7m",
    reset="",
    tree_dir="",
    tree_file="",
    tree_current="",
    status_playing="",
    status_paused="",
    status_error="",
)

THEMES: dict[str, ReelTheme] = {
    theme.name: theme
    for theme in (
        DEFAULT_THEME,
        DRACULA_THEME,
        GITHUB_DARK_THEME,
        NORD_THEME,
        SOLARIZED_DARK_THEME,
    )
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> ReelTheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return THEMES[normalize_theme_name(name)]


def next_theme_name(name: str | None) -> str:
    """Cycle to the theme after ``name`` in display order."""
    names = available_theme_names()
    current = normalize_theme_name(name)
    return names[(names.index(current) + 1) % len(names)]


__all__ = [
    "ReelTheme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "THEMES",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
    "next_theme_name",
]
