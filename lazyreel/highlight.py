"""Document sanitization and syntax rendering (the render sink).

Rendering goes through Pygments' 256-color terminal formatter, with the
lexer picked from the document's filename and the style from the theme.
Terminal control bytes are neutralized first to avoid unsafe side effects.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath

from pygments import highlight as pygments_highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .ui_theme import DEFAULT_THEME, ReelTheme

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_FORMATTERS: dict[str, Terminal256Formatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def _lexer_for(path: str, source: str) -> Lexer:
    name = PurePosixPath(path).name
    try:
        return get_lexer_for_filename(name, source, stripnl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False)


def language_for_path(path: str) -> str | None:
    """Return the language hint (Pygments alias) for ``path``, if known."""
    try:
        lexer = get_lexer_for_filename(PurePosixPath(path).name)
    except ClassNotFound:
        return None
    return lexer.aliases[0] if lexer.aliases else lexer.name.lower()


def _normalize_style(style: str) -> str:
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_THEME.pygments_style
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_THEME.pygments_style
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = Terminal256Formatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def render_document(content: str, path: str, theme: ReelTheme = DEFAULT_THEME) -> str:
    """Render ``content`` to ANSI text; plain themes only sanitize."""
    source = sanitize_terminal_text(content)
    if not theme.pygments_style or not source:
        return source
    formatter = _formatter_for_style(_normalize_style(theme.pygments_style))
    return pygments_highlight(source, _lexer_for(path, source), formatter)


__all__ = ["sanitize_terminal_text", "language_for_path", "render_document"]
