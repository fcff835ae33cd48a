"""Runtime composition layer for lazyreel.

Lists the collection, builds the document tree, wires the fetcher, timer
scheduler, render cache, and playback state machine, and starts the loop.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable

from ..config import credentials_present, save_speed, save_theme_name
from ..document_tree import DocumentNode, build_document_tree, flatten, iter_tree_rows
from ..errors import ConfigurationMissing
from ..playback import ContentFetcher, PlaybackStateMachine, PlaybackTiming, TimerScheduler
from ..sources import DocumentSource
from ..ui_theme import resolve_theme
from .loop import PlayerKeyCallbacks, PlayerViewState, run_player_loop
from .render import RenderedDocumentCache
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def credentials_check_for(source: DocumentSource) -> Callable[[], bool]:
    """Return the credentials predicate appropriate for ``source``."""
    if getattr(source, "requires_credentials", False):
        return credentials_present
    return lambda: True


def open_collection(
    source: DocumentSource,
    collection_ref: str,
    machine: PlaybackStateMachine,
    credentials: Callable[[], bool] | None = None,
) -> tuple[DocumentNode, ...]:
    """List ``collection_ref``, install its playback order, and start playing.

    Raises ``ConfigurationMissing`` when the source needs a token that is not
    configured, and ``ListingFailed`` when the listing cannot be produced.
    The first document in order is selected with auto-play on.
    """
    check = credentials if credentials is not None else credentials_check_for(source)
    if not check():
        raise ConfigurationMissing("github token", "set LAZYREEL_GITHUB_TOKEN or GITHUB_TOKEN")

    paths = source.list_documents(collection_ref)
    nodes = build_document_tree(paths)
    sequence = flatten(nodes)
    logger.info("listed %d documents from %s", len(sequence), collection_ref)
    machine.load_sequence(sequence)
    if sequence:
        machine.select_document(sequence[0], auto_play=True)
    return nodes


def run_player(
    source: DocumentSource,
    collection_ref: str,
    *,
    theme_name: str,
    speed: float,
    no_color: bool = False,
    timing: PlaybackTiming | None = None,
) -> None:
    """Initialize player state, wire subsystems, and run the event loop."""
    if not os.isatty(sys.stdin.fileno()):
        raise SystemExit("lazyreel needs an interactive terminal; use --list to print the playback order.")

    credentials = credentials_check_for(source)
    scheduler = TimerScheduler()
    fetcher = ContentFetcher(source.get_content)
    cache = RenderedDocumentCache(resolve_theme(theme_name, no_color=no_color))
    view = PlayerViewState(theme_name=theme_name, no_color=no_color)

    def mark_dirty() -> None:
        view.dirty = True

    machine = PlaybackStateMachine(
        fetcher,
        scheduler,
        timing=timing,
        credentials_present=credentials,
        prepare_content=cache.prepare,
        on_change=mark_dirty,
    )
    machine.set_speed(speed)

    try:
        nodes = open_collection(source, collection_ref, machine, credentials)
        view.tree_rows = list(iter_tree_rows(nodes))
        terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
        run_player_loop(
            machine,
            fetcher,
            scheduler,
            view,
            cache,
            terminal,
            sys.stdin.fileno(),
            PlayerKeyCallbacks(save_speed=save_speed, save_theme_name=save_theme_name),
        )
    finally:
        fetcher.shutdown()
        close = getattr(source, "close", None)
        if close is not None:
            close()


__all__ = ["credentials_check_for", "open_collection", "run_player"]
