"""Command-line front door for lazyreel.

Parses CLI options, resolves the collection (GitHub repository or local
directory), then dispatches into the interactive player runtime.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from .config import SPEED_OPTIONS, load_access_token, load_speed, load_theme_name, save_speed, save_theme_name
from .document_tree import build_document_tree, flatten
from .errors import ConfigurationMissing, ContentFailed, ListingFailed
from .logging_config import setup_logging
from .runtime import run_player
from .sources import DocumentSource, GitHubSource, LocalDirectorySource
from .ui_theme import DEFAULT_THEME, available_theme_names, normalize_theme_name

logger = logging.getLogger(__name__)


def _speed_option(value: str) -> float:
    """argparse type for one of the supported speed multipliers."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid speed value: {value!r}") from exc
    if parsed not in SPEED_OPTIONS:
        choices = ", ".join(f"{option:g}" for option in SPEED_OPTIONS)
        raise argparse.ArgumentTypeError(f"speed must be one of: {choices}")
    return parsed


def resolve_source(collection: str) -> DocumentSource:
    """Pick a local source for existing directories, GitHub otherwise."""
    if Path(collection).expanduser().is_dir():
        return LocalDirectorySource()
    return GitHubSource(load_access_token())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Auto-scroll through every text file of a repository, one after another."
    )
    parser.add_argument(
        "collection",
        nargs="?",
        default=".",
        help="GitHub URL, owner/repo, or local directory. Defaults to the current directory.",
    )
    parser.add_argument(
        "--speed",
        type=_speed_option,
        default=None,
        help=f"Playback speed multiplier ({', '.join(f'{o:g}' for o in SPEED_OPTIONS)}).",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--list", action="store_true", help="Print the playback order and exit.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write diagnostic logs to this file.")
    parser.add_argument("--log-level", default="INFO", help="Log level for --log-file (default: INFO).")
    return parser


def print_playback_order(source: DocumentSource, collection: str) -> None:
    """Write the flattened playback sequence, one path per line."""
    for path in flatten(build_document_tree(source.list_documents(collection))):
        sys.stdout.write(path + "\n")


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments and launch the player on a collection.

    ``--speed`` and ``--theme`` are persisted so the next run starts with
    them; without them the saved values (or defaults) are used.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging(args.log_level, args.log_file)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    if args.theme is not None:
        theme_name = normalize_theme_name(args.theme)
        save_theme_name(theme_name)
    else:
        theme_name = load_theme_name() or DEFAULT_THEME.name
    if args.speed is not None:
        speed = args.speed
        save_speed(speed)
    else:
        speed = load_speed()

    source = resolve_source(args.collection)
    logger.info("opening %s with %s", args.collection, type(source).__name__)
    try:
        if args.list:
            try:
                print_playback_order(source, args.collection)
            finally:
                close = getattr(source, "close", None)
                if close is not None:
                    close()
            return

        run_player(source, args.collection, theme_name=theme_name, speed=speed, no_color=args.no_color)
    except (ListingFailed, ConfigurationMissing, ContentFailed) as exc:
        logger.error("%s", exc)
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
