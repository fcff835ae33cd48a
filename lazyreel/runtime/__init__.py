"""Runtime package for the interactive player.

Exports ``run_player`` and ``open_collection`` for the CLI.
"""

from __future__ import annotations

from .app import credentials_check_for, open_collection, run_player

__all__ = ["credentials_check_for", "open_collection", "run_player"]
