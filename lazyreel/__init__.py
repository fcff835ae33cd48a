"""Public package surface for lazyreel.

Exports ``main`` for programmatic CLI invocation.
The playback engine lives in ``lazyreel.playback``; terminal wiring in
``lazyreel.runtime``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
