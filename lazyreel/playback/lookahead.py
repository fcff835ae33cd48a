"""Single-slot prefetch of the document after the current selection.

Every refresh bumps a generation counter; a completion is applied only when
its generation and path still match, so a slow response for an old
selection can never replace newer cache state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..document_tree import successor_path
from .fetch import LOOKAHEAD_ROLE, ContentRequester
from .session import LookAheadEntry

logger = logging.getLogger(__name__)


class LookAheadCache:
    """Holds at most one ``LookAheadEntry`` for the current successor."""

    def __init__(
        self,
        requester: ContentRequester,
        *,
        can_request: Callable[[], bool] | None = None,
    ) -> None:
        self._requester = requester
        self._can_request = can_request or (lambda: True)
        self._generation = 0
        self._next_path: str | None = None
        self._pending_path: str | None = None
        self._entry: LookAheadEntry | None = None

    @property
    def entry(self) -> LookAheadEntry | None:
        return self._entry

    @property
    def next_path(self) -> str | None:
        return self._next_path

    @property
    def generation(self) -> int:
        return self._generation

    def refresh(self, current_path: str | None, sequence: Sequence[str]) -> None:
        """Drop the slot and prefetch the successor of ``current_path``."""
        self._generation += 1
        self._next_path = successor_path(sequence, current_path)
        self._entry = None
        self._pending_path = None

        next_path = self._next_path
        if next_path is None:
            return
        if not self._can_request():
            logger.debug("skipping look-ahead for %s: no credentials", next_path)
            return

        generation = self._generation
        self._pending_path = next_path

        def on_result(path: str, content: str | None, error: Exception | None) -> None:
            self._apply(generation, path, content, error)

        self._requester.request(next_path, on_result, role=LOOKAHEAD_ROLE)

    def _apply(self, generation: int, path: str, content: str | None, error: Exception | None) -> None:
        if generation != self._generation or path != self._next_path:
            logger.debug("discarding stale look-ahead result for %s", path)
            return
        self._pending_path = None
        if error is not None or content is None:
            logger.info("look-ahead for %s failed: %s", path, error)
            return
        self._entry = LookAheadEntry(path=path, content=content)

    def entry_for(self, path: str | None) -> LookAheadEntry | None:
        """Return the cached entry only if it is the valid successor ``path``."""
        entry = self._entry
        if entry is None or path is None:
            return None
        if entry.path != path or path != self._next_path:
            return None
        return entry

    def is_pending(self, path: str | None) -> bool:
        return path is not None and self._pending_path == path

    def clear(self) -> None:
        """Empty the slot and invalidate any in-flight request."""
        self._generation += 1
        self._next_path = None
        self._pending_path = None
        self._entry = None


__all__ = ["LookAheadCache"]
