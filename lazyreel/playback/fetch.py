"""Asynchronous content retrieval for the playback engine.

Fetches run on a small worker pool; completed results are queued and only
delivered to callbacks when the runtime loop calls ``drain_results``, so all
playback state is touched from one thread.

Each request carries a role (the main selection fetch or the look-ahead).
A newer request for a role supersedes the older one: a superseded fetch that
has not started yet is cancelled, and its callback is never invoked.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Protocol

from ..errors import ContentFailed, LazyReelError

logger = logging.getLogger(__name__)

ContentCallback = Callable[[str, "str | None", "Exception | None"], None]

CONTENT_ROLE = "content"
LOOKAHEAD_ROLE = "lookahead"


class ContentRequester(Protocol):
    """Issues one asynchronous content request per call.

    ``callback(path, content, error)`` is invoked later on the loop thread;
    exactly one of ``content``/``error`` is meaningful. A later request with
    the same ``role`` may drop an earlier one without calling it back.
    """

    def request(self, path: str, callback: ContentCallback, *, role: str = CONTENT_ROLE) -> int: ...


@dataclass(frozen=True)
class ContentResult:
    """Completed fetch waiting to be delivered on the loop thread."""

    request_id: int
    path: str
    content: str | None
    error: Exception | None


class ContentFetcher:
    """Thread-pool backed, latest-request-wins ``ContentRequester``."""

    def __init__(self, get_content: Callable[[str], str], *, max_workers: int = 2) -> None:
        self._get_content = get_content
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="lazyreel-fetch")
        self._lock = threading.Lock()
        self._next_request_id = 1
        self._callbacks: dict[int, ContentCallback] = {}
        self._latest: dict[str, tuple[int, Future]] = {}
        self._results: Queue[ContentResult] = Queue()

    def _fetch(self, path: str) -> str:
        try:
            return self._get_content(path)
        except LazyReelError:
            raise
        except Exception as exc:
            raise ContentFailed(path, str(exc) or type(exc).__name__) from exc

    def request(self, path: str, callback: ContentCallback, *, role: str = CONTENT_ROLE) -> int:
        """Start fetching ``path`` and return its request id.

        Supersedes the previous request with the same ``role``.
        """
        with self._lock:
            request_id = self._next_request_id
            self._next_request_id += 1

        def on_done(future: Future) -> None:
            if future.cancelled():
                return
            error = future.exception()
            content = None if error is not None else future.result()
            self._results.put(ContentResult(request_id=request_id, path=path, content=content, error=error))

        logger.debug("request %d (%s): fetching %s", request_id, role, path)
        with self._lock:
            previous = self._latest.get(role)
            if previous is not None:
                previous_id, previous_future = previous
                self._callbacks.pop(previous_id, None)
                if previous_future.cancel():
                    logger.debug("request %d: cancelled before it started", previous_id)
            self._callbacks[request_id] = callback
            future = self._executor.submit(self._fetch, path)
            self._latest[role] = (request_id, future)
        future.add_done_callback(on_done)
        return request_id

    def pending_count(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def drain_results(self) -> int:
        """Deliver all completed results to their callbacks; return the count."""
        delivered = 0
        while True:
            try:
                result = self._results.get_nowait()
            except Empty:
                break
            with self._lock:
                callback = self._callbacks.pop(result.request_id, None)
            if callback is None:
                continue
            callback(result.path, result.content, result.error)
            delivered += 1
        return delivered

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)


__all__ = [
    "CONTENT_ROLE",
    "LOOKAHEAD_ROLE",
    "ContentCallback",
    "ContentRequester",
    "ContentResult",
    "ContentFetcher",
]
