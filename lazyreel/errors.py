"""Error kinds raised at the collection/content boundaries.

``ListingFailed`` and ``ConfigurationMissing`` stop a collection from opening.
``ContentFailed`` is either a playback error (current selection) or silently
absorbed (look-ahead prefetch); the playback layer decides which.
"""

from __future__ import annotations


class LazyReelError(Exception):
    """Base exception for lazyreel."""


class ListingFailed(LazyReelError):
    """The document listing for a collection could not be retrieved."""

    def __init__(self, collection_ref: str, reason: str) -> None:
        super().__init__(f"Could not list {collection_ref!r}: {reason}")
        self.collection_ref = collection_ref
        self.reason = reason


class ContentFailed(LazyReelError):
    """One document's content could not be retrieved."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not fetch {path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigurationMissing(LazyReelError):
    """A required setting (usually an access token) is absent."""

    def __init__(self, setting: str, hint: str = "") -> None:
        message = f"Missing configuration: {setting}"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)
        self.setting = setting


__all__ = [
    "LazyReelError",
    "ListingFailed",
    "ContentFailed",
    "ConfigurationMissing",
]
