"""Local-directory document source.

Lets a checkout on disk be played exactly like a remote repository; paths
are reported relative to the root with ``/`` separators.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..errors import ContentFailed, ListingFailed
from .base import TEXT_EXTENSIONS, decode_text, is_text_document


class LocalDirectorySource:
    """List and read text documents below a directory."""

    requires_credentials = False

    def __init__(self, *, show_hidden: bool = False, extensions: tuple[str, ...] = TEXT_EXTENSIONS) -> None:
        self.show_hidden = show_hidden
        self.extensions = extensions
        self.root: Path | None = None

    def list_documents(self, collection_ref: str) -> list[str]:
        root = Path(collection_ref).expanduser()
        if not root.is_dir():
            raise ListingFailed(collection_ref, "not a directory")
        root = root.resolve()

        try:
            os.listdir(root)
        except OSError as exc:
            raise ListingFailed(collection_ref, exc.strerror or str(exc)) from exc

        # Unreadable subdirectories are skipped by os.walk.
        paths: list[str] = []
        for dirpath, dirnames, filenames in os.walk(root):
            if not self.show_hidden:
                dirnames[:] = [name for name in dirnames if not name.startswith(".")]
            for name in filenames:
                if not self.show_hidden and name.startswith("."):
                    continue
                relative = (Path(dirpath) / name).relative_to(root).as_posix()
                if is_text_document(relative, self.extensions):
                    paths.append(relative)

        self.root = root
        return paths

    def get_content(self, path: str) -> str:
        if self.root is None:
            raise ContentFailed(path, "no collection has been listed")
        target = (self.root / path).resolve()
        if not target.is_relative_to(self.root):
            raise ContentFailed(path, "path escapes the collection root")
        try:
            data = target.read_bytes()
        except OSError as exc:
            raise ContentFailed(path, exc.strerror or str(exc)) from exc
        return decode_text(data)


__all__ = ["LocalDirectorySource"]
