"""Document-source protocol and helpers shared by source adapters."""

from __future__ import annotations

from typing import Protocol

TEXT_EXTENSIONS: tuple[str, ...] = (
    ".txt", ".md", ".py", ".js", ".json", ".csv", ".html", ".css", ".ts",
    ".java", ".c", ".cpp", ".xml", ".yml", ".yaml", ".ini", ".cfg", ".log",
)


class DocumentSource(Protocol):
    """Lists a collection's document paths and retrieves their text.

    ``list_documents`` raises ``ListingFailed``; ``get_content`` raises
    ``ContentFailed``. ``get_content`` may be called from worker threads.
    """

    requires_credentials: bool

    def list_documents(self, collection_ref: str) -> list[str]: ...

    def get_content(self, path: str) -> str: ...


def is_text_document(path: str, extensions: tuple[str, ...] = TEXT_EXTENSIONS) -> bool:
    """Return whether ``path`` ends with one of the playable text extensions."""
    return path.endswith(extensions)


def decode_text(data: bytes) -> str:
    """Decode document bytes as UTF-8 (dropping a leading BOM), else latin-1."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


__all__ = ["TEXT_EXTENSIONS", "DocumentSource", "is_text_document", "decode_text"]
