"""Document sources: where listings and document bodies come from."""

from __future__ import annotations

from .base import TEXT_EXTENSIONS, DocumentSource, decode_text, is_text_document
from .github import GitHubSource, RepoRef, parse_repo_ref
from .local import LocalDirectorySource

__all__ = [
    "TEXT_EXTENSIONS",
    "DocumentSource",
    "decode_text",
    "is_text_document",
    "GitHubSource",
    "RepoRef",
    "parse_repo_ref",
    "LocalDirectorySource",
]
