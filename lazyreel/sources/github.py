"""GitHub repository document source.

Lists text blobs through the git-trees API and fetches file bodies through
the contents API. Each request is attempted once; branch discovery tries
``master`` then ``main``.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from urllib.parse import quote

import httpx

from ..errors import ConfigurationMissing, ContentFailed, ListingFailed
from .base import TEXT_EXTENSIONS, decode_text, is_text_document

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
DEFAULT_BRANCHES: tuple[str, ...] = ("master", "main")
REQUEST_TIMEOUT_SECONDS = 15.0

_REPO_URL_RE = re.compile(r"github\.com/(.+?)/(.+?)(?:\.git|/|$)", re.IGNORECASE)
_SHORT_REPO_RE = re.compile(r"^([\w-]+)/([\w.-]+)$")


@dataclass(frozen=True)
class RepoRef:
    """Owner/repository pair identifying one GitHub repository."""

    owner: str
    repo: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}"


def parse_repo_ref(text: str) -> RepoRef | None:
    """Parse ``https://github.com/owner/repo[...]`` or ``owner/repo``."""
    candidate = text.strip()
    match = _REPO_URL_RE.search(candidate)
    if match is None:
        match = _SHORT_REPO_RE.match(candidate)
    if match is None:
        return None
    return RepoRef(owner=match.group(1), repo=match.group(2))


class GitHubSource:
    """Document source backed by the GitHub REST API."""

    requires_credentials = True

    def __init__(
        self,
        token: str | None,
        *,
        client: httpx.Client | None = None,
        branches: tuple[str, ...] = DEFAULT_BRANCHES,
        extensions: tuple[str, ...] = TEXT_EXTENSIONS,
    ) -> None:
        self.token = token
        self.branches = branches
        self.extensions = extensions
        self._client = client or httpx.Client(
            base_url=GITHUB_API_URL,
            timeout=REQUEST_TIMEOUT_SECONDS,
            follow_redirects=True,
        )
        self.repo: RepoRef | None = None
        self.branch: str | None = None

    def close(self) -> None:
        self._client.close()

    def _headers(self) -> dict[str, str]:
        if not self.token:
            raise ConfigurationMissing("github token", "set LAZYREEL_GITHUB_TOKEN or GITHUB_TOKEN")
        return {
            "Authorization": f"token {self.token}",
            "Accept": "application/vnd.github+json",
        }

    def _list_branch(self, repo: RepoRef, branch: str) -> list[str] | None:
        url = f"/repos/{repo.owner}/{repo.repo}/git/trees/{quote(branch, safe='')}"
        try:
            response = self._client.get(url, params={"recursive": "1"}, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.info("listing %s@%s failed: %s", repo, branch, exc)
            return None
        if response.status_code != 200:
            logger.info("listing %s@%s returned HTTP %s", repo, branch, response.status_code)
            return None
        try:
            tree = response.json().get("tree") or []
        except (ValueError, AttributeError):
            return None
        return [
            item["path"]
            for item in tree
            if isinstance(item, dict)
            and item.get("type") == "blob"
            and isinstance(item.get("path"), str)
            and is_text_document(item["path"], self.extensions)
        ]

    def list_documents(self, collection_ref: str) -> list[str]:
        repo = parse_repo_ref(collection_ref)
        if repo is None:
            raise ListingFailed(
                collection_ref,
                "invalid repo URL or format; use https://github.com/owner/repo or owner/repo",
            )
        self._headers()

        for branch in self.branches:
            paths = self._list_branch(repo, branch)
            if paths is not None:
                self.repo = repo
                self.branch = branch
                logger.info("listed %d documents from %s@%s", len(paths), repo, branch)
                return paths
        raise ListingFailed(collection_ref, "could not fetch files; check repo and token")

    def get_content(self, path: str) -> str:
        if self.repo is None or self.branch is None:
            raise ContentFailed(path, "no collection has been listed")
        headers = self._headers()
        url = f"/repos/{self.repo.owner}/{self.repo.repo}/contents/{quote(path, safe='')}"
        try:
            response = self._client.get(url, params={"ref": self.branch}, headers=headers)
        except httpx.HTTPError as exc:
            raise ContentFailed(path, str(exc)) from exc
        if response.status_code != 200:
            raise ContentFailed(path, f"HTTP {response.status_code}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise ContentFailed(path, "malformed response") from exc
        if not isinstance(payload, dict) or payload.get("encoding") != "base64":
            raise ContentFailed(path, "unsupported content encoding")
        encoded = payload.get("content")
        if not isinstance(encoded, str):
            raise ContentFailed(path, "missing content")
        try:
            data = base64.b64decode(encoded.replace("\n", ""), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ContentFailed(path, "invalid base64 content") from exc
        return decode_text(data)


__all__ = [
    "GITHUB_API_URL",
    "DEFAULT_BRANCHES",
    "RepoRef",
    "parse_repo_ref",
    "GitHubSource",
]
