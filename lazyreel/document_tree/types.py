"""Domain datatypes for listed document trees."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NodeKind(str, Enum):
    """Whether a node is a leaf document or a grouping folder."""

    FOLDER = "folder"
    FILE = "file"


@dataclass(frozen=True)
class DocumentNode:
    """One node of a document tree; ``children`` is empty for files."""

    name: str
    path: str
    kind: NodeKind
    children: tuple["DocumentNode", ...] = ()

    @property
    def is_folder(self) -> bool:
        return self.kind is NodeKind.FOLDER


__all__ = ["NodeKind", "DocumentNode"]
