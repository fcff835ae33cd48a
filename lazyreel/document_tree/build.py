"""Build document trees from flat, slash-delimited path listings."""

from __future__ import annotations

from collections.abc import Iterable

from .types import DocumentNode, NodeKind


def split_path(path: str) -> tuple[str, ...]:
    """Split ``path`` on ``/`` and drop empty segments."""
    return tuple(part for part in path.split("/") if part)


def build_document_tree(paths: Iterable[str]) -> tuple[DocumentNode, ...]:
    """Return top-level nodes for a flat path listing.

    Intermediate segments become folders. A path that also appears as a
    prefix of another path is treated as a folder. Children keep listing
    order; ordering for playback is applied later by ``flatten``.
    """
    # name -> (is_folder, children mapping)
    root: dict[str, tuple[bool, dict]] = {}
    for raw_path in paths:
        parts = split_path(raw_path)
        if not parts:
            continue
        level = root
        for idx, part in enumerate(parts):
            is_leaf = idx == len(parts) - 1
            existing = level.get(part)
            if existing is None:
                existing = (not is_leaf, {})
                level[part] = existing
            elif not is_leaf and not existing[0]:
                existing = (True, existing[1])
                level[part] = existing
            level = existing[1]

    def freeze(level: dict[str, tuple[bool, dict]], prefix: str) -> tuple[DocumentNode, ...]:
        nodes: list[DocumentNode] = []
        for name, (is_folder, children) in level.items():
            path = f"{prefix}/{name}" if prefix else name
            if is_folder:
                nodes.append(
                    DocumentNode(
                        name=name,
                        path=path,
                        kind=NodeKind.FOLDER,
                        children=freeze(children, path),
                    )
                )
            else:
                nodes.append(DocumentNode(name=name, path=path, kind=NodeKind.FILE))
        return tuple(nodes)

    return freeze(root, "")


__all__ = ["split_path", "build_document_tree"]
