"""Deterministic playback ordering over document trees.

At every level folders precede files; within a kind, names compare by plain
(case-sensitive) code-point order, with the full path breaking ties.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from .types import DocumentNode


def node_sort_key(node: DocumentNode) -> tuple[bool, str, str]:
    """Sort key placing folders first, then by name, then by full path."""
    return (not node.is_folder, node.name, node.path)


def iter_tree_rows(nodes: Sequence[DocumentNode], depth: int = 0) -> Iterator[tuple[int, DocumentNode]]:
    """Yield ``(depth, node)`` for every node in playback order (pre-order)."""
    for node in sorted(nodes, key=node_sort_key):
        yield depth, node
        if node.is_folder:
            yield from iter_tree_rows(node.children, depth + 1)


def flatten(nodes: Sequence[DocumentNode]) -> tuple[str, ...]:
    """Return the ordered sequence of leaf paths under ``nodes``."""
    return tuple(node.path for _depth, node in iter_tree_rows(nodes) if not node.is_folder)


def _neighbor_path(sequence: Sequence[str], path: str | None, offset: int) -> str | None:
    if path is None:
        return None
    try:
        idx = sequence.index(path)
    except ValueError:
        return None
    target = idx + offset
    if 0 <= target < len(sequence):
        return sequence[target]
    return None


def successor_path(sequence: Sequence[str], path: str | None) -> str | None:
    """Return the path after ``path``; ``None`` when last, unset, or absent."""
    return _neighbor_path(sequence, path, 1)


def predecessor_path(sequence: Sequence[str], path: str | None) -> str | None:
    """Return the path before ``path``; ``None`` when first, unset, or absent."""
    return _neighbor_path(sequence, path, -1)


__all__ = [
    "node_sort_key",
    "iter_tree_rows",
    "flatten",
    "successor_path",
    "predecessor_path",
]
