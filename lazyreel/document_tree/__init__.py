"""Document tree model and playback ordering.

This package contains non-UI tree primitives:
- document node datatypes with nested children
- tree construction from flat listings
- the deterministic folders-first flattening used for playback order
"""

from __future__ import annotations

from .build import build_document_tree, split_path
from .ordering import flatten, iter_tree_rows, node_sort_key, predecessor_path, successor_path
from .types import DocumentNode, NodeKind

__all__ = [
    "DocumentNode",
    "NodeKind",
    "build_document_tree",
    "split_path",
    "flatten",
    "iter_tree_rows",
    "node_sort_key",
    "successor_path",
    "predecessor_path",
]
