"""Tests for folders-first playback ordering."""

from __future__ import annotations

import random
import unittest

from lazyreel.document_tree import (
    build_document_tree,
    flatten,
    iter_tree_rows,
    predecessor_path,
    successor_path,
)


class FlattenTests(unittest.TestCase):
    def test_folder_files_precede_sibling_files(self) -> None:
        nodes = build_document_tree(["b.txt", "a/y.txt", "a/x.txt"])
        self.assertEqual(flatten(nodes), ("a/x.txt", "a/y.txt", "b.txt"))

    def test_folders_first_at_every_level(self) -> None:
        paths = ["z.md", "a.md", "lib/zz.py", "lib/core/a.py", "lib/b.py", "docs/guide.md"]
        self.assertEqual(
            flatten(build_document_tree(paths)),
            ("docs/guide.md", "lib/core/a.py", "lib/b.py", "lib/zz.py", "a.md", "z.md"),
        )

    def test_names_compare_case_sensitively(self) -> None:
        nodes = build_document_tree(["b.txt", "B.txt", "a.txt"])
        self.assertEqual(flatten(nodes), ("B.txt", "a.txt", "b.txt"))

    def test_order_is_independent_of_listing_order(self) -> None:
        paths = ["a/x.txt", "a/y.txt", "b.txt", "c/d/e.md", "c/f.md", "README.md"]
        expected = flatten(build_document_tree(paths))
        rng = random.Random(7)
        for _ in range(10):
            shuffled = list(paths)
            rng.shuffle(shuffled)
            self.assertEqual(flatten(build_document_tree(shuffled)), expected)

    def test_flatten_contains_only_leaves(self) -> None:
        sequence = flatten(build_document_tree(["a/b/c.txt", "d.txt"]))
        self.assertEqual(sequence, ("a/b/c.txt", "d.txt"))

    def test_empty_tree_flattens_to_empty_sequence(self) -> None:
        self.assertEqual(flatten(()), ())


class TreeRowTests(unittest.TestCase):
    def test_rows_report_depth_in_preorder(self) -> None:
        rows = [(depth, node.path) for depth, node in iter_tree_rows(build_document_tree(["a/x.txt", "b.txt"]))]
        self.assertEqual(rows, [(0, "a"), (1, "a/x.txt"), (0, "b.txt")])


class NeighborTests(unittest.TestCase):
    sequence = ("a/x.txt", "a/y.txt", "b.txt")

    def test_successor(self) -> None:
        self.assertEqual(successor_path(self.sequence, "a/x.txt"), "a/y.txt")
        self.assertIsNone(successor_path(self.sequence, "b.txt"))
        self.assertIsNone(successor_path(self.sequence, None))
        self.assertIsNone(successor_path(self.sequence, "missing.txt"))

    def test_predecessor(self) -> None:
        self.assertEqual(predecessor_path(self.sequence, "b.txt"), "a/y.txt")
        self.assertIsNone(predecessor_path(self.sequence, "a/x.txt"))
        self.assertIsNone(predecessor_path(self.sequence, None))
        self.assertIsNone(predecessor_path((), "a/x.txt"))


if __name__ == "__main__":
    unittest.main()
