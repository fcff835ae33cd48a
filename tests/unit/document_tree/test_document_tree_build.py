"""Tests for building document trees from flat listings."""

from __future__ import annotations

import unittest

from lazyreel.document_tree import DocumentNode, NodeKind, build_document_tree, split_path


class SplitPathTests(unittest.TestCase):
    def test_empty_segments_are_dropped(self) -> None:
        self.assertEqual(split_path("/a//b/c.txt/"), ("a", "b", "c.txt"))
        self.assertEqual(split_path(""), ())


class BuildDocumentTreeTests(unittest.TestCase):
    def test_intermediate_segments_become_folders(self) -> None:
        nodes = build_document_tree(["a/x.txt", "a/y.txt", "b.txt"])

        by_name = {node.name: node for node in nodes}
        self.assertEqual(set(by_name), {"a", "b.txt"})
        self.assertEqual(by_name["a"].kind, NodeKind.FOLDER)
        self.assertEqual(by_name["a"].path, "a")
        self.assertEqual([child.path for child in by_name["a"].children], ["a/x.txt", "a/y.txt"])
        self.assertEqual(by_name["b.txt"].kind, NodeKind.FILE)
        self.assertEqual(by_name["b.txt"].children, ())

    def test_nested_folders_carry_full_paths(self) -> None:
        nodes = build_document_tree(["src/pkg/mod.py"])

        src = nodes[0]
        pkg = src.children[0]
        mod = pkg.children[0]
        self.assertEqual((src.path, pkg.path, mod.path), ("src", "src/pkg", "src/pkg/mod.py"))
        self.assertTrue(src.is_folder and pkg.is_folder)
        self.assertFalse(mod.is_folder)

    def test_folder_wins_when_path_is_also_a_prefix(self) -> None:
        nodes = build_document_tree(["docs", "docs/intro.md"])

        self.assertEqual(len(nodes), 1)
        self.assertTrue(nodes[0].is_folder)
        self.assertEqual(nodes[0].children[0].path, "docs/intro.md")

    def test_empty_and_blank_listings_produce_no_nodes(self) -> None:
        self.assertEqual(build_document_tree([]), ())
        self.assertEqual(build_document_tree(["", "/"]), ())

    def test_duplicate_paths_collapse_to_one_leaf(self) -> None:
        nodes = build_document_tree(["a.txt", "a.txt"])
        self.assertEqual(nodes, (DocumentNode(name="a.txt", path="a.txt", kind=NodeKind.FILE),))


if __name__ == "__main__":
    unittest.main()
