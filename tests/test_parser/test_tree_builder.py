"""Tests for forest construction."""

from __future__ import annotations

from forge.parser.models import NodeKind, ParseLine
from forge.parser.tree_builder import build_forest, forest_paths, iter_nodes, split_name


def _line(depth: int, name: str, line: int = 1) -> ParseLine:
    return ParseLine(line=line, depth=depth, name=name)


class TestSplitName:
    def test_trailing_slash_is_directory(self) -> None:
        assert split_name("src/") == ("src", NodeKind.directory)

    def test_dotted_name_is_file(self) -> None:
        assert split_name("index.ts") == ("index.ts", NodeKind.file)

    def test_bare_name_is_directory(self) -> None:
        assert split_name("Makefile") == ("Makefile", NodeKind.directory)

    def test_dotted_directory_with_slash(self) -> None:
        assert split_name("v1.2/") == ("v1.2", NodeKind.directory)

    def test_dotted_leaf_without_slash_is_file(self) -> None:
        assert split_name("v1.2") == ("v1.2", NodeKind.file)


class TestBuildForest:
    def test_nested_paths(self) -> None:
        forest = build_forest([
            _line(0, "root/"), _line(1, "apps/"), _line(2, "web/"), _line(3, "package.json"),
        ])
        assert len(forest) == 1
        leaf = forest[0].children[0].children[0].children[0]
        assert leaf.path == "root/apps/web/package.json"
        assert leaf.kind == NodeKind.file

    def test_equal_depths_are_siblings(self) -> None:
        forest = build_forest([_line(0, "root/"), _line(1, "a.txt"), _line(1, "b.txt")])
        assert [c.name for c in forest[0].children] == ["a.txt", "b.txt"]

    def test_pop_back_to_ancestor(self) -> None:
        forest = build_forest([
            _line(0, "root/"), _line(1, "a/"), _line(2, "deep.txt"), _line(1, "b.txt"),
        ])
        root = forest[0]
        assert [c.name for c in root.children] == ["a", "b.txt"]
        assert root.children[1].path == "root/b.txt"

    def test_multiple_roots(self) -> None:
        forest = build_forest([_line(0, "a/"), _line(0, "b/")])
        assert [r.path for r in forest] == ["a", "b"]

    def test_parent_with_children_is_directory(self) -> None:
        forest = build_forest([_line(0, "lib.d"), _line(1, "x.ts")])
        assert forest[0].kind == NodeKind.directory

    def test_line_and_hint_carried(self) -> None:
        forest = build_forest([ParseLine(line=3, depth=0, name="a.txt", hint="note")])
        assert forest[0].line == 3
        assert forest[0].hint == "note"


class TestIteration:
    def test_iter_nodes_depth_first(self) -> None:
        forest = build_forest([
            _line(0, "root/"), _line(1, "a/"), _line(2, "x.txt"), _line(1, "b.txt"),
        ])
        assert [(d, n.name) for d, n in iter_nodes(forest)] == [
            (0, "root"), (1, "a"), (2, "x.txt"), (1, "b.txt"),
        ]

    def test_forest_paths(self) -> None:
        forest = build_forest([_line(0, "root/"), _line(1, "a.txt"), _line(0, "other/")])
        assert forest_paths(forest) == ["root", "root/a.txt", "other"]
