"""Rebuild a forest of nodes from depth-annotated lines."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from forge.parser.models import Node, NodeKind, ParseLine

PATH_SEPARATOR = "/"


def split_name(raw: str) -> tuple[str, NodeKind]:
    """Strip a trailing '/' and infer the kind of an entry.

    A trailing slash marks a directory explicitly. Otherwise a name with an
    embedded dot is taken to be a file and anything else a directory.
    """
    if raw.endswith(PATH_SEPARATOR):
        return raw[:-1], NodeKind.directory
    if "." in raw:
        return raw, NodeKind.file
    return raw, NodeKind.directory


def join_path(parent: str, name: str) -> str:
    return f"{parent}{PATH_SEPARATOR}{name}" if parent else name


def build_forest(lines: Sequence[ParseLine]) -> list[Node]:
    """Nest lines by depth; equal depths are always siblings.

    Source order is kept as sibling order. A node that ends up with
    children is a directory whatever its name suggested.
    """
    roots: list[Node] = []
    stack: list[tuple[int, Node]] = []

    for parse_line in lines:
        name, kind = split_name(parse_line.name)
        node = Node(name=name, path=name, kind=kind, hint=parse_line.hint, line=parse_line.line)

        while stack and stack[-1][0] >= parse_line.depth:
            stack.pop()

        if stack:
            parent = stack[-1][1]
            node.path = join_path(parent.path, name)
            parent.children.append(node)
            parent.kind = NodeKind.directory
        else:
            roots.append(node)

        stack.append((parse_line.depth, node))

    return roots


def iter_nodes(forest: Sequence[Node]) -> Iterator[tuple[int, Node]]:
    """Yield (depth, node) pairs depth-first in source order."""
    pending: list[tuple[int, Node]] = [(0, root) for root in reversed(forest)]
    while pending:
        depth, node = pending.pop()
        yield depth, node
        pending.extend((depth + 1, child) for child in reversed(node.children))


def forest_paths(forest: Sequence[Node]) -> list[str]:
    return [node.path for _, node in iter_nodes(forest)]
