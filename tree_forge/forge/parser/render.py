"""Serialize a forest back to tree text."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from forge.parser.models import Node

# --- Tree Format Constants ---
TREE_BRANCH = "├── "
TREE_LAST_BRANCH = "└── "
TREE_PIPE = "│   "
TREE_SPACE = "    "

RenderFormat = Literal["indent", "tree"]


def _label(node: Node, with_hints: bool) -> str:
    suffix = "/" if node.is_directory else ""
    hint = f" # {node.hint}" if with_hints and node.hint else ""
    return f"{node.name}{suffix}{hint}"


def render_forest(
    forest: Sequence[Node],
    output_format: RenderFormat = "indent",
    indent: str = "  ",
    with_hints: bool = True,
) -> str:
    """Render nodes in source order.

    ``indent`` repeats ``indent`` once per level; ``tree`` draws box guides
    below each root. Parsing the result reproduces the same forest.
    """
    map_lines: list[str] = []

    def build_indent(node: Node, level: int) -> None:
        map_lines.append(f"{indent * level}{_label(node, with_hints)}")
        for child in node.children:
            build_indent(child, level + 1)

    def build_tree(node: Node, prefix_str: str, is_last: bool, is_root: bool) -> None:
        if is_root:
            map_lines.append(_label(node, with_hints))
            child_prefix = ""
        else:
            branch = TREE_LAST_BRANCH if is_last else TREE_BRANCH
            map_lines.append(f"{prefix_str}{branch}{_label(node, with_hints)}")
            child_prefix = prefix_str + (TREE_SPACE if is_last else TREE_PIPE)

        num_children = len(node.children)
        for i, child in enumerate(node.children):
            build_tree(child, child_prefix, i == num_children - 1, False)

    for root in forest:
        if output_format == "tree":
            build_tree(root, "", True, True)
        else:
            build_indent(root, 0)

    return "\n".join(map_lines)
