"""Parsing pipeline: strip comments, classify lines, build the forest."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from forge.parser.comments import strip_comments
from forge.parser.indent import classify_lines
from forge.parser.models import IndentProfile, Node, ParseConfig, ParseLine
from forge.parser.tree_builder import build_forest
from forge.validator.models import StructuralIssue

logger = logging.getLogger(__name__)


class ParseResult(BaseModel):
    """Unchecked parse output; structural validation runs on top of it."""

    forest: list[Node] = Field(default_factory=list)
    lines: list[ParseLine] = Field(default_factory=list)
    profile: IndentProfile
    comment_issues: list[StructuralIssue] = Field(default_factory=list)


def parse_tree(text: str, config: ParseConfig | None = None) -> ParseResult:
    """Parse tree text without judging whether it is well formed.

    Order: 1. comment stripping → 2. indent/guide classification →
    3. stack-based forest construction.
    """
    config = config or ParseConfig()
    original_lines = text.splitlines()

    stripped = strip_comments(text)
    profile, lines = classify_lines(stripped, original_lines, config)
    forest = build_forest(lines)

    logger.debug("Parsed %d line(s) into %d root(s)", len(lines), len(forest))
    return ParseResult(
        forest=forest,
        lines=lines,
        profile=profile,
        comment_issues=stripped.issues,
    )
