"""Structural checks on parsed tree text, run before any path rule."""

from __future__ import annotations

import logging

from forge.parser.pipeline import ParseResult
from forge.parser.tree_builder import iter_nodes, split_name
from forge.validator.models import StructuralIssue, TreeStructureError, ValidationSeverity
from forge.validator.rules import ABSOLUTE_PATH_RE, OS_RESERVED_CHARS_RE

logger = logging.getLogger(__name__)


def _issue(
    check_name: str,
    message: str,
    line: int | None = None,
    lines: list[str] | None = None,
    severity: ValidationSeverity = ValidationSeverity.error,
) -> StructuralIssue:
    context = None
    if line is not None and lines is not None and 0 < line <= len(lines):
        context = lines[line - 1]
    return StructuralIssue(
        severity=severity, check_name=check_name, message=message, line=line, context=context,
    )


def check_root(parsed: ParseResult, lines: list[str]) -> list[StructuralIssue]:
    """The first entry must sit at column zero with no guide glyphs."""
    if not parsed.lines:
        return []
    first = parsed.lines[0]
    if first.indent > 0 or first.depth > 0:
        return [_issue("root_indent", "First line must be a root node without indentation", first.line, lines)]
    return []


def check_depth_steps(parsed: ParseResult, lines: list[str]) -> list[StructuralIssue]:
    """Depth may grow by at most one level from one entry to the next."""
    issues: list[StructuralIssue] = []
    previous = 0
    for parse_line in parsed.lines:
        if parse_line.depth > previous + 1:
            issues.append(
                _issue(
                    "depth_jump",
                    f"Invalid indentation: depth {parse_line.depth} follows depth {previous}, "
                    "depth can only increase by 1",
                    parse_line.line,
                    lines,
                )
            )
        previous = parse_line.depth
    return issues


def check_names(parsed: ParseResult, lines: list[str]) -> list[StructuralIssue]:
    """Names must be non-empty, relative, and free of OS-reserved characters."""
    issues: list[StructuralIssue] = []
    for parse_line in parsed.lines:
        name, _kind = split_name(parse_line.name)
        if not name.strip():
            issues.append(_issue("empty_name", "Empty node name", parse_line.line, lines))
            continue
        if OS_RESERVED_CHARS_RE.search(name):
            issues.append(
                _issue(
                    "reserved_chars",
                    'Node name contains invalid characters (< > : " | ? *)',
                    parse_line.line,
                    lines,
                )
            )
        if ABSOLUTE_PATH_RE.match(name):
            issues.append(_issue("absolute_path", "Node names cannot be absolute paths", parse_line.line, lines))
    return issues


def check_duplicate_paths(parsed: ParseResult, lines: list[str]) -> list[StructuralIssue]:
    """Two lines may not produce the same raw path."""
    issues: list[StructuralIssue] = []
    first_seen: dict[str, int | None] = {}
    for _depth, node in iter_nodes(parsed.forest):
        if node.path in first_seen:
            first_line = first_seen[node.path]
            where = f" (first defined on line {first_line})" if first_line is not None else ""
            issues.append(
                _issue("duplicate_path", f"Path '{node.path}' is duplicated{where}", node.line, lines)
            )
        else:
            first_seen[node.path] = node.line
    return issues


def check_structure(
    text: str,
    parsed: ParseResult,
) -> list[StructuralIssue]:
    """Run every structural check; raise if any fails.

    Returns the non-fatal warnings (multiple roots, comment block spacing).
    Raises ``TreeStructureError`` listing every offending line otherwise.
    """
    lines = text.splitlines()
    errors: list[StructuralIssue] = []
    warnings: list[StructuralIssue] = []

    for issue in parsed.comment_issues:
        (errors if issue.severity == ValidationSeverity.error else warnings).append(issue)

    if not parsed.lines:
        errors.append(_issue("empty_tree", "Tree is empty. Please provide a valid tree structure"))
    else:
        errors.extend(check_root(parsed, lines))
        errors.extend(check_depth_steps(parsed, lines))
        errors.extend(check_names(parsed, lines))
        errors.extend(check_duplicate_paths(parsed, lines))

    if len(parsed.forest) > 1:
        warnings.append(
            _issue(
                "multiple_roots",
                f"Multiple root nodes found ({len(parsed.forest)}). This might lead to unexpected behavior",
                severity=ValidationSeverity.warning,
            )
        )

    if errors:
        errors.sort(key=lambda i: (i.line is None, i.line or 0))
        logger.warning("Tree structure check failed with %d error(s)", len(errors))
        raise TreeStructureError(errors, warnings)

    return warnings
