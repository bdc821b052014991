"""Full pipeline: parse, structural check, then path rules."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from forge.config import ForgeConfig
from forge.parser.models import Node, ParseConfig
from forge.parser.pipeline import ParseResult, parse_tree
from forge.parser.tree_builder import iter_nodes
from forge.validator.models import StructuralIssue, ValidationSeverity, Violation
from forge.validator.paths import PathValidator
from forge.validator.structure import check_structure

logger = logging.getLogger(__name__)


class ForgeResult(BaseModel):
    """Forest plus every finding from one pipeline run."""

    forest: list[Node] = Field(default_factory=list)
    violations: list[Violation] = Field(default_factory=list)
    warnings: list[StructuralIssue] = Field(default_factory=list)
    node_count: int = 0
    error_count: int = 0
    warning_count: int = 0
    summary: str = ""

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0


def parse_checked(text: str, config: ParseConfig | None = None) -> tuple[ParseResult, list[StructuralIssue]]:
    """Parse and structurally check tree text.

    Raises ``TreeStructureError`` on any fatal defect; returns the parse
    result and the structural warnings otherwise.
    """
    parsed = parse_tree(text, config)
    warnings = check_structure(text, parsed)
    return parsed, warnings


def _build_summary(node_count: int, violations: list[Violation]) -> str:
    if not violations:
        return f"Validated {node_count} path(s), no violations found."

    counts: dict[str, int] = {}
    for v in violations:
        counts[v.severity.value] = counts.get(v.severity.value, 0) + 1

    parts = [f"Validated {node_count} path(s), found {len(violations)} violation(s): "]
    severity_labels = []
    for sev in ("error", "warning"):
        if sev in counts:
            severity_labels.append(f"{counts[sev]} {sev}")
    parts.append(", ".join(severity_labels) + ".")

    resolved = sum(1 for v in violations if v.is_resolved)
    if resolved:
        parts.append(f" {resolved} with a suggested fix.")

    return "".join(parts)


def process_tree(text: str, config: ForgeConfig | None = None) -> ForgeResult:
    """Run the whole pipeline on tree text.

    Order: 1. parse → 2. structural check → 3. path rules.
    Structural failures raise ``TreeStructureError`` before any path rule
    runs; path violations only accumulate.
    """
    config = config or ForgeConfig()

    parsed, warnings = parse_checked(text, config.parse)

    validator = PathValidator(config.rules, config.strategy)
    violations = validator.validate_forest(parsed.forest)

    node_count = sum(1 for _ in iter_nodes(parsed.forest))
    error_count = sum(1 for v in violations if v.severity == ValidationSeverity.error)
    warning_count = len(violations) - error_count
    summary = _build_summary(node_count, violations)

    logger.info(summary)
    return ForgeResult(
        forest=parsed.forest,
        violations=violations,
        warnings=warnings,
        node_count=node_count,
        error_count=error_count,
        warning_count=warning_count,
        summary=summary,
    )
