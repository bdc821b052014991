"""Validation data models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ValidationSeverity(str, Enum):
    """Severity level for structural issues and path violations."""

    error = "error"
    warning = "warning"


class StructuralIssue(BaseModel):
    """A parse-time finding about the shape of the tree text."""

    severity: ValidationSeverity
    check_name: str
    message: str
    line: int | None = None
    context: str | None = None


class TreeStructureError(Exception):
    """Fatal structural failure, listing every offending line."""

    def __init__(
        self,
        issues: list[StructuralIssue],
        warnings: list[StructuralIssue] | None = None,
    ) -> None:
        self.issues = issues
        self.warnings = warnings or []
        super().__init__(self._format(issues))

    @staticmethod
    def _format(issues: list[StructuralIssue]) -> str:
        lines = [f"Tree structure is invalid ({len(issues)} error(s)):"]
        for issue in issues:
            if issue.line is None:
                lines.append(f"  {issue.message}")
            else:
                lines.append(f"  line {issue.line}: {issue.message}: {issue.context!r}")
        return "\n".join(lines)


class ViolationCode(str, Enum):
    """Path rule violation codes."""

    long_path = "longPath"
    max_depth = "maxDepth"
    long_name = "longName"
    invalid_chars = "invalidChars"
    reserved_name = "reservedName"
    wrong_case = "wrongCase"
    dots_in_dir = "dotsInDir"
    spaces_in_path = "spacesInPath"
    missing_extension = "missingExtension"
    invalid_extension = "invalidExtension"
    duplicate_path = "duplicatePath"
    duplicate_name = "duplicateName"


class Violation(BaseModel):
    """A single path rule failure, with an optional suggested replacement."""

    severity: ValidationSeverity
    code: ViolationCode
    path: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)

    @property
    def resolved_path(self) -> str | None:
        return self.details.get("resolved_path")

    @property
    def is_resolved(self) -> bool:
        return bool(self.details.get("resolved", False))
