"""Path rule validation with duplicate tracking and suggested fixes."""

from __future__ import annotations

import logging
import posixpath
import re
from typing import Any

from forge.parser.models import Node, NodeKind
from forge.parser.tree_builder import iter_nodes
from forge.resolver.engine import REPAIRABLE_CODES, resolve_conflict
from forge.resolver.strategy import ConflictStrategy, ResolutionMode
from forge.validator.models import ValidationSeverity, Violation, ViolationCode
from forge.validator.rules import EnforceCase, ValidationRules
from forge.validator.session import ValidationSession

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s")
_SLASHES_RE = re.compile(r"[\\/]+")


def _message(code: ViolationCode, details: dict[str, Any]) -> str:
    if code == ViolationCode.long_path:
        return f"Path exceeds maximum length of {details['max_length']} characters"
    if code == ViolationCode.max_depth:
        return f"Path exceeds maximum depth of {details['max_depth']} levels"
    if code == ViolationCode.long_name:
        return f"Name exceeds maximum length of {details['max_length']} characters"
    if code == ViolationCode.invalid_chars:
        return f"Name contains invalid characters (must match {details['pattern']})"
    if code == ViolationCode.reserved_name:
        return f'"{details["name"]}" is a reserved name'
    if code == ViolationCode.wrong_case:
        return f"Name must be {details['required_case']}case"
    if code == ViolationCode.dots_in_dir:
        return "Directory names cannot contain dots"
    if code == ViolationCode.spaces_in_path:
        return "Path cannot contain spaces"
    if code == ViolationCode.missing_extension:
        return "Files must have extensions"
    if code == ViolationCode.invalid_extension:
        return f"Invalid file extension (allowed: {', '.join(details['allowed_extensions'])})"
    if code == ViolationCode.duplicate_path:
        return "Duplicate path"
    return f'Duplicate name "{details["name"]}" in directory'


class PathValidator:
    """Evaluates node paths against a rule set, one session per tree."""

    def __init__(
        self,
        rules: ValidationRules | None = None,
        strategy: ConflictStrategy | None = None,
        session: ValidationSession | None = None,
    ) -> None:
        self.rules = rules or ValidationRules()
        self.strategy = strategy or ConflictStrategy()
        self.session = session or ValidationSession()

    def reset(self) -> None:
        self.session.reset()

    def normalize_path(self, path: str) -> str:
        normalized = path
        if self.rules.normalize_slashes:
            normalized = _SLASHES_RE.sub("/", normalized)
        if self.rules.trim_whitespace:
            normalized = "/".join(part.strip() for part in normalized.split("/"))
        if self.rules.resolve_relative:
            normalized = _SLASHES_RE.sub("/", posixpath.normpath(normalized))
        return normalized

    def validate_path(self, path: str, kind: NodeKind | None = None) -> list[Violation]:
        """Run every rule against ``path`` and record it in the session.

        ``kind`` enables the directory-only and file-only checks; without it
        the dots-in-directory check is skipped and extension checks treat
        the path as a file.
        """
        rules = self.rules
        normalized = self.normalize_path(path)
        parts = normalized.split("/")
        name = parts[-1]
        parent = "/".join(parts[:-1])
        is_dir = kind == NodeKind.directory

        found: list[tuple[ViolationCode, dict[str, Any]]] = []

        if len(normalized) > rules.max_path_length:
            found.append((ViolationCode.long_path, {
                "length": len(normalized), "max_length": rules.max_path_length,
            }))

        if len(parts) > rules.max_depth:
            found.append((ViolationCode.max_depth, {
                "depth": len(parts), "max_depth": rules.max_depth,
            }))

        if len(name) > rules.max_name_length:
            found.append((ViolationCode.long_name, {
                "name": name, "length": len(name), "max_length": rules.max_name_length,
            }))

        if not rules.char_allowed(name):
            found.append((ViolationCode.invalid_chars, {
                "name": name, "pattern": rules.allowed_chars,
            }))

        if rules.is_reserved(name):
            found.append((ViolationCode.reserved_name, {"name": name}))

        if rules.enforce_case != EnforceCase.any:
            expected = name.lower() if rules.enforce_case == EnforceCase.lower else name.upper()
            if name != expected:
                found.append((ViolationCode.wrong_case, {
                    "name": name, "required_case": rules.enforce_case.value,
                }))

        if not rules.allow_dots and is_dir and "." in name:
            found.append((ViolationCode.dots_in_dir, {"name": name}))

        if not rules.allow_spaces and _WHITESPACE_RE.search(normalized):
            found.append((ViolationCode.spaces_in_path, {}))

        if not is_dir:
            _, dot, suffix = name.rpartition(".")
            ext = f".{suffix.lower()}" if dot and suffix else ""
            if rules.require_extensions and not ext:
                found.append((ViolationCode.missing_extension, {"name": name}))
            if rules.allowed_extensions and ext and ext not in rules.allowed_extensions:
                found.append((ViolationCode.invalid_extension, {
                    "extension": ext, "allowed_extensions": list(rules.allowed_extensions),
                }))

        if rules.unique_paths and self.session.has_path(normalized):
            found.append((ViolationCode.duplicate_path, {}))

        if rules.unique_names and self.session.has_name(parent, name):
            found.append((ViolationCode.duplicate_name, {"name": name, "directory": parent}))

        # resolutions see the session as it was before this path was recorded
        violations = [self._violation(code, normalized, details) for code, details in found]

        self.session.record_path(normalized)
        self.session.record_name(parent, name)
        for violation in violations:
            if violation.code in (ViolationCode.duplicate_path, ViolationCode.duplicate_name):
                resolved = violation.resolved_path
                if resolved and resolved != normalized:
                    self.session.record_resolved(resolved)

        return violations

    def validate_node(self, node: Node) -> list[Violation]:
        """Validate a single node (not its children)."""
        violations = self.validate_path(node.path, node.kind)
        if node.line is not None:
            for violation in violations:
                violation.details.setdefault("line", node.line)
        return violations

    def validate_forest(self, forest: list[Node]) -> list[Violation]:
        """Validate every node depth-first in a fresh session."""
        self.session = ValidationSession()
        violations: list[Violation] = []

        for _depth, node in iter_nodes(forest):
            violations.extend(self.validate_node(node))

        logger.debug("Path rules produced %d violation(s)", len(violations))
        return violations

    def _violation(self, code: ViolationCode, path: str, details: dict[str, Any]) -> Violation:
        details = {"path": path, **details}
        severity = (
            ValidationSeverity.warning
            if self.strategy.is_warning(code)
            else ValidationSeverity.error
        )

        if code in REPAIRABLE_CODES:
            resolved = resolve_conflict(
                path, code, details, self.rules, self.strategy, self.session.seen_paths,
            )
            details["resolved_path"] = resolved
            details["resolved"] = resolved != path
            if self.strategy.mode_for(code) == ResolutionMode.merge:
                details["merge_strategy"] = self.strategy.merge_strategy.model_dump()
            elif not details["resolved"] and self._mode_resolves(code):
                logger.warning("Could not resolve %s for %s", code.value, path)

        return Violation(
            severity=severity,
            code=code,
            path=path,
            message=_message(code, details),
            details=details,
        )

    def _mode_resolves(self, code: ViolationCode) -> bool:
        mode = self.strategy.mode_for(code)
        return mode not in (ResolutionMode.error, ResolutionMode.warn, ResolutionMode.merge)
