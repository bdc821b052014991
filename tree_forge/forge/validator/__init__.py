"""Structural and path-rule validation for parsed trees."""

from forge.validator.models import (
    StructuralIssue,
    TreeStructureError,
    ValidationSeverity,
    Violation,
    ViolationCode,
)
from forge.validator.rules import EnforceCase, ValidationRules

__all__ = [
    "EnforceCase",
    "StructuralIssue",
    "TreeStructureError",
    "ValidationRules",
    "ValidationSeverity",
    "Violation",
    "ViolationCode",
]
