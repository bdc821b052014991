"""Tree API: parse and validate tree text."""

from __future__ import annotations

import logging
from typing import Any, Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, ValidationError

from forge.config import ForgeConfig
from forge.deps import get_config
from forge.parser.models import Node
from forge.parser.render import render_forest
from forge.parser.tree_builder import forest_paths
from forge.pipeline import parse_checked, process_tree
from forge.resolver.strategy import ConflictStrategy
from forge.validator.models import StructuralIssue, TreeStructureError, Violation
from forge.validator.normalize import PathNormalizer
from forge.validator.rules import ValidationRules

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["tree"])


class ParseRequest(BaseModel):
    text: str = Field(..., description="Tree text (indented or drawn with guide glyphs)")
    render: Literal["indent", "tree"] | None = Field(
        None, description="Also return the forest re-rendered in this format",
    )


class ParseResponse(BaseModel):
    forest: list[Node] = Field(default_factory=list)
    paths: list[str] = Field(default_factory=list)
    warnings: list[StructuralIssue] = Field(default_factory=list)
    rendered: str | None = None


class ValidateRequest(BaseModel):
    text: str = Field(..., description="Tree text to parse and validate")
    rules: dict[str, Any] | None = Field(
        None, description="Rule overrides (snake_case or camelCase keys)",
    )
    strategy: dict[str, Any] | None = Field(
        None, description="Conflict strategy overrides (snake_case or camelCase keys)",
    )


class ValidateResponse(BaseModel):
    valid: bool
    forest: list[Node] = Field(default_factory=list)
    violations: list[Violation] = Field(default_factory=list)
    warnings: list[StructuralIssue] = Field(default_factory=list)
    normalized_paths: list[str] = Field(default_factory=list)
    error_count: int = 0
    warning_count: int = 0
    summary: str = ""


def _structure_failure(e: TreeStructureError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={
            "message": str(e),
            "issues": [i.model_dump(mode="json") for i in e.issues],
            "warnings": [w.model_dump(mode="json") for w in e.warnings],
        },
    )


def _with_overrides(
    config: ForgeConfig,
    rules: dict[str, Any] | None,
    strategy: dict[str, Any] | None,
) -> ForgeConfig:
    """Layer request overrides on top of the active config."""
    update: dict[str, Any] = {}
    if rules:
        override = ValidationRules.model_validate(rules)
        update["rules"] = config.rules.model_copy(
            update={name: getattr(override, name) for name in override.model_fields_set},
        )
    if strategy:
        override = ConflictStrategy.model_validate(strategy)
        update["strategy"] = config.strategy.model_copy(
            update={name: getattr(override, name) for name in override.model_fields_set},
        )
    return config.model_copy(update=update) if update else config


@router.post("/parse", response_model=ParseResponse)
async def parse(
    body: ParseRequest,
    config: ForgeConfig = Depends(get_config),
) -> ParseResponse:
    """Parse tree text into a forest and report structural warnings."""
    try:
        parsed, warnings = parse_checked(body.text, config.parse)
    except TreeStructureError as e:
        raise _structure_failure(e)

    rendered = render_forest(parsed.forest, body.render) if body.render else None
    return ParseResponse(
        forest=parsed.forest,
        paths=forest_paths(parsed.forest),
        warnings=warnings,
        rendered=rendered,
    )


@router.post("/validate", response_model=ValidateResponse)
async def validate(
    body: ValidateRequest,
    config: ForgeConfig = Depends(get_config),
) -> ValidateResponse:
    """Parse, check, and validate every path against the rules."""
    try:
        effective = _with_overrides(config, body.rules, body.strategy)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False, include_input=False),
        )

    try:
        result = process_tree(body.text, effective)
    except TreeStructureError as e:
        raise _structure_failure(e)

    normalizer = PathNormalizer.from_settings(effective.target_dir, effective.normalization)
    return ValidateResponse(
        valid=not result.has_errors,
        forest=result.forest,
        violations=result.violations,
        warnings=result.warnings,
        normalized_paths=[normalizer.normalize(p) for p in forest_paths(result.forest)],
        error_count=result.error_count,
        warning_count=result.warning_count,
        summary=result.summary,
    )


@router.get("/config")
async def get_active_config(
    config: ForgeConfig = Depends(get_config),
) -> dict[str, Any]:
    """Return the active configuration using the camelCase field names."""
    return config.model_dump(mode="json", by_alias=True)
