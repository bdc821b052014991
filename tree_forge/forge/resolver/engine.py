"""Dispatch a repairable violation to its configured resolution strategy."""

from __future__ import annotations

import logging
from collections.abc import Container
from typing import Any

from forge.resolver import strategies
from forge.resolver.strategy import ConflictStrategy, ResolutionMode
from forge.validator.models import ViolationCode
from forge.validator.rules import ValidationRules

logger = logging.getLogger(__name__)

# Categories for which a replacement path can be computed
REPAIRABLE_CODES = {
    ViolationCode.duplicate_path,
    ViolationCode.duplicate_name,
    ViolationCode.invalid_chars,
    ViolationCode.long_path,
}


def _resolve_duplicate(
    path: str,
    mode: ResolutionMode,
    strategy: ConflictStrategy,
    seen_paths: Container[str],
) -> str:
    if mode == ResolutionMode.numbered:
        return strategies.rename_numbered(
            path,
            seen_paths,
            pattern=strategy.rename_pattern,
            counter_start=strategy.counter_start,
            counter_padding=strategy.counter_padding,
            max_attempts=strategy.max_attempts,
            preserve_extension=strategy.preserve_extension,
        )
    if mode == ResolutionMode.timestamp:
        return strategies.rename_timestamp(path, preserve_extension=strategy.preserve_extension)
    if mode == ResolutionMode.skip:
        return ""
    # merge: the executor combines both entries under the original path
    return path


def _resolve_invalid_chars(
    path: str,
    mode: ResolutionMode,
    rules: ValidationRules,
    strategy: ConflictStrategy,
) -> str:
    if mode == ResolutionMode.replace:
        return strategies.replace_invalid_chars(
            path,
            rules.allowed_chars,
            strategy.replacement_char,
            preserve_extension=strategy.preserve_extension,
        )
    if mode == ResolutionMode.strip:
        return strategies.strip_invalid_chars(
            path, rules.allowed_chars, preserve_extension=strategy.preserve_extension,
        )
    if mode == ResolutionMode.encode:
        return strategies.encode_path(path)
    if mode == ResolutionMode.transliterate:
        return strategies.transliterate_path(path, strategy.transliteration_map)
    return path


def _resolve_long_path(
    path: str,
    mode: ResolutionMode,
    rules: ValidationRules,
    strategy: ConflictStrategy,
) -> str:
    if mode == ResolutionMode.truncate:
        return strategies.truncate_path(
            path, rules.max_path_length, preserve_extension=strategy.preserve_extension,
        )
    if mode == ResolutionMode.hash:
        return strategies.hash_path(
            path, strategy.hash_algorithm, preserve_extension=strategy.preserve_extension,
        )
    if mode == ResolutionMode.shorten:
        return strategies.shorten_path(
            path, rules.max_path_length, preserve_extension=strategy.preserve_extension,
        )
    return path


def resolve_conflict(
    path: str,
    code: ViolationCode,
    details: dict[str, Any],
    rules: ValidationRules,
    strategy: ConflictStrategy,
    seen_paths: Container[str] = frozenset(),
) -> str:
    """Compute a replacement path for a violation.

    Returns the unchanged path when the category is not repairable, the
    mode only reports (error/warn), or the strategy cannot find a fix.
    An empty string means the node should be skipped.
    """
    mode = strategy.mode_for(code)
    if mode is None:
        return path

    if not isinstance(mode, ResolutionMode):
        try:
            resolved = mode(path, code, dict(details))
        except Exception:
            logger.exception("Custom resolver failed for %s (%s)", path, code.value)
            return path
        if not isinstance(resolved, str):
            logger.warning(
                "Custom resolver returned %r for %s, expected a string", resolved, path,
            )
            return path
        return resolved

    if code in (ViolationCode.duplicate_path, ViolationCode.duplicate_name):
        return _resolve_duplicate(path, mode, strategy, seen_paths)
    if code == ViolationCode.invalid_chars:
        return _resolve_invalid_chars(path, mode, rules, strategy)
    if code == ViolationCode.long_path:
        return _resolve_long_path(path, mode, rules, strategy)
    return path
