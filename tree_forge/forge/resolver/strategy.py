"""Conflict strategy configuration: one resolution mode per violation category."""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from forge.validator.models import ViolationCode


class ResolutionMode(str, Enum):
    """Built-in resolution modes. ``error`` and ``warn`` only report."""

    error = "error"
    warn = "warn"
    # duplicates
    numbered = "numbered"
    timestamp = "timestamp"
    merge = "merge"
    skip = "skip"
    # invalid characters
    replace = "replace"
    strip = "strip"
    encode = "encode"
    transliterate = "transliterate"
    # long paths
    truncate = "truncate"
    hash = "hash"
    shorten = "shorten"


REPORT_ONLY_MODES = {ResolutionMode.error, ResolutionMode.warn}

DUPLICATE_PATH_MODES = REPORT_ONLY_MODES | {
    ResolutionMode.numbered,
    ResolutionMode.timestamp,
    ResolutionMode.merge,
    ResolutionMode.skip,
}
DUPLICATE_NAME_MODES = REPORT_ONLY_MODES | {
    ResolutionMode.numbered,
    ResolutionMode.timestamp,
    ResolutionMode.skip,
}
INVALID_CHARS_MODES = REPORT_ONLY_MODES | {
    ResolutionMode.replace,
    ResolutionMode.strip,
    ResolutionMode.encode,
    ResolutionMode.transliterate,
}
LONG_PATH_MODES = REPORT_ONLY_MODES | {
    ResolutionMode.truncate,
    ResolutionMode.hash,
    ResolutionMode.shorten,
}

# (path, code, details) -> resolved path
CustomResolver = Callable[[str, ViolationCode, dict[str, Any]], str]

Mode = Union[ResolutionMode, CustomResolver]


class MergeStrategy(BaseModel):
    """How the executor should combine a duplicate with its original."""

    model_config = ConfigDict(frozen=True)

    files: Literal["keep-newer", "keep-older", "overwrite", "skip"] = "keep-newer"
    directories: Literal["merge-recursive", "replace", "skip"] = "merge-recursive"


def _check_mode(value: Mode, allowed: set[ResolutionMode], field_name: str) -> Mode:
    if isinstance(value, ResolutionMode) and value not in allowed:
        names = ", ".join(sorted(m.value for m in allowed))
        raise ValueError(f"'{value.value}' is not a valid mode for {field_name} (allowed: {names})")
    return value


class ConflictStrategy(BaseModel):
    """Immutable mapping from violation category to resolution mode."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    on_duplicate_path: Mode = ResolutionMode.error
    on_duplicate_name: Mode = ResolutionMode.error
    on_invalid_chars: Mode = ResolutionMode.error
    on_long_path: Mode = ResolutionMode.error
    rename_pattern: str = "{name}-{n}"
    replacement_char: str = "_"
    merge_strategy: MergeStrategy = Field(default_factory=MergeStrategy)
    hash_algorithm: str = "sha256"
    transliteration_map: dict[str, str] = Field(default_factory=dict)
    preserve_extension: bool = True
    max_attempts: int = Field(100, ge=1)
    counter_start: int = Field(1, ge=0)
    counter_padding: int = Field(3, ge=0)

    @field_validator("on_duplicate_path")
    @classmethod
    def _duplicate_path_mode(cls, value: Mode) -> Mode:
        return _check_mode(value, DUPLICATE_PATH_MODES, "on_duplicate_path")

    @field_validator("on_duplicate_name")
    @classmethod
    def _duplicate_name_mode(cls, value: Mode) -> Mode:
        return _check_mode(value, DUPLICATE_NAME_MODES, "on_duplicate_name")

    @field_validator("on_invalid_chars")
    @classmethod
    def _invalid_chars_mode(cls, value: Mode) -> Mode:
        return _check_mode(value, INVALID_CHARS_MODES, "on_invalid_chars")

    @field_validator("on_long_path")
    @classmethod
    def _long_path_mode(cls, value: Mode) -> Mode:
        return _check_mode(value, LONG_PATH_MODES, "on_long_path")

    @field_validator("rename_pattern")
    @classmethod
    def _pattern_has_counter(cls, value: str) -> str:
        if "{n}" not in value:
            raise ValueError("rename_pattern must contain the '{n}' placeholder")
        return value

    @field_validator("hash_algorithm")
    @classmethod
    def _known_algorithm(cls, value: str) -> str:
        if value.lower() not in hashlib.algorithms_available:
            raise ValueError(f"Unsupported hash algorithm '{value}'")
        return value.lower()

    def mode_for(self, code: ViolationCode) -> Mode | None:
        """Configured mode for a repairable category, None for the others."""
        return {
            ViolationCode.duplicate_path: self.on_duplicate_path,
            ViolationCode.duplicate_name: self.on_duplicate_name,
            ViolationCode.invalid_chars: self.on_invalid_chars,
            ViolationCode.long_path: self.on_long_path,
        }.get(code)

    def is_warning(self, code: ViolationCode) -> bool:
        return self.mode_for(code) == ResolutionMode.warn
