"""Path validation rule set and the platform constants it defaults to."""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Platform constants
# ---------------------------------------------------------------------------

DEFAULT_ALLOWED_CHARS = r"^[a-zA-Z0-9_.\-]+$"

# Windows device names; matched case-insensitively against whole names
RESERVED_DEVICE_NAMES: tuple[str, ...] = (
    "CON", "PRN", "AUX", "NUL",
    "COM1", "COM2", "COM3", "COM4", "COM5", "COM6", "COM7", "COM8", "COM9",
    "LPT1", "LPT2", "LPT3", "LPT4", "LPT5", "LPT6", "LPT7", "LPT8", "LPT9",
)

# Characters no mainstream filesystem accepts inside a name
OS_RESERVED_CHARS = '<>:"|?*'
OS_RESERVED_CHARS_RE = re.compile(f"[{re.escape(OS_RESERVED_CHARS)}]")

ABSOLUTE_PATH_RE = re.compile(r"^(?:/|[A-Za-z]:\\)")

DEFAULT_MAX_DEPTH = 32
DEFAULT_MAX_PATH_LENGTH = 260
DEFAULT_MAX_NAME_LENGTH = 255


class EnforceCase(str, Enum):
    any = "any"
    lower = "lower"
    upper = "upper"


class ValidationRules(BaseModel):
    """Immutable rule set evaluated against every node path."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    max_depth: int = Field(DEFAULT_MAX_DEPTH, ge=1)
    max_path_length: int = Field(DEFAULT_MAX_PATH_LENGTH, ge=1)
    max_name_length: int = Field(DEFAULT_MAX_NAME_LENGTH, ge=1)
    allowed_chars: str = DEFAULT_ALLOWED_CHARS
    disallowed_names: tuple[str, ...] = RESERVED_DEVICE_NAMES
    enforce_case: EnforceCase = EnforceCase.any
    allow_dots: bool = False
    allow_spaces: bool = False
    require_extensions: bool = False
    allowed_extensions: tuple[str, ...] = ()
    unique_names: bool = True
    unique_paths: bool = True
    normalize_slashes: bool = True
    trim_whitespace: bool = True
    resolve_relative: bool = False

    @field_validator("allowed_chars")
    @classmethod
    def _compilable(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"allowed_chars is not a valid regular expression: {e}") from e
        return value

    @field_validator("allowed_extensions")
    @classmethod
    def _dotted_lowercase(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(
            ext.lower() if ext.startswith(".") else f".{ext.lower()}"
            for ext in value
            if ext
        )

    def is_reserved(self, name: str) -> bool:
        upper = name.upper()
        return any(upper == reserved.upper() for reserved in self.disallowed_names)

    def char_allowed(self, text: str) -> bool:
        """True when ``text`` fully matches the allowed-character pattern."""
        return re.fullmatch(self.allowed_chars, text) is not None
