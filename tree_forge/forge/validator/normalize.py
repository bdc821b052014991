"""Render resolved tree paths for the filesystem layer."""

from __future__ import annotations

import posixpath
import re
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_SEPARATORS_RE = re.compile(r"[\\/]+")

PathStyle = Literal["unix", "windows", "mixed"]
PathBase = Literal["root", "relative", "absolute"]
PathCase = Literal["preserve", "lower", "upper"]


class PathNormalization(BaseModel):
    """How a tree path is turned into a path below the target directory."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    style: PathStyle = "unix"
    base: PathBase = "root"
    case: PathCase = "preserve"


class PathNormalizer:
    """Apply separator style, base directory and casing to tree paths.

    Base handling works on forward slashes; the separator style is applied
    last. ``mixed`` keeps the separators exactly as written.
    """

    def __init__(
        self,
        target_dir: str = ".",
        style: PathStyle = "unix",
        base: PathBase = "root",
        case: PathCase = "preserve",
    ) -> None:
        self.target_dir = target_dir
        self.style = style
        self.base = base
        self.case = case

    @classmethod
    def from_settings(cls, target_dir: str, settings: PathNormalization) -> PathNormalizer:
        return cls(target_dir, settings.style, settings.base, settings.case)

    def normalize(self, path: str) -> str:
        normalized = path if self.style == "mixed" else _SEPARATORS_RE.sub("/", path)
        target = self.target_dir if self.style == "mixed" else _SEPARATORS_RE.sub("/", self.target_dir)

        if self.base == "root":
            normalized = posixpath.join(target, normalized.lstrip("/"))
        elif self.base == "relative":
            if posixpath.isabs(normalized):
                normalized = posixpath.relpath(normalized, target)
        elif not posixpath.isabs(normalized):
            normalized = posixpath.normpath(posixpath.join(target, normalized))

        if self.style == "windows":
            normalized = normalized.replace("/", "\\")

        if self.case == "lower":
            normalized = normalized.lower()
        elif self.case == "upper":
            normalized = normalized.upper()

        return normalized
