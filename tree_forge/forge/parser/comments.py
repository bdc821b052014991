"""Comment removal that keeps line numbering intact.

Supported forms:
  - triple-quoted blocks (three double or single quotes) opening a line
  - C-style blocks opening with ``/*`` and closing with ``*/``
  - hash blocks toggled by a line that is exactly ``#``, ``#---`` or ``# ---``
  - trailing ``#``, ``//`` and inline ``/* ... */`` comments on content lines

Every removed line is replaced by an empty string, so index ``i`` of the
output always refers to source line ``i + 1``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from forge.validator.models import StructuralIssue, ValidationSeverity

TRIPLE_QUOTES = ('"""', "'''")
HASH_TOGGLES = {"#", "#---", "# ---"}

_INLINE_BLOCK_RE = re.compile(r"/\*(.*?)\*/")
# '#' or '//' not preceded by ':' so URL-like text such as http://host survives
_TRAILING_RE = re.compile(r"(?<!:)(?:#|//)(.*)$")

_BLOCK_NAMES = {
    "triple": "Python-style",
    "c": "C-style",
    "hash": "hash-style",
}


@dataclass
class StrippedText:
    """Comment-free lines plus what was learned while stripping."""

    lines: list[str] = field(default_factory=list)
    hints: dict[int, str] = field(default_factory=dict)  # 0-based line index -> comment text
    issues: list[StructuralIssue] = field(default_factory=list)


def _is_blank(lines: list[str], index: int) -> bool:
    return index < 0 or index >= len(lines) or not lines[index].strip()


def _strip_inline(line: str) -> tuple[str, str | None]:
    """Remove inline and trailing comments, returning (content, comment text)."""
    notes: list[str] = []

    def _keep_note(match: re.Match[str]) -> str:
        notes.append(match.group(1).strip())
        return ""

    content = _INLINE_BLOCK_RE.sub(_keep_note, line)
    trailing = _TRAILING_RE.search(content)
    if trailing:
        notes.append(trailing.group(1).strip())
        content = content[: trailing.start()]

    hint = " ".join(n for n in notes if n) or None
    return content.rstrip(), hint


def strip_comments(text: str) -> StrippedText:
    """Strip all supported comment forms from ``text``."""
    raw_lines = text.splitlines()
    result = StrippedText()

    block: str | None = None
    quote = ""
    block_start = 0

    def spacing_warning(index: int, message: str) -> None:
        result.issues.append(
            StructuralIssue(
                severity=ValidationSeverity.warning,
                check_name="comment_spacing",
                message=message,
                line=index + 1,
                context=raw_lines[index],
            )
        )

    def open_block(kind: str, index: int) -> None:
        nonlocal block, block_start
        if not _is_blank(raw_lines, index - 1):
            spacing_warning(index, "Multiline comment block should be preceded by an empty line")
        block = kind
        block_start = index

    def close_block(index: int) -> None:
        nonlocal block
        if not _is_blank(raw_lines, index + 1):
            spacing_warning(index, "Multiline comment block should be followed by an empty line")
        block = None

    for index, line in enumerate(raw_lines):
        trimmed = line.strip()

        if block == "triple":
            if quote in trimmed:
                close_block(index)
            result.lines.append("")
            continue

        if block == "c":
            if "*/" in trimmed:
                close_block(index)
            result.lines.append("")
            continue

        if block == "hash":
            if trimmed in HASH_TOGGLES:
                close_block(index)
            result.lines.append("")
            continue

        if trimmed.startswith(TRIPLE_QUOTES):
            quote = trimmed[:3]
            # a block that opens and closes on the same line is just removed
            if not (len(trimmed) >= 6 and trimmed.endswith(quote)):
                open_block("triple", index)
            result.lines.append("")
            continue

        if trimmed.startswith("/*") and "*/" not in trimmed[2:]:
            open_block("c", index)
            result.lines.append("")
            continue

        if trimmed in HASH_TOGGLES:
            open_block("hash", index)
            result.lines.append("")
            continue

        content, hint = _strip_inline(line)
        if hint and content.strip():
            result.hints[index] = hint
        result.lines.append(content)

    if block is not None:
        result.issues.append(
            StructuralIssue(
                severity=ValidationSeverity.error,
                check_name="unclosed_comment",
                message=f"Unclosed {_BLOCK_NAMES[block]} comment block",
                line=block_start + 1,
                context=raw_lines[block_start],
            )
        )

    return result
