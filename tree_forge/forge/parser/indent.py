"""Indentation and guide-glyph classification.

Turns comment-free lines into ``ParseLine`` records carrying a nesting
depth. Two dialects are understood:

- guide detection on: glyphs of the configured tree style in the line
  prefix count as whitespace, and depth is the prefix width divided by the
  width of the first indented line's prefix.
- guide detection off: a leading run of ``-``/``|`` characters gives the
  depth directly; otherwise leading whitespace is divided by the tab size.
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple

from forge.parser.comments import StrippedText
from forge.parser.models import IndentProfile, ParseConfig, ParseLine

logger = logging.getLogger(__name__)

_DASH_PREFIX_RE = re.compile(r"^\s*[-|+`][-|+`\s]*")
_LEADING_WS_RE = re.compile(r"^\s*")
DASH_CHARS = "-|"


class _Measured(NamedTuple):
    prefix: str  # literal prefix text as written
    width: int
    content: str
    has_guides: bool


def _guide_prefix_re(config: ParseConfig) -> re.Pattern[str]:
    return re.compile(rf"^[\s{re.escape(config.tree_style.glyphs)}]*")


def _measure(line: str, config: ParseConfig, guide_re: re.Pattern[str] | None) -> _Measured:
    tab = " " * config.tab_indentation_size

    if guide_re is not None:
        prefix = guide_re.match(line).group(0)
        width = len(prefix.replace("\t", tab))
        has_guides = any(ch in config.tree_style.glyphs for ch in prefix)
        return _Measured(prefix, width, line[len(prefix):], has_guides)

    dashes = _DASH_PREFIX_RE.match(line)
    if dashes:
        prefix = dashes.group(0)
        width = sum(1 for ch in prefix if ch in DASH_CHARS)
        return _Measured(prefix, width, line[len(prefix):], True)

    prefix = _LEADING_WS_RE.match(line).group(0)
    width = len(prefix.replace("\t", tab))
    return _Measured(prefix, width, line[len(prefix):], False)


def _depth(measured: _Measured, profile: IndentProfile, config: ParseConfig, dash_dialect: bool) -> int:
    if not dash_dialect:
        return measured.width // profile.width
    if measured.has_guides:
        return measured.width
    return measured.width // config.tab_indentation_size


def detect_indent_profile(lines: list[str], config: ParseConfig) -> IndentProfile:
    """Derive the indentation unit from the first indented, named line."""
    guide_re = _guide_prefix_re(config) if config.detect_guides else None
    fallback = IndentProfile(
        unit=" " * config.tab_indentation_size,
        uses_guides=False,
        width=config.tab_indentation_size,
    )

    for line in lines:
        if not line.strip():
            continue
        measured = _measure(line, config, guide_re)
        if measured.width == 0 or not measured.content.strip():
            continue
        if guide_re is None:
            if measured.has_guides:
                return IndentProfile(unit="-", uses_guides=True, width=1)
            return fallback
        return IndentProfile(
            unit=measured.prefix,
            uses_guides=measured.has_guides,
            width=measured.width,
        )

    return fallback


def classify_lines(
    stripped: StrippedText,
    original_lines: list[str],
    config: ParseConfig | None = None,
) -> tuple[IndentProfile, list[ParseLine]]:
    """Compute (depth, name, hint) for every line that carries an entry.

    Blank and comment-only lines are dropped, as are guide-only lines that
    exist purely to continue the drawing. A line that had content but loses
    its name to comment or guide stripping is kept with an empty name so
    structural validation can report it.
    """
    config = config or ParseConfig()
    guide_re = _guide_prefix_re(config) if config.detect_guides else None
    profile = detect_indent_profile(stripped.lines, config)

    parse_lines: list[ParseLine] = []
    for index, line in enumerate(stripped.lines):
        if not line.strip():
            continue

        measured = _measure(line, config, guide_re)
        name = measured.content.strip()
        if not name:
            original = original_lines[index] if index < len(original_lines) else line
            if original.strip() == line.strip():
                continue  # guide-only line
        depth = _depth(measured, profile, config, dash_dialect=guide_re is None)

        hint = stripped.hints.get(index) if config.preserve_hints else None
        parse_lines.append(
            ParseLine(line=index + 1, depth=depth, name=name, hint=hint, indent=measured.width)
        )

    logger.debug(
        "Classified %d line(s) with unit %r (guides=%s)",
        len(parse_lines),
        profile.unit,
        profile.uses_guides,
    )
    return profile, parse_lines
