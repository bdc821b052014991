"""Pure path-rewriting strategies used to suggest fixes for violations.

None of these functions touch validation state: callers pass in whatever
they need (``seen_paths`` for numbered renames) and decide themselves
whether to record the result.
"""

from __future__ import annotations

import hashlib
import posixpath
import re
from collections.abc import Container, Mapping
from datetime import datetime, timezone
from urllib.parse import quote

SHORT_SEGMENT_LENGTH = 3
HASH_LENGTH = 8


def split_path(path: str, preserve_extension: bool = True) -> tuple[str, str, str]:
    """Split ``path`` into (directory prefix incl. trailing '/', base name, extension).

    The extension is split off only when ``preserve_extension`` is set;
    otherwise it stays part of the base name and the returned extension is empty.
    """
    slash = path.rfind("/")
    directory, name = path[: slash + 1], path[slash + 1:]
    if not preserve_extension:
        return directory, name, ""
    base, ext = posixpath.splitext(name)
    return directory, base, ext


# ---------------------------------------------------------------------------
# Duplicates
# ---------------------------------------------------------------------------

def rename_numbered(
    path: str,
    seen_paths: Container[str],
    *,
    pattern: str = "{name}-{n}",
    counter_start: int = 1,
    counter_padding: int = 3,
    max_attempts: int = 100,
    preserve_extension: bool = True,
) -> str:
    """Return the first ``pattern`` rename not in ``seen_paths``.

    Falls back to the unchanged path once ``max_attempts`` candidates collide.
    """
    directory, base, ext = split_path(path, preserve_extension)
    stem = pattern.replace("{name}", base)
    for n in range(counter_start, counter_start + max_attempts):
        candidate = f"{directory}{stem.replace('{n}', str(n).zfill(counter_padding))}{ext}"
        if candidate not in seen_paths:
            return candidate
    return path


def rename_timestamp(
    path: str,
    *,
    preserve_extension: bool = True,
    now: datetime | None = None,
) -> str:
    """Append a filesystem-safe ISO-8601 UTC timestamp to the base name."""
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    stamp = moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{moment.microsecond // 1000:03d}Z"
    stamp = re.sub(r"[:.]", "-", stamp)
    directory, base, ext = split_path(path, preserve_extension)
    return f"{directory}{base}-{stamp}{ext}"


# ---------------------------------------------------------------------------
# Invalid characters
# ---------------------------------------------------------------------------

def _rewrite_chars(path: str, allowed_chars: str, replacement: str, preserve_extension: bool) -> str:
    directory, base, ext = split_path(path, preserve_extension)
    allowed = re.compile(allowed_chars)
    fixed = "".join(ch if allowed.fullmatch(ch) else replacement for ch in base)
    return f"{directory}{fixed}{ext}"


def replace_invalid_chars(
    path: str,
    allowed_chars: str,
    replacement: str = "_",
    *,
    preserve_extension: bool = True,
) -> str:
    """Swap every character of the name failing ``allowed_chars`` for ``replacement``."""
    return _rewrite_chars(path, allowed_chars, replacement, preserve_extension)


def strip_invalid_chars(path: str, allowed_chars: str, *, preserve_extension: bool = True) -> str:
    """Drop every character of the name failing ``allowed_chars``."""
    return _rewrite_chars(path, allowed_chars, "", preserve_extension)


def encode_path(path: str) -> str:
    """Percent-encode the path, keeping '/' as the separator."""
    return quote(path, safe="/")


def transliterate_path(path: str, mapping: Mapping[str, str]) -> str:
    """Substitute mapped characters; anything not in ``mapping`` passes through."""
    # longest keys first so multi-character keys win over their prefixes
    keys = sorted((k for k in mapping if k), key=len, reverse=True)
    if not keys:
        return path
    pattern = re.compile("|".join(re.escape(k) for k in keys))
    # chained entries (a -> b, b -> c) settle within len(mapping) passes
    for _ in range(len(mapping) + 1):
        rewritten = pattern.sub(lambda m: mapping[m.group(0)], path)
        if rewritten == path:
            break
        path = rewritten
    return path


# ---------------------------------------------------------------------------
# Long paths
# ---------------------------------------------------------------------------

def truncate_path(path: str, max_length: int, *, preserve_extension: bool = True) -> str:
    """Cut the base name so the whole path fits ``max_length``.

    Returns the path unchanged when the directory prefix and extension alone
    leave no room for even one character.
    """
    if len(path) <= max_length:
        return path
    directory, base, ext = split_path(path, preserve_extension)
    available = max_length - len(directory) - len(ext)
    if available < 1:
        return path
    return f"{directory}{base[:available]}{ext}"


def hash_path(path: str, algorithm: str = "sha256", *, preserve_extension: bool = True) -> str:
    """Replace the base name with the first 8 hex digits of its digest."""
    directory, base, ext = split_path(path, preserve_extension)
    hasher = hashlib.new(algorithm, base.encode("utf-8"))
    if hasher.digest_size == 0:
        # shake_* digests are variable length
        digest = hasher.hexdigest(HASH_LENGTH // 2)
    else:
        digest = hasher.hexdigest()[:HASH_LENGTH]
    return f"{directory}{digest}{ext}"


def shorten_path(path: str, max_length: int, *, preserve_extension: bool = True) -> str:
    """Abbreviate intermediate directories to 3 characters until the path fits.

    The first segment and the file name are left alone; when every
    intermediate directory is already short the file name is truncated.
    """
    if len(path) <= max_length:
        return path
    segments = path.split("/")
    file_name = segments.pop()
    for i in range(1, len(segments)):
        if len("/".join([*segments, file_name])) <= max_length:
            break
        if len(segments[i]) > SHORT_SEGMENT_LENGTH:
            segments[i] = segments[i][:SHORT_SEGMENT_LENGTH]
    shortened = "/".join([*segments, file_name])
    if len(shortened) > max_length:
        return truncate_path(shortened, max_length, preserve_extension=preserve_extension)
    return shortened
