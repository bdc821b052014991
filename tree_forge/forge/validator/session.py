"""Mutable duplicate-tracking state for one validation pass."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ValidationSession:
    """Paths and per-directory names seen so far, in depth-first order.

    Insertion order decides which member of a duplicate group counts as the
    original, so a session must never be shared between concurrent passes.
    """

    seen_paths: set[str] = field(default_factory=set)
    seen_names_by_parent: dict[str, set[str]] = field(default_factory=dict)

    def has_path(self, path: str) -> bool:
        return path in self.seen_paths

    def record_path(self, path: str) -> None:
        self.seen_paths.add(path)

    def has_name(self, parent: str, name: str) -> bool:
        return name in self.seen_names_by_parent.get(parent, ())

    def record_name(self, parent: str, name: str) -> None:
        self.seen_names_by_parent.setdefault(parent, set()).add(name)

    def record_resolved(self, path: str) -> None:
        """Reserve a resolved path so later duplicates pick a different one."""
        parent, _, name = path.rpartition("/")
        self.record_path(path)
        self.record_name(parent, name)

    def reset(self) -> None:
        self.seen_paths.clear()
        self.seen_names_by_parent.clear()
