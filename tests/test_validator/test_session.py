"""Tests for validation session bookkeeping."""

from __future__ import annotations

from forge.validator.session import ValidationSession


class TestValidationSession:
    def test_record_and_lookup(self) -> None:
        session = ValidationSession()
        session.record_path("root/a.txt")
        session.record_name("root", "a.txt")
        assert session.has_path("root/a.txt") is True
        assert session.has_name("root", "a.txt") is True
        assert session.has_name("other", "a.txt") is False

    def test_record_resolved(self) -> None:
        session = ValidationSession()
        session.record_resolved("root/a-001.txt")
        assert session.has_path("root/a-001.txt") is True
        assert session.has_name("root", "a-001.txt") is True

    def test_record_resolved_root_level(self) -> None:
        session = ValidationSession()
        session.record_resolved("folder-001")
        assert session.has_name("", "folder-001") is True

    def test_reset(self) -> None:
        session = ValidationSession()
        session.record_resolved("root/a.txt")
        session.reset()
        assert session.seen_paths == set()
        assert session.seen_names_by_parent == {}
