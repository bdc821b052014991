"""Tests for conflict strategy configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from forge.resolver.strategy import ConflictStrategy, MergeStrategy, ResolutionMode
from forge.validator.models import ViolationCode


class TestConflictStrategy:
    def test_defaults(self) -> None:
        strategy = ConflictStrategy()
        assert strategy.on_duplicate_path == ResolutionMode.error
        assert strategy.rename_pattern == "{name}-{n}"
        assert strategy.replacement_char == "_"
        assert strategy.hash_algorithm == "sha256"
        assert strategy.preserve_extension is True
        assert strategy.max_attempts == 100
        assert strategy.counter_start == 1
        assert strategy.counter_padding == 3
        assert strategy.merge_strategy == MergeStrategy()

    def test_camel_case_keys(self) -> None:
        strategy = ConflictStrategy.model_validate({
            "onDuplicatePath": "numbered",
            "transliterationMap": {"é": "e"},
            "mergeStrategy": {"files": "overwrite"},
        })
        assert strategy.on_duplicate_path == ResolutionMode.numbered
        assert strategy.transliteration_map == {"é": "e"}
        assert strategy.merge_strategy.files == "overwrite"

    def test_mode_not_valid_for_category(self) -> None:
        with pytest.raises(ValidationError):
            ConflictStrategy(on_duplicate_name="merge")
        with pytest.raises(ValidationError):
            ConflictStrategy(on_invalid_chars="truncate")
        with pytest.raises(ValidationError):
            ConflictStrategy(on_long_path="numbered")

    def test_unknown_mode(self) -> None:
        with pytest.raises(ValidationError):
            ConflictStrategy(on_duplicate_path="bogus")

    def test_pattern_needs_counter(self) -> None:
        with pytest.raises(ValidationError):
            ConflictStrategy(rename_pattern="{name}-copy")

    def test_hash_algorithm_normalised(self) -> None:
        assert ConflictStrategy(hash_algorithm="SHA256").hash_algorithm == "sha256"

    def test_unknown_hash_algorithm(self) -> None:
        with pytest.raises(ValidationError):
            ConflictStrategy(hash_algorithm="nope")

    def test_variable_length_hash_algorithm_accepted(self) -> None:
        assert ConflictStrategy(hash_algorithm="shake_256").hash_algorithm == "shake_256"

    def test_bad_merge_strategy(self) -> None:
        with pytest.raises(ValidationError):
            ConflictStrategy(merge_strategy={"files": "explode"})

    def test_frozen(self) -> None:
        strategy = ConflictStrategy()
        with pytest.raises(ValidationError):
            strategy.on_long_path = ResolutionMode.hash

    def test_mode_for(self) -> None:
        strategy = ConflictStrategy(on_invalid_chars="strip")
        assert strategy.mode_for(ViolationCode.invalid_chars) == ResolutionMode.strip
        assert strategy.mode_for(ViolationCode.reserved_name) is None

    def test_is_warning(self) -> None:
        strategy = ConflictStrategy(on_long_path="warn")
        assert strategy.is_warning(ViolationCode.long_path) is True
        assert strategy.is_warning(ViolationCode.duplicate_path) is False
        assert strategy.is_warning(ViolationCode.max_depth) is False
