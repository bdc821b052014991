"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from forge.config import ForgeConfig, load_config
from forge.parser.models import ASCII_STYLE
from forge.resolver.strategy import ResolutionMode

CONFIG_YAML = """\
targetDir: /srv/app
parse:
  tabIndentationSize: 4
  treeStyle: ascii
rules:
  maxPathLength: 100
  allowedExtensions: [ts, json]
strategy:
  onDuplicatePath: numbered
  transliterationMap:
    é: e
normalization:
  style: windows
"""


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_config(tmp_path / "absent.yaml") == ForgeConfig()

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "forge.yaml"
        path.write_text("")
        assert load_config(path) == ForgeConfig()

    def test_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "forge.yaml"
        path.write_text(CONFIG_YAML, encoding="utf-8")
        config = load_config(path)
        assert config.target_dir == "/srv/app"
        assert config.parse.tab_indentation_size == 4
        assert config.parse.tree_style == ASCII_STYLE
        assert config.rules.max_path_length == 100
        assert config.rules.allowed_extensions == (".ts", ".json")
        assert config.strategy.on_duplicate_path == ResolutionMode.numbered
        assert config.strategy.transliteration_map == {"é": "e"}
        assert config.normalization.style == "windows"

    def test_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "forge.json"
        path.write_text('{"rules": {"max_depth": 4}, "parse": {"detect_guides": false}}')
        config = load_config(path)
        assert config.rules.max_depth == 4
        assert config.parse.detect_guides is False

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("rules:\n  allowSpaces: true\n")
        monkeypatch.setenv("FORGE_CONFIG_PATH", str(path))
        assert load_config().rules.allow_spaces is True

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "forge.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ValueError, match="must contain a mapping"):
            load_config(path)

    def test_invalid_mode_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "forge.yaml"
        path.write_text("strategy:\n  onInvalidChars: numbered\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_unknown_tree_style_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "forge.yaml"
        path.write_text("parse:\n  treeStyle: fancy\n")
        with pytest.raises(ValidationError):
            load_config(path)
