"""Shared test fixtures and configuration."""

import os
import sys
from pathlib import Path

# Add tree_forge/ to Python path so `from forge.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "tree_forge"))

import pytest

os.environ["FORGE_DEV_MODE"] = "true"

from forge.parser.models import ParseConfig  # noqa: E402
from forge.resolver.strategy import ConflictStrategy  # noqa: E402
from forge.validator.paths import PathValidator  # noqa: E402
from forge.validator.rules import ValidationRules  # noqa: E402

MONOREPO_TREE = """\
root/
  apps/
    web/
      package.json
"""

GUIDE_TREE = """\
project/
├─ src/
│  └─ index.ts
"""


@pytest.fixture
def parse_config() -> ParseConfig:
    return ParseConfig()


@pytest.fixture
def monorepo_tree() -> str:
    return MONOREPO_TREE


@pytest.fixture
def guide_tree() -> str:
    return GUIDE_TREE


@pytest.fixture
def default_validator() -> PathValidator:
    return PathValidator(ValidationRules(), ConflictStrategy())
