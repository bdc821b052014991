"""Configuration bundle and file loading."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from ruamel.yaml import YAML

from forge.parser.models import ParseConfig
from forge.resolver.strategy import ConflictStrategy
from forge.validator.normalize import PathNormalization
from forge.validator.rules import ValidationRules

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "forge.yaml"

_yaml = YAML(typ="safe")


class ForgeConfig(BaseModel):
    """Everything the parse/validate pipeline needs for one run."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    target_dir: str = "."
    parse: ParseConfig = Field(default_factory=ParseConfig)
    rules: ValidationRules = Field(default_factory=ValidationRules)
    strategy: ConflictStrategy = Field(default_factory=ConflictStrategy)
    normalization: PathNormalization = Field(default_factory=PathNormalization)


def load_config(path: str | Path | None = None) -> ForgeConfig:
    """Load a ForgeConfig from YAML (or JSON) on disk.

    The location defaults to ``$FORGE_CONFIG_PATH`` and then ``forge.yaml``
    in the working directory. A missing or empty file yields defaults.
    """
    config_path = Path(path or os.environ.get("FORGE_CONFIG_PATH", DEFAULT_CONFIG_PATH))
    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return ForgeConfig()

    data = _yaml.load(config_path.read_text(encoding="utf-8"))
    if data is None:
        return ForgeConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping, got {type(data).__name__}")

    config = ForgeConfig.model_validate(data)
    logger.info("Loaded config from %s", config_path)
    return config
