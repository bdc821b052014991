"""Shared FastAPI dependencies."""

from __future__ import annotations

from forge.config import ForgeConfig

_config: ForgeConfig | None = None


def get_config() -> ForgeConfig:
    """FastAPI dependency: return the active ForgeConfig."""
    assert _config is not None, "ForgeConfig not initialised"
    return _config
