"""FastAPI application -- tree forge entrypoint."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

import forge.deps as deps
from forge.api.tree import router as tree_router
from forge.config import load_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: load config on startup, drop it on shutdown."""
    log_level = logging.DEBUG if os.environ.get("FORGE_DEV_MODE") else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    deps._config = load_config()
    logger.info(
        "Tree forge starting (tab size %d, guides %s)",
        deps._config.parse.tab_indentation_size,
        deps._config.parse.detect_guides,
    )

    yield

    deps._config = None


app = FastAPI(
    title="Tree Forge",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(tree_router)
