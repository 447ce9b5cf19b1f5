"""FastAPI application -- tokenlint entrypoint."""

from __future__ import annotations

import json
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI

import tokenlint.deps as deps
from tokenlint.api.settings import router as settings_router
from tokenlint.api.validate import router as validate_router
from tokenlint.validator import SchemaProfile, set_default_schema
from tokenlint.validator.schema import load_schema

logger = logging.getLogger(__name__)


def _load_options() -> dict:
    """Load service options from the options JSON file or env fallback."""
    opts_path = os.environ.get("TOKENLINT_OPTIONS_PATH", "/data/options.json")
    if Path(opts_path).exists():
        return json.loads(Path(opts_path).read_text())
    return {
        "schema_path": os.environ.get("TOKENLINT_SCHEMA_PATH", ""),
        "profile": os.environ.get("TOKENLINT_PROFILE", "strict"),
        "strict_properties": os.environ.get("TOKENLINT_STRICT_PROPERTIES", "").lower()
        in ("1", "true", "yes"),
    }


def _apply_options(options: dict) -> None:
    try:
        deps._profile = SchemaProfile(options.get("profile", "strict"))
    except ValueError:
        logger.warning(
            "Unknown schema profile %r, falling back to strict", options.get("profile"),
        )
        deps._profile = SchemaProfile.strict
    deps._strict_properties = bool(options.get("strict_properties", False))

    schema_path = options.get("schema_path", "")
    if not schema_path:
        logger.warning("No schema_path configured; structural validation is disabled")
        return
    try:
        set_default_schema(load_schema(Path(schema_path)))
    except (OSError, ValueError):
        logger.exception("Failed to load token schema from %s", schema_path)
        return
    logger.info("Loaded default token schema from %s", schema_path)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: load configuration on startup, reset on shutdown."""
    log_level = logging.DEBUG if os.environ.get("TOKENLINT_DEV_MODE") else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    options = _load_options()
    logger.info("tokenlint starting with options: %s", options)
    _apply_options(options)

    yield

    # Shutdown
    set_default_schema(None)
    deps._profile = SchemaProfile.strict
    deps._strict_properties = False


app = FastAPI(
    title="tokenlint",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(validate_router)
app.include_router(settings_router)


@app.get("/api/health")
async def health() -> dict:
    return {"status": "ok", "profile": deps._profile.value}
