"""Shared test fixtures and configuration."""

import os
import sys
from pathlib import Path

# Add token_validator/ to Python path so `from tokenlint.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "token_validator"))

import pytest

os.environ["TOKENLINT_DEV_MODE"] = "true"

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def strict_schema_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "token_schema.json"


@pytest.fixture(autouse=True)
def reset_default_schema():
    """Keep the process-wide default schema slot isolated between tests."""
    from tokenlint.validator import set_default_schema

    set_default_schema(None)
    yield
    set_default_schema(None)


@pytest.fixture
def sample_tokens() -> dict:
    return {
        "color": {
            "$type": "color",
            "brand": {
                "$type": "color",
                "$value": {"colorSpace": "srgb", "components": [0.2, 0.4, 0.8]},
                "$description": "Brand blue",
            },
            "link": {"$type": "color", "$value": "{color.brand}"},
        },
        "space": {
            "sm": {"$type": "dimension", "$value": {"value": 8, "unit": "px"}},
            "md": {"$type": "dimension", "$value": "1rem"},
        },
        "opacity": {
            "disabled": {"$type": "number", "$value": 0.4},
        },
    }
