"""Default schema and profile settings endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from jsonschema import SchemaError
from pydantic import BaseModel, Field
from referencing.exceptions import Unresolvable

import tokenlint.deps as deps
from tokenlint.validator import SchemaProfile, get_default_schema, set_default_schema
from tokenlint.validator.schema import verify_schema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["settings"])


class SchemaSettingsResponse(BaseModel):
    has_schema: bool = False
    title: str = ""
    profile: SchemaProfile = SchemaProfile.strict
    strict_properties: bool = False


class SchemaSettingsUpdateRequest(BaseModel):
    """Only provided fields are updated; ``clear_schema`` removes the default."""

    schema_: dict[str, Any] | None = Field(None, alias="schema")
    clear_schema: bool = False
    profile: SchemaProfile | None = None
    strict_properties: bool | None = None


def _settings_response() -> SchemaSettingsResponse:
    schema = get_default_schema()
    return SchemaSettingsResponse(
        has_schema=schema is not None,
        title=str(schema.get("title", "")) if schema else "",
        profile=deps._profile,
        strict_properties=deps._strict_properties,
    )


@router.get("/settings/schema", response_model=SchemaSettingsResponse)
async def get_schema_settings() -> SchemaSettingsResponse:
    """Return the current default schema summary and profile."""
    return _settings_response()


@router.put("/settings/schema", response_model=SchemaSettingsResponse)
async def update_schema_settings(
    body: SchemaSettingsUpdateRequest,
) -> SchemaSettingsResponse:
    """Update the default schema and profile at runtime (no restart needed)."""
    if body.schema_ is not None and body.clear_schema:
        raise HTTPException(
            status_code=400, detail="Cannot set and clear the schema in one request"
        )

    if body.schema_ is not None:
        try:
            verify_schema(body.schema_)
        except SchemaError as e:
            raise HTTPException(status_code=400, detail=f"Invalid schema: {e.message}")
        except Unresolvable as e:
            raise HTTPException(status_code=400, detail=f"Unresolvable schema reference: {e}")
        set_default_schema(body.schema_)
    elif body.clear_schema:
        set_default_schema(None)

    if body.profile is not None:
        deps._profile = body.profile
    if body.strict_properties is not None:
        deps._strict_properties = body.strict_properties

    logger.info(
        "Schema settings updated: has_schema=%s, profile=%s, strict_properties=%s",
        get_default_schema() is not None, deps._profile.value, deps._strict_properties,
    )
    return _settings_response()
