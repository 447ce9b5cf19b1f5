"""POST /api/validate endpoint."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from tokenlint.deps import get_token_validator
from tokenlint.validator import (
    ContrastOptions,
    SchemaProfile,
    TokenValidator,
    ValidationOptions,
    ValidationResult,
    format_validation_result,
)
from tokenlint.validator.syntax import check_document_syntax

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["validate"])


class ValidateRequest(BaseModel):
    """Request body for POST /api/validate.

    Send either an already-parsed ``tokens`` object or the raw JSON/YAML
    ``source`` text.
    """

    tokens: dict[str, Any] | None = Field(None, description="Parsed token document")
    source: str | None = Field(None, description="Raw JSON or YAML token document")
    profile: SchemaProfile | None = Field(
        None, description="Override the configured schema profile"
    )
    strict_properties: bool | None = None
    contrast: bool | ContrastOptions = Field(
        False, description="true for AA_NORMAL on derived pairs, or explicit options"
    )


class ValidateResponse(BaseModel):
    """Response body for POST /api/validate."""

    result: ValidationResult
    report: str = Field("", description="Human-readable rendering of the result")


@router.post("/validate", response_model=ValidateResponse)
async def validate_tokens(
    body: ValidateRequest,
    validator: TokenValidator = Depends(get_token_validator),
) -> ValidateResponse:
    """Validate a design token document."""
    if body.tokens is None and body.source is None:
        raise HTTPException(
            status_code=400, detail="Provide either 'tokens' or 'source'"
        )

    if body.profile is not None or body.strict_properties is not None:
        validator = validator.with_overrides(
            profile=body.profile, strict_properties=body.strict_properties,
        )

    if body.tokens is not None:
        document = body.tokens
    else:
        parsed = check_document_syntax(body.source or "")
        if not parsed.is_valid:
            return ValidateResponse(result=parsed, report=format_validation_result(parsed))
        document = parsed.tokens

    contrast = ValidationOptions(contrast=body.contrast).contrast_options
    result = validator.validate(document, contrast)
    logger.info(
        "Validation via API: valid=%s errors=%d warnings=%d",
        result.is_valid, len(result.errors), len(result.warnings),
    )
    return ValidateResponse(result=result, report=format_validation_result(result))
