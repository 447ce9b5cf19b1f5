"""Shared FastAPI dependencies."""

from __future__ import annotations

from tokenlint.validator import SchemaProfile, TokenValidator, get_default_schema

_profile: SchemaProfile = SchemaProfile.strict
_strict_properties: bool = False


def get_token_validator() -> TokenValidator:
    """FastAPI dependency: a validator bound to the current default schema."""
    return TokenValidator(
        schema=get_default_schema(),
        profile=_profile,
        strict_properties=_strict_properties,
    )
