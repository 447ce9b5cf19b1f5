"""Semantic validation pipeline for DTCG design token documents."""

from tokenlint.validator.color import contrast_ratio, contrast_ratio_hex, hex_to_rgb
from tokenlint.validator.models import (
    ColorPair,
    ContrastOptions,
    ContrastReport,
    ContrastResult,
    IssueKind,
    SchemaProfile,
    ValidationIssue,
    ValidationOptions,
    ValidationResult,
    ValidationSeverity,
    WCAGLevel,
)
from tokenlint.validator.pipeline import TokenValidator, validate, validate_source
from tokenlint.validator.report import format_contrast_report, format_validation_result
from tokenlint.validator.schema import get_default_schema, set_default_schema

__all__ = [
    "ColorPair",
    "ContrastOptions",
    "ContrastReport",
    "ContrastResult",
    "IssueKind",
    "SchemaProfile",
    "TokenValidator",
    "ValidationIssue",
    "ValidationOptions",
    "ValidationResult",
    "ValidationSeverity",
    "WCAGLevel",
    "contrast_ratio",
    "contrast_ratio_hex",
    "format_contrast_report",
    "format_validation_result",
    "get_default_schema",
    "hex_to_rgb",
    "set_default_schema",
    "validate",
    "validate_source",
]
