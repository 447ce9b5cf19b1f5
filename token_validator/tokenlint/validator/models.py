"""Validation data models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ValidationSeverity(str, Enum):
    """Severity level for validation issues."""

    error = "error"
    warning = "warning"


class IssueKind(str, Enum):
    """Tag identifying which check produced an issue."""

    # Errors
    parse = "parse"
    schema = "schema"
    circular_reference = "circular-reference"
    custom = "custom"
    additional_properties = "additional-properties"
    # Warnings
    missing_type = "missing-type"
    naming = "naming"
    non_standard_type = "non-standard-type"
    unknown_type = "unknown-type"
    color_format = "color-format"
    dimension_format = "dimension-format"
    nested_value = "nested-value"
    number_format = "number-format"
    missing_value = "missing-value"
    unresolved_reference = "unresolved-reference"


class ValidationIssue(BaseModel):
    """A single validation finding."""

    severity: ValidationSeverity
    kind: IssueKind
    path: str
    message: str
    data: Any = None

    @classmethod
    def error(
        cls, kind: IssueKind, path: str, message: str, data: Any = None,
    ) -> ValidationIssue:
        return cls(
            severity=ValidationSeverity.error,
            kind=kind,
            path=path,
            message=message,
            data=data,
        )

    @classmethod
    def warning(
        cls, kind: IssueKind, path: str, message: str, data: Any = None,
    ) -> ValidationIssue:
        return cls(
            severity=ValidationSeverity.warning,
            kind=kind,
            path=path,
            message=message,
            data=data,
        )


class WCAGLevel(str, Enum):
    """WCAG 2.1 conformance target for a color pair."""

    AA_NORMAL = "AA_NORMAL"
    AA_LARGE = "AA_LARGE"
    AAA_NORMAL = "AAA_NORMAL"
    AAA_LARGE = "AAA_LARGE"

    @property
    def required_ratio(self) -> float:
        return WCAG_RATIOS[self]


WCAG_RATIOS: dict[WCAGLevel, float] = {
    WCAGLevel.AA_NORMAL: 4.5,
    WCAGLevel.AA_LARGE: 3.0,
    WCAGLevel.AAA_NORMAL: 7.0,
    WCAGLevel.AAA_LARGE: 4.5,
}


class ColorPair(BaseModel):
    """Foreground/background pair to check for contrast.

    Each side may be a hex string, a DTCG structured color value, or a token
    mapping carrying one of those under ``$value``.
    """

    foreground: Any
    background: Any
    context: str = ""
    level: WCAGLevel | None = None


class ContrastOptions(BaseModel):
    """Caller-supplied contrast settings."""

    level: WCAGLevel = WCAGLevel.AA_NORMAL
    color_pairs: list[ColorPair] | None = None
    min_contrast: float | None = None


class ContrastResult(BaseModel):
    """Outcome of checking one color pair."""

    pair: ColorPair
    foreground_hex: str
    background_hex: str
    level: WCAGLevel
    computed_ratio: float
    required_ratio: float
    passed: bool
    suggestion: str | None = None


class ContrastSummary(BaseModel):
    aaa_compliant: int = 0
    aa_compliant: int = 0
    failing: int = 0


class ContrastReport(BaseModel):
    """Aggregate of all contrast checks in one run."""

    total_pairs: int = 0
    valid_pairs: int = 0
    invalid_pairs: int = 0
    results: list[ContrastResult] = Field(default_factory=list)
    summary: ContrastSummary = Field(default_factory=ContrastSummary)


class SchemaProfile(str, Enum):
    """Which type vocabulary counts as known."""

    strict = "strict"
    permissive = "permissive"


class ValidationOptions(BaseModel):
    """Per-call options for the validation pipeline.

    ``schema_`` overrides the process-wide default schema for this call only.
    ``contrast`` may be ``True`` (AA_NORMAL with auto-derived pairs) or a
    full ContrastOptions.
    """

    schema_: dict[str, Any] | None = Field(default=None, alias="schema")
    profile: SchemaProfile = SchemaProfile.strict
    strict_properties: bool = False
    contrast: bool | ContrastOptions = False

    model_config = ConfigDict(populate_by_name=True)

    @property
    def contrast_options(self) -> ContrastOptions | None:
        if self.contrast is True:
            return ContrastOptions()
        if isinstance(self.contrast, ContrastOptions):
            return self.contrast
        return None


class ValidationStats(BaseModel):
    """Counts gathered while walking the token tree."""

    total_tokens: int = 0
    total_groups: int = 0
    total_references: int = 0
    optional_props_used: dict[str, dict[str, int]] = Field(
        default_factory=lambda: {
            "color": {"alpha": 0, "hex": 0},
            "token": {"$description": 0, "$deprecated": 0, "$extensions": 0},
            "group": {"$description": 0, "$extensions": 0},
        }
    )


class ValidationResult(BaseModel):
    """Aggregated result from the validation pipeline."""

    is_valid: bool = True
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)
    contrast: ContrastReport | None = None
    stats: ValidationStats = Field(default_factory=ValidationStats)
    tokens: Any = Field(default=None, exclude=True)

    def add(self, issue: ValidationIssue) -> None:
        if issue.severity == ValidationSeverity.error:
            self.errors.append(issue)
        else:
            self.warnings.append(issue)

    def extend(self, issues: list[ValidationIssue]) -> None:
        for issue in issues:
            self.add(issue)
