"""Per-$type semantic checks for tokens and groups."""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

from tokenlint.validator.color import is_number
from tokenlint.validator.models import IssueKind, SchemaProfile, ValidationIssue
from tokenlint.validator.tree import Group, Token


class TokenType(str, Enum):
    """Token types known to either schema profile."""

    # DTCG standard vocabulary
    color = "color"
    dimension = "dimension"
    font_family = "fontFamily"
    font_weight = "fontWeight"
    duration = "duration"
    cubic_bezier = "cubicBezier"
    number = "number"
    border = "border"
    transition = "transition"
    shadow = "shadow"
    gradient = "gradient"
    typography = "typography"
    stroke_style = "strokeStyle"
    # Extended vocabulary accepted by the permissive profile
    opacity = "opacity"
    spacing = "spacing"
    radius = "radius"
    elevation = "elevation"
    motion = "motion"
    layout = "layout"
    interaction = "interaction"
    string = "string"
    keyframes = "keyframes"

    @classmethod
    def parse(cls, raw: str) -> TokenType | None:
        """Map a raw ``$type`` string to a member, or None if unknown."""
        try:
            return cls(raw)
        except ValueError:
            return None


STANDARD_TYPES: tuple[TokenType, ...] = (
    TokenType.color,
    TokenType.dimension,
    TokenType.font_family,
    TokenType.font_weight,
    TokenType.duration,
    TokenType.cubic_bezier,
    TokenType.number,
    TokenType.border,
    TokenType.transition,
    TokenType.shadow,
    TokenType.gradient,
    TokenType.typography,
    TokenType.stroke_style,
)

EXTENDED_TYPES: tuple[TokenType, ...] = tuple(TokenType)


def known_types(profile: SchemaProfile) -> tuple[TokenType, ...]:
    return EXTENDED_TYPES if profile == SchemaProfile.permissive else STANDARD_TYPES


VALID_COLOR_SPACES = (
    "srgb",
    "srgb-linear",
    "display-p3",
    "a98-rgb",
    "prophoto-rgb",
    "rec2020",
    "xyz-d50",
    "xyz-d65",
    "oklab",
    "oklch",
    "lab",
    "lch",
)

VALID_DIMENSION_UNITS = ("px", "rem")

TOKEN_PROPERTIES = frozenset(
    {"$value", "$type", "$description", "$deprecated", "$extensions"}
)
GROUP_PROPERTIES = frozenset({"$type", "$description", "$extensions"})

COLOR_STRING_RE = re.compile(r"^(#|rgb|hsl|oklch|\{)")
DIMENSION_STRING_RE = re.compile(r"^([0-9.-]+(px|rem|em|%|vh|vw)|0|\{|calc\()")
NUMBER_STRING_RE = re.compile(r"^(\d+(\.\d+)?|\{)")
HEX_FALLBACK_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def _type_names(types: tuple[TokenType, ...]) -> str:
    return ", ".join(t.value for t in types)


# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------

def check_vocabulary(
    raw_type: str, path: str, profile: SchemaProfile,
) -> list[ValidationIssue]:
    """Warn about a ``$type`` outside the profile's vocabulary."""
    if TokenType.parse(raw_type) in known_types(profile):
        return []

    if profile == SchemaProfile.strict:
        return [
            ValidationIssue.warning(
                IssueKind.non_standard_type,
                path,
                f'Non-standard token type "{raw_type}". '
                f"Standard types are: {_type_names(STANDARD_TYPES)}",
            )
        ]
    return [
        ValidationIssue.warning(
            IssueKind.unknown_type,
            path,
            f'Unknown token type "{raw_type}". '
            f"Permissive schema supports: {_type_names(EXTENDED_TYPES)}",
        )
    ]


# ---------------------------------------------------------------------------
# Per-type value rules
# ---------------------------------------------------------------------------

def check_color(value: Any, path: str) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []

    if isinstance(value, Mapping):
        if "colorSpace" in value and value["colorSpace"] not in VALID_COLOR_SPACES:
            issues.append(
                ValidationIssue.error(
                    IssueKind.custom,
                    path,
                    f'Invalid colorSpace: "{value["colorSpace"]}". '
                    f"Must be one of: {', '.join(VALID_COLOR_SPACES)}",
                )
            )

        if "components" in value:
            components = value["components"]
            if not isinstance(components, list) or not 3 <= len(components) <= 4:
                issues.append(
                    ValidationIssue.error(
                        IssueKind.custom,
                        path,
                        "Color components must be an array of 3 or 4 values",
                    )
                )
            else:
                for i, comp in enumerate(components):
                    if not is_number(comp) and comp != "none":
                        issues.append(
                            ValidationIssue.error(
                                IssueKind.custom,
                                path,
                                f'Component {i} must be a number or "none", '
                                f"got {type(comp).__name__}",
                            )
                        )

        hex_value = value.get("hex")
        if isinstance(hex_value, str) and not HEX_FALLBACK_RE.match(hex_value):
            issues.append(
                ValidationIssue.error(
                    IssueKind.custom,
                    path,
                    'hex must be in 6-digit CSS hex notation (e.g., "#ff00ff"), '
                    f'got "{hex_value}"',
                )
            )

        if "alpha" in value:
            alpha = value["alpha"]
            if not is_number(alpha) or not 0 <= alpha <= 1:
                issues.append(
                    ValidationIssue.error(
                        IssueKind.custom,
                        path,
                        f"alpha must be a number between 0 and 1, got {alpha!r}",
                    )
                )

    elif isinstance(value, str) and not COLOR_STRING_RE.match(value):
        issues.append(
            ValidationIssue.warning(
                IssueKind.color_format,
                path,
                "Color value should be a valid CSS color or token reference",
            )
        )

    return issues


def check_dimension(value: Any, path: str) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []

    if isinstance(value, Mapping):
        if "unit" in value and value["unit"] not in VALID_DIMENSION_UNITS:
            issues.append(
                ValidationIssue.error(
                    IssueKind.custom,
                    path,
                    f'Invalid dimension unit: "{value["unit"]}". Must be "px" or "rem"',
                )
            )
        if "value" in value and not is_number(value["value"]):
            issues.append(
                ValidationIssue.error(
                    IssueKind.custom,
                    path,
                    "Dimension value must be a number",
                )
            )
    elif isinstance(value, str) and not DIMENSION_STRING_RE.match(value):
        issues.append(
            ValidationIssue.warning(
                IssueKind.dimension_format,
                path,
                "Dimension value should include units or be a token reference",
            )
        )

    return issues


def check_number(value: Any, path: str) -> list[ValidationIssue]:
    """Check a number token, tolerating the legacy nested ``$value`` shape."""
    issues: list[ValidationIssue] = []

    if isinstance(value, Mapping):
        if "$value" not in value:
            return issues
        nested = value["$value"]
        issues.append(
            ValidationIssue.warning(
                IssueKind.nested_value,
                path,
                "Nested $value structure detected. Consider flattening.",
            )
        )
        if not is_number(nested) and not isinstance(nested, str):
            issues.append(
                ValidationIssue.warning(
                    IssueKind.number_format,
                    f"{path}.$value.$value",
                    "Nested number value should be numeric or a token reference",
                )
            )
    elif isinstance(value, str) and not NUMBER_STRING_RE.match(value):
        issues.append(
            ValidationIssue.warning(
                IssueKind.number_format,
                path,
                "Number value should be numeric or a token reference",
            )
        )

    return issues


VALUE_RULES = {
    TokenType.color: check_color,
    TokenType.dimension: check_dimension,
    TokenType.number: check_number,
}


# ---------------------------------------------------------------------------
# Node entry points
# ---------------------------------------------------------------------------

def _is_blank(value: Any) -> bool:
    # empty mappings and lists still count as a structured value
    if isinstance(value, (Mapping, list)):
        return False
    return not value


def check_token(
    token: Token,
    path: str,
    profile: SchemaProfile = SchemaProfile.strict,
    strict_properties: bool = False,
) -> list[ValidationIssue]:
    """Run every semantic rule that applies to one token."""
    issues: list[ValidationIssue] = []

    if not token.type and _is_blank(token.value):
        issues.append(
            ValidationIssue.warning(
                IssueKind.missing_type,
                path,
                "Token should have a $type property for better validation",
            )
        )

    if strict_properties:
        issues.extend(_check_dollar_properties(token.raw, TOKEN_PROPERTIES, path, "token"))

    if not token.type:
        return issues

    issues.extend(check_vocabulary(token.type, path, profile))

    rule = VALUE_RULES.get(TokenType.parse(token.type))
    if rule is not None:
        issues.extend(rule(token.value, path))
    elif token.value is None:
        issues.append(
            ValidationIssue.warning(
                IssueKind.missing_value,
                path,
                f'Token with type "{token.type}" should have a $value property',
            )
        )

    return issues


def check_group(
    group: Group, path: str, strict_properties: bool = False,
) -> list[ValidationIssue]:
    """Check a typed group.

    The group's ``$type`` is not applied to descendant tokens.
    """
    issues: list[ValidationIssue] = []

    if not path:
        issues.append(
            ValidationIssue.warning(
                IssueKind.naming,
                path,
                "Root level groups should have descriptive names",
            )
        )

    if strict_properties:
        issues.extend(_check_dollar_properties(group.raw, GROUP_PROPERTIES, path, "group"))

    return issues


def _check_dollar_properties(
    raw: Mapping[str, Any], allowed: frozenset[str], path: str, label: str,
) -> list[ValidationIssue]:
    extra = [
        str(key) for key in raw
        if str(key).startswith("$") and key not in allowed
    ]
    if not extra:
        return []
    return [
        ValidationIssue.error(
            IssueKind.additional_properties,
            path,
            f"Non-standard $-prefixed properties on {label} should be in "
            f"$extensions: {', '.join(extra)}",
        )
    ]
