"""WCAG contrast checks over color token pairs."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from tokenlint.validator.color import contrast_ratio, resolve_color, rgb_to_hex
from tokenlint.validator.models import (
    ColorPair,
    ContrastOptions,
    ContrastReport,
    ContrastResult,
    ContrastSummary,
    IssueKind,
    ValidationIssue,
    WCAGLevel,
)

logger = logging.getLogger(__name__)

# (foreground group, foreground key, background group, background key, context, level)
# looked up under semantic.color in the token document
SEMANTIC_PAIR_PATTERNS: list[tuple[str, str, str, str, str, WCAGLevel]] = [
    ("foreground", "primary", "background", "primary",
     "Primary text on primary background", WCAGLevel.AA_NORMAL),
    ("foreground", "secondary", "background", "primary",
     "Secondary text on primary background", WCAGLevel.AA_NORMAL),
    ("foreground", "primary", "background", "secondary",
     "Primary text on secondary background", WCAGLevel.AA_NORMAL),
    ("foreground", "primary", "background", "elevated",
     "Primary text on elevated background", WCAGLevel.AA_NORMAL),
    ("foreground", "onAccent", "background", "accent",
     "Text on accent/primary buttons", WCAGLevel.AA_NORMAL),
    ("foreground", "accent", "background", "primary",
     "Accent text on primary background", WCAGLevel.AA_NORMAL),
    ("status", "success", "background", "primary",
     "Success status text", WCAGLevel.AA_NORMAL),
    ("status", "warning", "background", "primary",
     "Warning status text", WCAGLevel.AA_NORMAL),
    ("status", "danger", "background", "primary",
     "Error status text", WCAGLevel.AA_NORMAL),
    ("status", "info", "background", "primary",
     "Info status text", WCAGLevel.AA_NORMAL),
    # Non-text contrast only needs the large-text threshold
    ("border", "subtle", "background", "primary",
     "Subtle borders", WCAGLevel.AA_LARGE),
    ("border", "primary", "background", "primary",
     "Primary borders", WCAGLevel.AA_LARGE),
]


def _lookup(obj: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(obj, Mapping):
            return None
        obj = obj.get(key)
    return obj


def derive_color_pairs(document: Any) -> list[ColorPair]:
    """Build color pairs from conventional semantic.color locations.

    Best effort: locations that are missing yield no pair.
    """
    semantic_colors = _lookup(document, "semantic", "color")
    if not isinstance(semantic_colors, Mapping):
        return []

    pairs: list[ColorPair] = []
    for fg_group, fg_key, bg_group, bg_key, context, level in SEMANTIC_PAIR_PATTERNS:
        fg = _lookup(semantic_colors, fg_group, fg_key)
        bg = _lookup(semantic_colors, bg_group, bg_key)
        if fg is None or bg is None:
            continue
        pairs.append(ColorPair(foreground=fg, background=bg, context=context, level=level))
    return pairs


def contrast_suggestion(ratio: float, required: float) -> str:
    improvement = math.floor((required / ratio) * 100 - 100 + 0.5)
    return (
        f"Contrast ratio {ratio:.2f} is below required {required}. "
        "Consider darkening the foreground or lightening the background: "
        f"increase contrast by ~{improvement}%."
    )


def validate_contrast_pair(
    pair: ColorPair,
    level: WCAGLevel = WCAGLevel.AA_NORMAL,
    min_contrast: float | None = None,
) -> ContrastResult | None:
    """Check one pair. Returns None when either color cannot be resolved."""
    fg = resolve_color(pair.foreground)
    bg = resolve_color(pair.background)
    if fg is None or bg is None:
        logger.debug("Skipping unresolvable color pair: %s", pair.context or pair)
        return None

    effective_level = pair.level or level
    required = min_contrast if min_contrast is not None else effective_level.required_ratio
    ratio = contrast_ratio(fg, bg)
    passed = ratio >= required

    return ContrastResult(
        pair=pair,
        foreground_hex=rgb_to_hex(fg),
        background_hex=rgb_to_hex(bg),
        level=effective_level,
        computed_ratio=ratio,
        required_ratio=required,
        passed=passed,
        suggestion=None if passed else contrast_suggestion(ratio, required),
    )


def _summarize(results: list[ContrastResult]) -> ContrastSummary:
    summary = ContrastSummary()
    for result in results:
        if result.computed_ratio >= WCAGLevel.AAA_NORMAL.required_ratio:
            summary.aaa_compliant += 1
        elif result.computed_ratio >= WCAGLevel.AA_NORMAL.required_ratio:
            summary.aa_compliant += 1
        else:
            summary.failing += 1
    return summary


def validate_token_contrast(
    document: Any, options: ContrastOptions | None = None,
) -> ContrastReport:
    """Check explicit pairs, or pairs derived from the document."""
    options = options or ContrastOptions()
    pairs = (
        options.color_pairs
        if options.color_pairs is not None
        else derive_color_pairs(document)
    )

    results: list[ContrastResult] = []
    for pair in pairs:
        result = validate_contrast_pair(pair, options.level, options.min_contrast)
        if result is not None:
            results.append(result)

    valid = sum(1 for r in results if r.passed)
    logger.info("Contrast check: %d/%d pairs passing", valid, len(results))

    return ContrastReport(
        total_pairs=len(results),
        valid_pairs=valid,
        invalid_pairs=len(results) - valid,
        results=results,
        summary=_summarize(results),
    )


def contrast_failures(report: ContrastReport) -> list[ValidationIssue]:
    """Turn failing contrast results into custom errors for the main result."""
    return [
        ValidationIssue.error(
            IssueKind.custom,
            r.pair.context or f"{r.foreground_hex} / {r.background_hex}",
            f"Insufficient contrast {r.computed_ratio:.2f}:1 between "
            f"{r.foreground_hex} and {r.background_hex} "
            f"(required {r.required_ratio}:1 for {r.level.value})",
            data={"suggestion": r.suggestion},
        )
        for r in report.results
        if not r.passed
    ]
