"""Human-readable rendering of validation results."""

from __future__ import annotations

from tokenlint.validator.models import ContrastReport, ValidationIssue, ValidationResult

RULE = "=" * 50


def _issue_line(issue: ValidationIssue) -> str:
    return f"  [{issue.kind.value}] {issue.path}: {issue.message}"


def format_contrast_report(report: ContrastReport) -> str:
    lines = [
        "Contrast Validation Report",
        RULE,
        f"  Total pairs: {report.total_pairs}",
        f"  Passing: {report.valid_pairs}",
        f"  Failing: {report.invalid_pairs}",
        f"  AAA compliant: {report.summary.aaa_compliant}, "
        f"AA compliant: {report.summary.aa_compliant}",
    ]

    failing = [r for r in report.results if not r.passed]
    if failing:
        lines.append("")
        lines.append("Failing pairs:")
        for i, result in enumerate(failing, start=1):
            lines.append(f"  {i}. {result.pair.context or 'Color pair'}")
            lines.append(f"     Foreground: {result.foreground_hex}")
            lines.append(f"     Background: {result.background_hex}")
            lines.append(
                f"     Contrast: {result.computed_ratio:.2f} "
                f"(required: {result.required_ratio})"
            )
            if result.suggestion:
                lines.append(f"     Suggestion: {result.suggestion}")

    return "\n".join(lines)


def format_validation_result(result: ValidationResult) -> str:
    """Render a result as a multi-line report.

    Error and warning counts come first, then one ``[kind] path: message``
    line per issue, then the contrast block if contrast was checked.
    """
    lines: list[str] = []

    if result.is_valid and not result.warnings:
        lines.append("Design tokens are valid")
    else:
        lines.append(f"{len(result.errors)} error(s)")
        lines.append(f"{len(result.warnings)} warning(s)")
        if result.errors:
            lines.append("Errors:")
            lines.extend(_issue_line(issue) for issue in result.errors)
        if result.warnings:
            lines.append("Warnings:")
            lines.extend(_issue_line(issue) for issue in result.warnings)

    if result.contrast is not None:
        lines.append("")
        lines.append(format_contrast_report(result.contrast))

    return "\n".join(lines)
