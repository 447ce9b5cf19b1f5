"""Token document parsing using ruamel.yaml (accepts JSON and YAML)."""

from __future__ import annotations

from io import StringIO

from ruamel.yaml import YAML, YAMLError

from tokenlint.validator.models import IssueKind, ValidationIssue, ValidationResult


def _parse_error(message: str) -> ValidationResult:
    return ValidationResult(
        is_valid=False,
        errors=[ValidationIssue.error(IssueKind.parse, "file", message)],
    )


def check_document_syntax(source: str) -> ValidationResult:
    """Parse a token document and check for syntax errors.

    Returns a ValidationResult with is_valid=True and the parsed mapping on
    success, or is_valid=False with a single parse error on failure.
    """
    if not source or not source.strip():
        return _parse_error("Empty token document")

    yaml = YAML(typ="safe", pure=True)

    try:
        parsed = yaml.load(StringIO(source))
    except YAMLError as e:
        line = None
        if getattr(e, "problem_mark", None) is not None:
            line = e.problem_mark.line + 1  # 0-indexed to 1-indexed
        message = f"Failed to parse token document: {e}"
        result = _parse_error(message)
        result.errors[0].data = {"line": line}
        return result

    if parsed is None:
        return _parse_error("Token document parsed to empty/null value")

    if not isinstance(parsed, dict):
        return _parse_error(
            f"Token document root must be an object, got {type(parsed).__name__}"
        )

    return ValidationResult(is_valid=True, tokens=parsed)
