"""Structural JSON-Schema pass and the process-wide default schema slot."""

from __future__ import annotations

import json
import logging
import re
import threading
from collections import defaultdict
from pathlib import Path
from typing import Any

from jsonschema import SchemaError, ValidationError
from jsonschema.validators import validator_for
from pydantic import BaseModel
from referencing.exceptions import Unresolvable

from tokenlint.validator.models import IssueKind, ValidationIssue

logger = logging.getLogger(__name__)

_default_schema: dict[str, Any] | None = None
_default_schema_lock = threading.Lock()


def set_default_schema(schema: dict[str, Any] | None) -> None:
    """Replace the schema used when a call does not pass one. Last writer wins."""
    global _default_schema
    with _default_schema_lock:
        _default_schema = schema


def get_default_schema() -> dict[str, Any] | None:
    with _default_schema_lock:
        return _default_schema


def load_schema(path: Path) -> dict[str, Any]:
    """Read a JSON schema document from disk."""
    return json.loads(path.read_text(encoding="utf-8"))


class SchemaViolation(BaseModel):
    """One structural violation reported by the schema engine."""

    path: str
    message: str
    keyword: str = ""
    data: Any = None


def _instance_path(error: ValidationError) -> str:
    if not error.absolute_path:
        return "root"
    return "/" + "/".join(str(part) for part in error.absolute_path)


def verify_schema(schema: dict[str, Any]) -> None:
    """Raise if ``schema`` cannot be used for validation.

    Checks the schema against its metaschema, then runs it over an empty
    document so references reachable from the root get resolved. References
    only reached by deeper instances are caught later by
    ``check_document_schema``.
    """
    cls = validator_for(schema)
    cls.check_schema(schema)
    list(cls(schema).iter_errors({}))


def check_schema(schema: dict[str, Any], document: Any) -> list[SchemaViolation]:
    """Validate ``document`` against ``schema`` and collect every violation.

    Raises jsonschema.SchemaError if the schema itself is invalid, and
    referencing.exceptions.Unresolvable if a ``$ref`` cannot be resolved.
    """
    cls = validator_for(schema)
    cls.check_schema(schema)
    validator = cls(schema)

    errors_by_path: dict[str, list[ValidationError]] = defaultdict(list)
    for error in validator.iter_errors(document):
        errors_by_path[_instance_path(error)].append(error)

    return [
        _most_actionable(path, errors) for path, errors in errors_by_path.items()
    ]


def _most_actionable(path: str, errors: list[ValidationError]) -> SchemaViolation:
    """Collapse every error at one instance path into a single violation."""
    for error in errors:
        if error.validator == "additionalProperties":
            extra = _additional_property(error)
            message = (
                f'Additional property "{extra}" not allowed'
                if extra
                else "Additional properties not allowed"
            )
            return SchemaViolation(
                path=path, message=message, keyword="additionalProperties", data=error.instance,
            )

    union_error = next(
        (e for e in errors if e.validator in ("oneOf", "anyOf")), None
    )
    if union_error is not None and len(errors) > 5:
        return SchemaViolation(
            path=path,
            message="Value does not match any allowed type",
            keyword=str(union_error.validator),
            data=union_error.instance,
        )

    first = errors[0]
    return SchemaViolation(
        path=path, message=first.message, keyword=str(first.validator), data=first.instance,
    )


def _additional_property(error: ValidationError) -> str | None:
    if not isinstance(error.instance, dict) or not isinstance(error.schema, dict):
        return None
    allowed = set(error.schema.get("properties", {}))
    patterns = [re.compile(p) for p in error.schema.get("patternProperties", {})]
    extras = [
        key for key in error.instance
        if key not in allowed and not any(p.search(str(key)) for p in patterns)
    ]
    return extras[0] if extras else None


def _init_failure(reason: str) -> ValidationIssue:
    return ValidationIssue.error(
        IssueKind.schema, "root", f"Failed to initialize validator: {reason}",
    )


def check_document_schema(
    schema: dict[str, Any], document: Any,
) -> list[ValidationIssue]:
    """Run the structural pass and map violations to schema errors."""
    try:
        violations = check_schema(schema, document)
    except SchemaError as e:
        logger.exception("Failed to compile token schema")
        return [_init_failure(e.message)]
    except Unresolvable as e:
        logger.exception("Failed to resolve a reference in the token schema")
        return [_init_failure(str(e))]

    logger.debug("Schema pass produced %d violation(s)", len(violations))
    return [
        ValidationIssue.error(IssueKind.schema, v.path, v.message, data=v.data)
        for v in violations
    ]
