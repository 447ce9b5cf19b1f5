"""Validation pipeline: orchestrates all checks in sequence."""

from __future__ import annotations

import logging
from typing import Any

from tokenlint.validator.contrast import contrast_failures, validate_token_contrast
from tokenlint.validator.models import (
    ContrastOptions,
    SchemaProfile,
    ValidationOptions,
    ValidationResult,
    ValidationStats,
)
from tokenlint.validator.references import (
    ReferenceEdge,
    ReferenceGraph,
    check_cycles,
    check_self_reference,
    check_unresolved,
    parse_reference,
)
from tokenlint.validator.schema import check_document_schema, get_default_schema
from tokenlint.validator.syntax import check_document_syntax
from tokenlint.validator.tree import Group, Token, walk
from tokenlint.validator.type_rules import check_group, check_token

logger = logging.getLogger(__name__)


def _count_optional_props(stats: ValidationStats, node: Token | Group) -> None:
    used = stats.optional_props_used
    label = "token" if isinstance(node, Token) else "group"
    for prop in used[label]:
        if prop in node.raw:
            used[label][prop] += 1

    if isinstance(node, Token) and node.type == "color" and isinstance(node.value, dict):
        for prop in used["color"]:
            if prop in node.value:
                used["color"][prop] += 1


class TokenValidator:
    """Validates token documents against one schema and profile.

    Construct one per configuration; instances hold no per-call state and
    can be shared between threads.
    """

    def __init__(
        self,
        schema: dict[str, Any] | None = None,
        profile: SchemaProfile = SchemaProfile.strict,
        strict_properties: bool = False,
    ) -> None:
        self._schema = schema
        self._profile = profile
        self._strict_properties = strict_properties

    @property
    def profile(self) -> SchemaProfile:
        return self._profile

    def with_overrides(
        self,
        profile: SchemaProfile | None = None,
        strict_properties: bool | None = None,
    ) -> TokenValidator:
        """Return a copy with the given settings replaced."""
        return TokenValidator(
            schema=self._schema,
            profile=profile if profile is not None else self._profile,
            strict_properties=(
                strict_properties
                if strict_properties is not None
                else self._strict_properties
            ),
        )

    def validate(
        self, document: dict[str, Any], contrast: ContrastOptions | None = None,
    ) -> ValidationResult:
        """Run the full pipeline on a parsed token document.

        Order: 1. Schema → 2. Tree walk (types + references) → 3. Cycles →
        4. Contrast (optional). Every stage runs; issues are collected, not raised.
        """
        result = ValidationResult(tokens=document)

        # Step 1: structural schema pass
        if self._schema is not None:
            result.extend(check_document_schema(self._schema, document))
        else:
            logger.warning("No token schema configured, skipping structural validation")

        # Step 2: walk the tree
        graph = ReferenceGraph()
        edges: list[ReferenceEdge] = []
        token_paths: set[str] = set()

        for item in walk(document):
            node = item.node
            if isinstance(node, Token):
                result.stats.total_tokens += 1
                token_paths.add(item.path)
                _count_optional_props(result.stats, node)
                result.extend(
                    check_token(node, item.path, self._profile, self._strict_properties)
                )

                target = parse_reference(node.value)
                if target is not None:
                    edge = ReferenceEdge(source=item.path, target=target)
                    edges.append(edge)
                    graph.add_edge(edge)
                    issue = check_self_reference(edge)
                    if issue is not None:
                        result.add(issue)
            elif isinstance(node, Group):
                result.stats.total_groups += 1
                _count_optional_props(result.stats, node)
                result.extend(check_group(node, item.path, self._strict_properties))

        result.stats.total_references = len(edges)

        # Step 3: cycles over the complete graph
        result.extend(check_cycles(graph))
        result.extend(check_unresolved(edges, token_paths))

        result.is_valid = not result.errors

        # Step 4: contrast
        if contrast is not None:
            report = validate_token_contrast(document, contrast)
            failures = contrast_failures(report)
            result.extend(failures)
            if failures:
                result.is_valid = False
            result.contrast = report

        logger.info(
            "Validated %d tokens: %d error(s), %d warning(s)",
            result.stats.total_tokens,
            len(result.errors),
            len(result.warnings),
        )
        return result


def _validator_for(options: ValidationOptions) -> TokenValidator:
    schema = options.schema_ if options.schema_ is not None else get_default_schema()
    return TokenValidator(
        schema=schema,
        profile=options.profile,
        strict_properties=options.strict_properties,
    )


def validate(
    document: dict[str, Any], options: ValidationOptions | None = None,
) -> ValidationResult:
    """Validate a parsed token document.

    Uses ``options.schema`` when given, else the process-wide default schema.
    """
    options = options or ValidationOptions()
    return _validator_for(options).validate(document, options.contrast_options)


def validate_source(
    source: str, options: ValidationOptions | None = None,
) -> ValidationResult:
    """Parse then validate a JSON or YAML token document.

    If parsing fails, returns immediately with a single parse error.
    """
    result = check_document_syntax(source)
    if not result.is_valid or result.tokens is None:
        return result
    return validate(result.tokens, options)
