"""Tests for tokenlint.validator.pipeline: end-to-end validation runs."""

from __future__ import annotations

import copy
from pathlib import Path

from tokenlint.validator import (
    ColorPair,
    ContrastOptions,
    IssueKind,
    SchemaProfile,
    TokenValidator,
    ValidationOptions,
    set_default_schema,
    validate,
    validate_source,
)
from tokenlint.validator.schema import load_schema
from tokenlint.validator.syntax import check_document_syntax


def _kinds(issues) -> list[IssueKind]:
    return [i.kind for i in issues]


class TestSyntax:
    def test_json_source(self) -> None:
        result = check_document_syntax('{"color": {"red": {"$value": "#f00"}}}')
        assert result.is_valid
        assert result.tokens == {"color": {"red": {"$value": "#f00"}}}

    def test_yaml_source(self) -> None:
        source = "color:\n  red:\n    $type: color\n    $value: '#ff0000'\n"
        result = check_document_syntax(source)
        assert result.is_valid
        assert result.tokens["color"]["red"]["$value"] == "#ff0000"

    def test_empty_source(self) -> None:
        result = check_document_syntax("   \n")
        assert not result.is_valid
        assert result.errors[0].kind == IssueKind.parse
        assert result.errors[0].path == "file"

    def test_malformed_source_reports_line(self) -> None:
        result = check_document_syntax('{"color": {"red": \n')
        assert not result.is_valid
        assert len(result.errors) == 1
        assert result.errors[0].message.startswith("Failed to parse token document")
        assert "line" in result.errors[0].data

    def test_non_object_root(self) -> None:
        result = check_document_syntax("- a\n- b\n")
        assert not result.is_valid
        assert "must be an object" in result.errors[0].message

    def test_null_root(self) -> None:
        assert not check_document_syntax("null").is_valid


class TestValidate:
    def test_sample_document_is_clean(self, sample_tokens: dict) -> None:
        result = validate(sample_tokens)
        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []
        assert result.contrast is None

    def test_stats(self, sample_tokens: dict) -> None:
        stats = validate(sample_tokens).stats
        assert stats.total_tokens == 5
        assert stats.total_groups == 1
        assert stats.total_references == 1
        assert stats.optional_props_used["token"]["$description"] == 1
        assert stats.optional_props_used["color"]["alpha"] == 0

    def test_is_valid_iff_no_errors(self) -> None:
        doc = {"c": {"$type": "color", "$value": "red"}}
        result = validate(doc)
        assert result.is_valid
        assert _kinds(result.warnings) == [IssueKind.color_format]

    def test_invalid_color_space_single_error(self) -> None:
        doc = {
            "c": {
                "$type": "color",
                "$value": {"colorSpace": "invalid-space", "components": [1, 0, 0]},
            }
        }
        result = validate(doc)
        assert not result.is_valid
        assert _kinds(result.errors) == [IssueKind.custom]

    def test_two_components_error(self) -> None:
        doc = {"c": {"$type": "color", "$value": {"colorSpace": "srgb", "components": [1, 0]}}}
        assert len(validate(doc).errors) == 1

    def test_em_dimension_error(self) -> None:
        doc = {"s": {"$type": "dimension", "$value": {"value": 1, "unit": "em"}}}
        result = validate(doc)
        assert _kinds(result.errors) == [IssueKind.custom]

    def test_self_reference(self) -> None:
        result = validate({"a": {"$type": "color", "$value": "{a}"}})
        assert not result.is_valid
        messages = [e.message for e in result.errors]
        assert "Token cannot reference itself" in messages
        assert all(e.kind == IssueKind.circular_reference for e in result.errors)

    def test_two_node_cycle(self) -> None:
        doc = {
            "a": {"$type": "color", "$value": "{b}"},
            "b": {"$type": "color", "$value": "{a}"},
        }
        result = validate(doc)
        assert _kinds(result.errors) == [IssueKind.circular_reference]
        assert result.errors[0].path == "a -> b -> a"

    def test_unresolved_reference_is_warning(self) -> None:
        result = validate({"a": {"$type": "color", "$value": "{missing.token}"}})
        assert result.is_valid
        assert _kinds(result.warnings) == [IssueKind.unresolved_reference]

    def test_group_type_not_inherited(self) -> None:
        doc = {"color": {"$type": "color", "bad": {"$value": "not-a-color"}}}
        result = validate(doc)
        assert result.warnings == []

    def test_profile_option(self) -> None:
        doc = {"o": {"$type": "opacity", "$value": 0.5}}
        strict = validate(doc)
        permissive = validate(doc, ValidationOptions(profile=SchemaProfile.permissive))
        assert _kinds(strict.warnings) == [IssueKind.non_standard_type]
        assert permissive.warnings == []

    def test_pure(self, sample_tokens: dict) -> None:
        before = copy.deepcopy(sample_tokens)
        first = validate(sample_tokens, ValidationOptions(contrast=True))
        second = validate(sample_tokens, ValidationOptions(contrast=True))
        assert first == second
        assert sample_tokens == before


class TestSchemaSelection:
    def test_no_schema_skips_structural_pass(self) -> None:
        result = validate({"$oops": 1})
        assert result.is_valid

    def test_default_schema_used(self, strict_schema_path: Path) -> None:
        set_default_schema(load_schema(strict_schema_path))
        result = validate({"$oops": 1})
        assert _kinds(result.errors) == [IssueKind.schema]

    def test_call_schema_overrides_default(self, strict_schema_path: Path) -> None:
        set_default_schema(load_schema(strict_schema_path))
        result = validate({"$oops": 1}, ValidationOptions(schema={"type": "object"}))
        assert result.is_valid

    def test_dangling_ref_schema_does_not_raise(self) -> None:
        doc = {"a": {"$type": "color", "$value": "#fff"}}
        result = validate(doc, ValidationOptions(schema={"$ref": "#/$defs/missing"}))
        assert not result.is_valid
        assert _kinds(result.errors) == [IssueKind.schema]
        assert result.stats.total_tokens == 1

    def test_injected_validator_ignores_default(self, strict_schema_path: Path) -> None:
        set_default_schema(load_schema(strict_schema_path))
        result = TokenValidator().validate({"$oops": 1})
        assert result.is_valid

    def test_with_overrides_keeps_schema(self, strict_schema_path: Path) -> None:
        validator = TokenValidator(schema=load_schema(strict_schema_path))
        permissive = validator.with_overrides(profile=SchemaProfile.permissive)
        assert permissive.profile == SchemaProfile.permissive
        assert _kinds(permissive.validate({"$oops": 1}).errors) == [IssueKind.schema]


class TestContrastInPipeline:
    def test_contrast_failure_invalidates(self) -> None:
        doc = {
            "semantic": {
                "color": {
                    "foreground": {"primary": {"$type": "color", "$value": "#777777"}},
                    "background": {"primary": {"$type": "color", "$value": "#ffffff"}},
                }
            }
        }
        result = validate(doc, ValidationOptions(contrast=True))
        assert not result.is_valid
        assert result.contrast is not None
        assert result.contrast.invalid_pairs == 1
        assert _kinds(result.errors) == [IssueKind.custom]
        assert result.errors[0].path == "Primary text on primary background"

    def test_contrast_pass_keeps_valid(self) -> None:
        options = ValidationOptions(
            contrast=ContrastOptions(
                color_pairs=[ColorPair(foreground="#000", background="#fff")]
            )
        )
        result = validate({}, options)
        assert result.is_valid
        assert result.contrast is not None
        assert result.contrast.valid_pairs == 1


class TestValidateSource:
    def test_parse_failure_short_circuits(self) -> None:
        result = validate_source("")
        assert not result.is_valid
        assert _kinds(result.errors) == [IssueKind.parse]
        assert result.stats.total_tokens == 0

    def test_yaml_document(self) -> None:
        source = "space:\n  sm:\n    $type: dimension\n    $value: {value: 4, unit: em}\n"
        result = validate_source(source)
        assert not result.is_valid
        assert result.stats.total_tokens == 1
