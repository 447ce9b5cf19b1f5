"""Tests for tokenlint.validator.references: aliases and cycle detection."""

from __future__ import annotations

from tokenlint.validator.models import IssueKind, ValidationSeverity
from tokenlint.validator.references import (
    ReferenceEdge,
    ReferenceGraph,
    check_cycles,
    check_self_reference,
    check_unresolved,
    parse_reference,
)


def _graph(*pairs: tuple[str, str]) -> ReferenceGraph:
    return ReferenceGraph([ReferenceEdge(source=s, target=t) for s, t in pairs])


class TestParseReference:
    def test_alias(self) -> None:
        assert parse_reference("{color.brand.primary}") == "color.brand.primary"

    def test_embedded_alias_is_not_reference(self) -> None:
        assert parse_reference("calc({space.sm} * 2)") is None

    def test_non_string(self) -> None:
        assert parse_reference({"colorSpace": "srgb"}) is None
        assert parse_reference(4) is None

    def test_empty_braces(self) -> None:
        assert parse_reference("{}") is None


class TestSelfReference:
    def test_self_reference_is_error(self) -> None:
        issue = check_self_reference(ReferenceEdge(source="a", target="a"))
        assert issue is not None
        assert issue.kind == IssueKind.circular_reference
        assert issue.severity == ValidationSeverity.error
        assert issue.path == "a"
        assert issue.message == "Token cannot reference itself"

    def test_distinct_nodes(self) -> None:
        assert check_self_reference(ReferenceEdge(source="a", target="b")) is None


class TestFindCycles:
    def test_no_cycles(self) -> None:
        assert _graph(("a", "b"), ("b", "c")).find_cycles() == []

    def test_two_node_cycle(self) -> None:
        assert _graph(("a", "b"), ("b", "a")).find_cycles() == [["a", "b", "a"]]

    def test_three_node_cycle(self) -> None:
        cycles = _graph(("a", "b"), ("b", "c"), ("c", "a")).find_cycles()
        assert cycles == [["a", "b", "c", "a"]]

    def test_self_loop(self) -> None:
        assert _graph(("a", "a")).find_cycles() == [["a", "a"]]

    def test_cycle_reached_through_tail(self) -> None:
        cycles = _graph(("x", "a"), ("a", "b"), ("b", "a")).find_cycles()
        assert cycles == [["a", "b", "a"]]

    def test_diamond_is_not_a_cycle(self) -> None:
        graph = _graph(("a", "b"), ("a", "c"), ("b", "d"), ("c", "d"))
        assert graph.find_cycles() == []

    def test_long_chain_does_not_recurse(self) -> None:
        pairs = [(f"t{i}", f"t{i + 1}") for i in range(5000)]
        pairs.append(("t5000", "t0"))
        cycles = _graph(*pairs).find_cycles()
        assert len(cycles) == 1
        assert len(cycles[0]) == 5002

    def test_len_counts_edges(self) -> None:
        assert len(_graph(("a", "b"), ("a", "c"))) == 2


class TestCheckCycles:
    def test_error_per_cycle(self) -> None:
        issues = check_cycles(_graph(("a", "b"), ("b", "a")))
        assert len(issues) == 1
        assert issues[0].kind == IssueKind.circular_reference
        assert issues[0].path == "a -> b -> a"
        assert issues[0].message == "Circular reference detected in token chain"
        assert issues[0].data == ["a", "b", "a"]


class TestUnresolved:
    def test_missing_target_warns(self) -> None:
        edges = [
            ReferenceEdge(source="color.link", target="color.brand"),
            ReferenceEdge(source="color.muted", target="color.gone"),
        ]
        issues = check_unresolved(edges, {"color.link", "color.brand", "color.muted"})
        assert len(issues) == 1
        assert issues[0].severity == ValidationSeverity.warning
        assert issues[0].kind == IssueKind.unresolved_reference
        assert issues[0].path == "color.muted"
        assert "{color.gone}" in issues[0].message
