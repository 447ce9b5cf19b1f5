"""Alias reference extraction and circular-reference detection."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from tokenlint.validator.models import IssueKind, ValidationIssue

logger = logging.getLogger(__name__)

# A value that is exactly one alias, e.g. "{color.brand.primary}"
REFERENCE_RE = re.compile(r"^\{[^}]+\}$")


@dataclass(frozen=True)
class ReferenceEdge:
    source: str
    target: str


def parse_reference(value: Any) -> str | None:
    """Return the referenced path if ``value`` is an alias string."""
    if isinstance(value, str) and REFERENCE_RE.match(value):
        return value[1:-1]
    return None


def check_self_reference(edge: ReferenceEdge) -> ValidationIssue | None:
    if edge.source != edge.target:
        return None
    return ValidationIssue.error(
        IssueKind.circular_reference,
        edge.source,
        "Token cannot reference itself",
    )


class ReferenceGraph:
    """Directed alias graph keyed by token path."""

    def __init__(self, edges: list[ReferenceEdge] | None = None) -> None:
        # dicts keep insertion order, so reports follow document order
        self._adjacency: dict[str, list[str]] = {}
        for edge in edges or []:
            self.add_edge(edge)

    def add_edge(self, edge: ReferenceEdge) -> None:
        self._adjacency.setdefault(edge.source, []).append(edge.target)

    @property
    def sources(self) -> list[str]:
        return list(self._adjacency)

    def targets(self, node: str) -> list[str]:
        return self._adjacency.get(node, [])

    def __len__(self) -> int:
        return sum(len(targets) for targets in self._adjacency.values())

    def find_cycles(self) -> list[list[str]]:
        """Find alias cycles with a visited + on-stack depth-first search.

        Each cycle is returned closed, e.g. ``["a", "b", "a"]``. A cycle
        reachable from several unvisited start nodes may be reported more
        than once.
        """
        cycles: list[list[str]] = []
        visited: set[str] = set()

        for start in self._adjacency:
            if start in visited:
                continue

            stack: list[str] = [start]
            on_stack: set[str] = {start}
            visited.add(start)
            # One iterator of pending targets per frame on the stack
            pending = [iter(self.targets(start))]

            while pending:
                nxt = next(pending[-1], None)
                if nxt is None:
                    pending.pop()
                    on_stack.discard(stack.pop())
                    continue
                if nxt in on_stack:
                    cycle = stack[stack.index(nxt):] + [nxt]
                    cycles.append(cycle)
                    continue
                if nxt in visited:
                    continue
                visited.add(nxt)
                on_stack.add(nxt)
                stack.append(nxt)
                pending.append(iter(self.targets(nxt)))

        if cycles:
            logger.debug("Found %d alias cycle(s)", len(cycles))
        return cycles


def check_cycles(graph: ReferenceGraph) -> list[ValidationIssue]:
    """Report one circular-reference error per detected cycle."""
    return [
        ValidationIssue.error(
            IssueKind.circular_reference,
            " -> ".join(cycle),
            "Circular reference detected in token chain",
            data=cycle,
        )
        for cycle in graph.find_cycles()
    ]


def check_unresolved(
    edges: list[ReferenceEdge], token_paths: set[str],
) -> list[ValidationIssue]:
    """Warn about aliases whose target is not a token in this document."""
    return [
        ValidationIssue.warning(
            IssueKind.unresolved_reference,
            edge.source,
            f"Token reference '{{{edge.target}}}' not found in this document",
        )
        for edge in edges
        if edge.target not in token_paths
    ]
