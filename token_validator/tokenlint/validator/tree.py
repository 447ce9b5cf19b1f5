"""Token tree model: classify and walk a DTCG token document."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Union

RESERVED_PREFIX = "$"


@dataclass(frozen=True)
class Token:
    """A leaf node: any mapping carrying ``$value``."""

    type: str | None
    value: Any
    description: str | None
    raw: Mapping[str, Any]


@dataclass(frozen=True)
class Group:
    """A container with a ``$type`` annotation but no ``$value``."""

    type: str
    description: str | None
    raw: Mapping[str, Any]


@dataclass(frozen=True)
class Unclassified:
    """Any other mapping; only walked for its children."""

    raw: Mapping[str, Any]


Node = Union[Token, Group, Unclassified]


@dataclass(frozen=True)
class TreeNode:
    path: str
    node: Node


def classify(obj: Mapping[str, Any]) -> Node:
    """Classify a mapping by the presence of ``$value`` / ``$type``."""
    if "$value" in obj:
        raw_type = obj.get("$type")
        return Token(
            type=raw_type if isinstance(raw_type, str) else None,
            value=obj["$value"],
            description=_description(obj),
            raw=obj,
        )
    if "$type" in obj:
        return Group(type=str(obj["$type"]), description=_description(obj), raw=obj)
    return Unclassified(raw=obj)


def _description(obj: Mapping[str, Any]) -> str | None:
    desc = obj.get("$description")
    return desc if isinstance(desc, str) else None


def join_path(parent: str, key: str) -> str:
    return f"{parent}.{key}" if parent else key


def walk(document: Any, path: str = "") -> Iterator[TreeNode]:
    """Depth-first, pre-order walk yielding every mapping in the tree.

    Children are the non-``$`` keys whose values are mappings. Token
    mappings are descended into as well; a DTCG token has no such keys, but
    malformed documents sometimes nest tokens under tokens.
    """
    if not isinstance(document, Mapping):
        return

    stack: list[tuple[str, Mapping[str, Any]]] = [(path, document)]
    while stack:
        current_path, obj = stack.pop()
        yield TreeNode(path=current_path, node=classify(obj))

        children = [
            (join_path(current_path, str(key)), value)
            for key, value in obj.items()
            if not str(key).startswith(RESERVED_PREFIX) and isinstance(value, Mapping)
        ]
        # Reverse so the stack pops children in document order
        stack.extend(reversed(children))
