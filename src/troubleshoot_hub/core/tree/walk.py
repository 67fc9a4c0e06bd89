"""Generic pre-order traversal shared by the indexer, validator and statistics."""

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from troubleshoot_hub.models.node import ContentNode


@dataclass(frozen=True)
class NodeVisit:
    """A node reached during a walk, with its position in the tree."""

    node: Any
    depth: int
    location: str
    ancestors: tuple[Any, ...] = ()


def content_children(node: ContentNode) -> Sequence[ContentNode]:
    return node.children


def raw_children(node: Any) -> Sequence[Any]:
    """Children of an untyped node, or nothing if they are absent or malformed."""
    if not isinstance(node, Mapping):
        return ()
    children = node.get("children")
    if isinstance(children, list | tuple):
        return children
    return ()


def walk(
    roots: Sequence[Any],
    *,
    label: str = "root",
    children: Callable[[Any], Sequence[Any]] = content_children,
) -> Iterator[NodeVisit]:
    """Yield every node depth-first, parents before their children.

    Args:
        roots: Top-level nodes of the forest.
        label: Prefix for locations, e.g. ``label[0].children[2]``.
        children: Accessor returning a node's children.

    Yields:
        NodeVisit for each node, in stable pre-order.
    """
    stack = [
        NodeVisit(node=node, depth=0, location=f"{label}[{i}]") for i, node in enumerate(roots)
    ]
    stack.reverse()
    while stack:
        visit = stack.pop()
        yield visit

        kids = children(visit.node)
        ancestors = (*visit.ancestors, visit.node)
        for j in range(len(kids) - 1, -1, -1):
            stack.append(
                NodeVisit(
                    node=kids[j],
                    depth=visit.depth + 1,
                    location=f"{visit.location}.children[{j}]",
                    ancestors=ancestors,
                )
            )
