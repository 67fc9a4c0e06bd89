"""Tree navigation: title-path resolution and node lookup."""

from collections.abc import Sequence

from troubleshoot_hub.models.node import ContentNode


def resolve_id_by_path(roots: Sequence[ContentNode], path_array: Sequence[str]) -> str | None:
    """Find the id of the node reached by following a sequence of titles.

    Titles are compared exactly, segment by segment. When several nodes share
    the same title path the first one in pre-order wins.

    Returns:
        The node id, or None if no node sits at that path.
    """
    target = tuple(path_array)
    if not target:
        return None

    # A node is only pushed once its parent matched, so checking its own
    # title against target[depth] is enough to match the whole prefix.
    stack = [(node, 0) for node in reversed(roots)]
    while stack:
        node, depth = stack.pop()
        if node.title != target[depth]:
            continue
        if depth == len(target) - 1:
            return node.id
        stack.extend((child, depth + 1) for child in reversed(node.children))
    return None


def find_node(roots: Sequence[ContentNode], node_id: str) -> ContentNode | None:
    """Return the first node with the given id, searching depth-first."""
    stack = list(reversed(roots))
    while stack:
        node = stack.pop()
        if node.id == node_id:
            return node
        stack.extend(reversed(node.children))
    return None
