"""Render content trees as markdown outlines."""

import io
import re
from collections.abc import Collection, Sequence

from troubleshoot_hub.core.tree.navigation import find_node
from troubleshoot_hub.models.node import ContentNode

_TAG_RE = re.compile(r"<[^>]+>")
_SPACE_RE = re.compile(r"\s+")


def content_to_text(content: str) -> str:
    """Strip markup and collapse whitespace, for terminal display."""
    return _SPACE_RE.sub(" ", _TAG_RE.sub(" ", content)).strip()


def _render(
    out: io.StringIO,
    start: ContentNode,
    *,
    expanded: Collection[str] | None,
    max_depth: int | None,
    include_content: bool,
) -> None:
    stack: list[tuple[ContentNode, int]] = [(start, 0)]
    while stack:
        node, level = stack.pop()
        indent = "    " * level
        out.write(f"{indent}- {node.title}\n")

        if include_content and node.content:
            text = content_to_text(node.content)
            if text:
                out.write(f"{indent}  > {text}\n")

        if not node.children:
            continue

        collapsed = expanded is not None and node.id not in expanded
        truncated = max_depth is not None and level >= max_depth
        if collapsed or truncated:
            count = len(node.children)
            noun = "child" if count == 1 else "children"
            out.write(f"{indent}    - ... ({count} more {noun}, id={node.id})\n")
            continue

        stack.extend((child, level + 1) for child in reversed(node.children))


def render_outline_as_markdown(
    roots: Sequence[ContentNode],
    *,
    node_id: str | None = None,
    expanded: Collection[str] | None = None,
    max_depth: int | None = None,
    include_content: bool = True,
) -> str:
    """Render a tree (or one node's subtree) as indented markdown.

    Args:
        roots: The content tree.
        node_id: Render only this node and its descendants (None = whole tree).
        expanded: Only descend into nodes whose id is in this set (None = all).
        max_depth: Max levels below the start to include (None = unlimited).
        include_content: Whether to include node content as quoted text.

    Returns:
        Markdown string with bullet-list hierarchy, or "" if node_id is unknown.
    """
    if node_id is not None:
        start = find_node(roots, node_id)
        if start is None:
            return ""
        starts: Sequence[ContentNode] = (start,)
    else:
        starts = roots

    out = io.StringIO()
    for node in starts:
        _render(
            out,
            node,
            expanded=expanded,
            max_depth=max_depth,
            include_content=include_content,
        )
    return out.getvalue()
