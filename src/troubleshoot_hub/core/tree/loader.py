"""Load content trees from JSON files, URLs, or plain nested data."""

import json
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any

import requests
from loguru import logger

from troubleshoot_hub.config import FETCH_TIMEOUT
from troubleshoot_hub.core.tree.walk import raw_children
from troubleshoot_hub.models.node import ContentNode

_EXHAUSTED = object()


def _make_node(raw: Mapping[str, Any], children: list[ContentNode]) -> ContentNode:
    content = raw.get("content")
    return ContentNode(
        id=str(raw.get("id") or ""),
        title=str(raw.get("title") or ""),
        content=content if isinstance(content, str) else None,
        children=tuple(children),
    )


def parse_tree(data: Sequence[Any]) -> tuple[ContentNode, ...]:
    """Convert nested dicts into ContentNodes, substituting defaults for missing fields.

    Malformed input is tolerated so a partially broken tree stays browsable;
    run the validator to find out what is wrong with it.
    """
    roots: list[ContentNode] = []
    # Frames of (raw node, its parsed children, raw children left to parse, parent's list).
    # Nodes are built once all their children are, since ContentNode is immutable.
    stack: list[tuple[Any, list[ContentNode], Iterator[Any], list[ContentNode]]] = [
        (None, roots, iter(data), roots)
    ]
    while stack:
        raw, parsed, pending, siblings = stack[-1]
        child = next(pending, _EXHAUSTED)
        if child is _EXHAUSTED:
            stack.pop()
            if raw is not None:
                siblings.append(_make_node(raw, parsed))
            continue
        if not isinstance(child, Mapping):
            logger.debug("Skipping non-object node: {!r}", child)
            continue
        stack.append((child, [], iter(raw_children(child)), parsed))
    return tuple(roots)


def tree_to_data(roots: Sequence[ContentNode]) -> list[dict[str, Any]]:
    """Convert ContentNodes back into plain nested dicts."""
    out: list[dict[str, Any]] = []
    stack: list[tuple[ContentNode, list[dict[str, Any]]]] = [
        (node, out) for node in reversed(roots)
    ]
    while stack:
        node, dest = stack.pop()
        item: dict[str, Any] = {"id": node.id, "title": node.title}
        if node.content is not None:
            item["content"] = node.content
        if node.children:
            kids: list[dict[str, Any]] = []
            item["children"] = kids
            stack.extend((child, kids) for child in reversed(node.children))
        dest.append(item)
    return out


def _unwrap(payload: Any, source: str) -> list[Any]:
    if isinstance(payload, Mapping) and "nodes" in payload:
        payload = payload["nodes"]
    if not isinstance(payload, list):
        msg = f"Content tree from {source!r} must be a list of nodes"
        raise RuntimeError(msg)
    return payload


def read_tree_data(source: str | Path, *, session: requests.Session | None = None) -> list[Any]:
    """Return the raw node list from a JSON file or an http(s) URL."""
    source_str = str(source)
    if source_str.startswith(("http://", "https://")):
        sess = session or requests.Session()
        logger.debug("Fetching content tree from {}", source_str)
        r = sess.get(source_str, timeout=FETCH_TIMEOUT)
        r.raise_for_status()
        return _unwrap(r.json(), source_str)

    path = Path(source_str).expanduser()
    logger.debug("Reading content tree from {}", path)
    with open(path, encoding="utf-8") as f:
        return _unwrap(json.load(f), source_str)


def load_tree_file(path: str | Path) -> tuple[ContentNode, ...]:
    """Load a content tree from a JSON file (a list, or an object with a "nodes" list)."""
    return parse_tree(read_tree_data(path))


def fetch_tree(url: str, *, session: requests.Session | None = None) -> tuple[ContentNode, ...]:
    """Fetch a content tree over HTTP."""
    return parse_tree(read_tree_data(url, session=session))


def load_tree(
    source: str | Path, *, session: requests.Session | None = None
) -> tuple[ContentNode, ...]:
    """Load a content tree from a file path or an http(s) URL."""
    return parse_tree(read_tree_data(source, session=session))
