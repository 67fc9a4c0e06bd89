"""Structural validation of content trees.

Every check reports findings as strings instead of raising, so callers can
still display a broken tree while logging what is wrong with it. Input may
be untyped nested data (as read from JSON) or a sequence of ContentNodes.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger

from troubleshoot_hub.core.tree.loader import tree_to_data
from troubleshoot_hub.core.tree.walk import raw_children, walk
from troubleshoot_hub.models.node import (
    ContentNode,
    ValidationReport,
    ValidationStats,
    ValidationSummary,
)

# Tag-counting heuristic, not a parser: void elements written without "/>",
# comments, and ">" inside attribute values all skew the counts.
_OPEN_TAG_RE = re.compile(r"<[^/][^>]*>")
_CLOSE_TAG_RE = re.compile(r"</[^>]*>")
_SELF_CLOSING_TAG_RE = re.compile(r"<[^>]*/>")


def _as_data(data: Any) -> Any:
    if isinstance(data, list | tuple) and data and all(isinstance(n, ContentNode) for n in data):
        return tree_to_data(data)
    return data


def _check_fields(node: Any, path: str) -> list[str]:
    if not isinstance(node, Mapping):
        return [f"{path}: Node must be an object"]

    errors: list[str] = []
    node_id = node.get("id")
    title = node.get("title")
    content = node.get("content")
    children = node.get("children")

    if not node_id:
        errors.append(f"{path}: Missing required field 'id'")
    if not title:
        errors.append(f"{path}: Missing required field 'title'")

    if node_id and not isinstance(node_id, str):
        errors.append(f"{path}: Field 'id' must be a string")
    if title and not isinstance(title, str):
        errors.append(f"{path}: Field 'title' must be a string")
    if content and not isinstance(content, str):
        errors.append(f"{path}: Field 'content' must be a string")

    if children is not None and not isinstance(children, list | tuple):
        errors.append(f"{path}: Field 'children' must be an array")

    return errors


def validate_node(node: Any, path: str = "root") -> list[str]:
    """Check one node and its descendants against the content schema."""
    errors: list[str] = []
    for visit in walk([node], label="", children=raw_children):
        location = path + visit.location.removeprefix("[0]")
        errors.extend(_check_fields(visit.node, location))
    return errors


def calculate_stats(data: Sequence[Any]) -> ValidationStats:
    """Count nodes, content, containers and maximum depth (roots are depth 0)."""
    total = max_depth = with_content = with_children = 0
    for visit in walk(data, children=raw_children):
        total += 1
        max_depth = max(max_depth, visit.depth)
        if isinstance(visit.node, Mapping):
            if visit.node.get("content"):
                with_content += 1
            if raw_children(visit.node):
                with_children += 1
    return ValidationStats(
        total_nodes=total,
        max_depth=max_depth,
        nodes_with_content=with_content,
        nodes_with_children=with_children,
    )


def check_duplicate_ids(data: Any, label: str = "root") -> list[str]:
    """Report every repeat of an id after its first occurrence."""
    data = _as_data(data)
    if not isinstance(data, list | tuple):
        return []

    seen: set[str] = set()
    duplicates: list[str] = []
    for visit in walk(data, label=label, children=raw_children):
        if not isinstance(visit.node, Mapping):
            continue
        node_id = visit.node.get("id")
        if not isinstance(node_id, str) or not node_id:
            continue
        if node_id in seen:
            duplicates.append(f"Duplicate ID '{node_id}' found at {visit.location}")
        else:
            seen.add(node_id)
    return duplicates


def check_html(content: str, path: str) -> list[str]:
    """Best-effort markup checks for a single content string."""
    warnings: list[str] = []
    if "<script" in content:
        warnings.append(f"{path}: Content contains <script> tag - potential security risk")
    if "javascript:" in content:
        warnings.append(f"{path}: Content contains javascript: protocol - potential security risk")

    open_tags = len(_OPEN_TAG_RE.findall(content))
    close_tags = len(_CLOSE_TAG_RE.findall(content))
    self_closing = len(_SELF_CLOSING_TAG_RE.findall(content))
    if open_tags != close_tags + self_closing:
        warnings.append(f"{path}: Possible unclosed HTML tags in content")
    return warnings


def validate_html_content(data: Any, label: str = "root") -> list[str]:
    """Run the markup checks on every node with non-empty string content."""
    data = _as_data(data)
    if not isinstance(data, list | tuple):
        return []

    warnings: list[str] = []
    for visit in walk(data, label=label, children=raw_children):
        if not isinstance(visit.node, Mapping):
            continue
        content = visit.node.get("content")
        if content and isinstance(content, str):
            warnings.extend(check_html(content, visit.location))
    return warnings


def validate(data: Any, label: str = "unknown") -> ValidationReport:
    """Validate a content tree and collect all findings.

    Args:
        data: List of root nodes, as dicts or ContentNodes.
        label: Name of the tree's source, used as the path prefix in messages.

    Returns:
        ValidationReport. ``valid`` covers per-node schema errors only;
        ``summary.is_valid`` additionally requires no duplicate ids.
    """
    data = _as_data(data)

    if not isinstance(data, list | tuple):
        errors = (f"{label}: Data must be an array",)
        return ValidationReport(
            valid=False,
            errors=errors,
            warnings=(),
            stats=ValidationStats(),
            duplicate_ids=(),
            html_warnings=(),
            summary=ValidationSummary(total_errors=1, total_warnings=0, is_valid=False),
        )

    warnings: list[str] = []
    if not data:
        warnings.append(f"{label}: Data array is empty")

    errors: list[str] = []
    for index, node in enumerate(data):
        errors.extend(validate_node(node, f"{label}[{index}]"))

    duplicates = check_duplicate_ids(data, label)
    html_warnings = validate_html_content(data, label)
    valid = not errors

    report = ValidationReport(
        valid=valid,
        errors=tuple(errors),
        warnings=tuple(warnings),
        stats=calculate_stats(data),
        duplicate_ids=tuple(duplicates),
        html_warnings=tuple(html_warnings),
        summary=ValidationSummary(
            total_errors=len(errors) + len(duplicates),
            total_warnings=len(warnings) + len(html_warnings),
            is_valid=valid and not duplicates,
        ),
    )
    logger.debug(
        "Validated {}: {} errors, {} duplicates, {} markup warnings",
        label, len(errors), len(duplicates), len(html_warnings),
    )
    return report
