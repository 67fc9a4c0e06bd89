"""Tests for flattening trees into searchable records."""

from troubleshoot_hub.core.tree.indexer import flatten
from troubleshoot_hub.core.tree.walk import walk
from troubleshoot_hub.models.node import ContentNode


def test_flatten_emits_one_record_per_node(svls_tree: tuple[ContentNode, ...]) -> None:
    records = flatten(svls_tree)
    assert len(records) == sum(1 for _ in walk(svls_tree))


def test_flatten_path_array_matches_depth(svls_tree: tuple[ContentNode, ...]) -> None:
    records = {r.id: r for r in flatten(svls_tree)}
    for visit in walk(svls_tree):
        record = records[visit.node.id]
        assert len(record.path_array) == visit.depth + 1
        assert record.path_array[-1] == visit.node.title


def test_flatten_builds_display_path(svls_tree: tuple[ContentNode, ...]) -> None:
    records = {r.id: r for r in flatten(svls_tree)}
    assert records["memory-errors"].path == (
        "AWS Serverless Troubleshooting > AWS Lambda Troubleshooting > "
        "Common Lambda Errors > Memory Errors"
    )


def test_flatten_uses_empty_string_for_missing_content() -> None:
    tree = (ContentNode(id="folder", title="Folder", children=(ContentNode(id="a", title="A"),)),)
    records = flatten(tree)
    assert [r.content for r in records] == ["", ""]


def test_flatten_empty_forest() -> None:
    assert flatten(()) == []
