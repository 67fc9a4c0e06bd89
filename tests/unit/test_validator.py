"""Tests for structural validation of content trees."""

import copy
from typing import Any

from troubleshoot_hub.core.tree.loader import parse_tree
from troubleshoot_hub.core.validation.validator import (
    calculate_stats,
    check_duplicate_ids,
    check_html,
    validate,
    validate_html_content,
    validate_node,
)


def test_valid_tree_has_no_findings(svls_data: list[dict[str, Any]]) -> None:
    report = validate(svls_data, "svls")
    assert report.valid
    assert report.errors == ()
    assert report.duplicate_ids == ()
    assert report.html_warnings == ()
    assert report.summary.is_valid
    assert report.summary.total_errors == 0


def test_stats(svls_data: list[dict[str, Any]]) -> None:
    stats = calculate_stats(svls_data)
    assert stats.total_nodes == 9
    assert stats.max_depth == 3
    assert stats.nodes_with_content == 5
    assert stats.nodes_with_children == 4


def test_missing_title_reports_single_error() -> None:
    data = [{"id": "root", "title": "Root", "children": [{"id": "a", "content": "x"}]}]
    report = validate(data, "svls")
    assert report.valid is False
    assert report.errors == ("svls[0].children[0]: Missing required field 'title'",)
    assert report.summary.is_valid is False


def test_missing_and_mistyped_fields() -> None:
    errors = validate_node({"id": 7, "title": ["x"], "content": 3, "children": "no"}, "t[0]")
    assert errors == [
        "t[0]: Field 'id' must be a string",
        "t[0]: Field 'title' must be a string",
        "t[0]: Field 'content' must be a string",
        "t[0]: Field 'children' must be an array",
    ]


def test_empty_id_is_missing() -> None:
    assert validate_node({"id": "", "title": "T"}, "p") == ["p: Missing required field 'id'"]


def test_non_object_node() -> None:
    report = validate([{"id": "a", "title": "A", "children": ["oops"]}], "t")
    assert report.errors == ("t[0].children[0]: Node must be an object",)


def test_non_list_data() -> None:
    report = validate({"id": "a"}, "svls")
    assert report.valid is False
    assert report.errors == ("svls: Data must be an array",)
    assert report.summary.total_errors == 1


def test_empty_list_warns() -> None:
    report = validate([], "svls")
    assert report.valid
    assert report.warnings == ("svls: Data array is empty",)
    assert report.stats.total_nodes == 0


def test_duplicate_id_flags_second_occurrence_only() -> None:
    data = [
        {"id": "x", "title": "First"},
        {"id": "p", "title": "Parent", "children": [{"id": "x", "title": "Second"}]},
    ]
    duplicates = check_duplicate_ids(data, "svls")
    assert duplicates == ["Duplicate ID 'x' found at svls[1].children[0]"]

    report = validate(data, "svls")
    assert report.valid is True
    assert report.summary.is_valid is False
    assert report.summary.total_errors == 1


def test_html_security_warnings() -> None:
    warnings = check_html('<a href="javascript:alert(1)">x</a><script>bad()</script>', "n")
    assert "n: Content contains <script> tag - potential security risk" in warnings
    assert "n: Content contains javascript: protocol - potential security risk" in warnings
    assert "n: Possible unclosed HTML tags in content" not in warnings


def test_html_unclosed_tag_heuristic() -> None:
    assert check_html("<div><p>text</div>", "n") == ["n: Possible unclosed HTML tags in content"]
    assert check_html("<p>line<br/>break</p>", "n") == []


def test_html_warnings_are_not_errors() -> None:
    data = [{"id": "a", "title": "A", "content": "<div>unclosed"}]
    report = validate(data, "t")
    assert report.summary.is_valid
    assert report.html_warnings == ("t[0]: Possible unclosed HTML tags in content",)
    assert report.summary.total_warnings == 1
    assert validate_html_content(data, "t") == list(report.html_warnings)


def test_validate_is_pure_and_deterministic(svls_data: list[dict[str, Any]]) -> None:
    svls_data[0]["children"].append({"id": "lambda", "content": "<b>"})
    before = copy.deepcopy(svls_data)
    first = validate(svls_data, "svls")
    second = validate(svls_data, "svls")
    assert first == second
    assert svls_data == before


def test_validate_accepts_content_nodes(svls_data: list[dict[str, Any]]) -> None:
    assert validate(parse_tree(svls_data), "svls") == validate(svls_data, "svls")


def test_validate_handles_deep_trees() -> None:
    node: dict[str, Any] = {"id": "leaf", "title": "Leaf"}
    for i in range(3000):
        node = {"id": f"n{i}", "title": "N", "children": [node]}
    report = validate([node], "deep")
    assert report.valid
    assert report.stats.total_nodes == 3001
    assert report.stats.max_depth == 3000
