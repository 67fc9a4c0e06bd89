"""Shared test fixtures."""

import json
from pathlib import Path
from typing import Any

import pytest

from troubleshoot_hub.core.tree.loader import parse_tree
from troubleshoot_hub.models.node import ContentNode

SVLS_TREE: list[dict[str, Any]] = [
    {
        "id": "root",
        "title": "AWS Serverless Troubleshooting",
        "children": [
            {
                "id": "lambda",
                "title": "AWS Lambda Troubleshooting",
                "children": [
                    {
                        "id": "lambda-errors",
                        "title": "Common Lambda Errors",
                        "children": [
                            {
                                "id": "timeout-errors",
                                "title": "Timeout Errors",
                                "content": (
                                    '<div class="section-header">'
                                    "Lambda Function Timeout Issues</div>"
                                    "<p><strong>Symptoms:</strong> "
                                    "Task timed out after 3.00 seconds</p>"
                                ),
                            },
                            {
                                "id": "memory-errors",
                                "title": "Memory Errors",
                                "content": "<p>Runtime exited with error: signal: killed</p>",
                            },
                        ],
                    },
                    {
                        "id": "lambda-permissions",
                        "title": "Permissions",
                        "content": "<p>AccessDeniedException when invoking</p>",
                    },
                ],
            },
            {
                "id": "apigw",
                "title": "API Gateway Troubleshooting",
                "children": [
                    {
                        "id": "apigw-504",
                        "title": "504 Gateway Timeout",
                        "content": "<p>Integration timed out after 29 seconds</p>",
                    },
                ],
            },
        ],
    },
    {
        "id": "stepfunctions",
        "title": "Step Functions Troubleshooting",
        "content": "<p>States.Timeout errors</p>",
    },
]


@pytest.fixture
def svls_data() -> list[dict[str, Any]]:
    """Return the sample tree as plain nested data."""
    return json.loads(json.dumps(SVLS_TREE))


@pytest.fixture
def svls_tree(svls_data: list[dict[str, Any]]) -> tuple[ContentNode, ...]:
    """Return the sample tree as ContentNodes."""
    return parse_tree(svls_data)


@pytest.fixture
def svls_file(tmp_path: Path, svls_data: list[dict[str, Any]]) -> Path:
    """Write the sample tree to a JSON file and return its path."""
    path = tmp_path / "svls.json"
    path.write_text(json.dumps(svls_data))
    return path
