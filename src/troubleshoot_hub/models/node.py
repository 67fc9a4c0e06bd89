"""Domain models for the troubleshooting knowledge base."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ContentNode:
    """A single article or folder in a content tree."""

    id: str
    title: str
    content: str | None = None
    children: tuple["ContentNode", ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children


@dataclass(frozen=True)
class FlatRecord:
    """A searchable node with its materialized ancestor path."""

    id: str
    title: str
    content: str
    path: str
    path_array: tuple[str, ...]


@dataclass(frozen=True)
class SearchOutcome:
    """Matches for a query plus the node ids to expand to reveal them."""

    query: str
    display_limit: int
    results: tuple[FlatRecord, ...] = ()
    expand_ids: frozenset[str] = frozenset()

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def displayed(self) -> tuple[FlatRecord, ...]:
        return self.results[: self.display_limit]

    @property
    def hidden_count(self) -> int:
        return max(0, self.total - self.display_limit)


@dataclass(frozen=True)
class ValidationStats:
    """Shape statistics for a content tree."""

    total_nodes: int = 0
    max_depth: int = 0
    nodes_with_content: int = 0
    nodes_with_children: int = 0


@dataclass(frozen=True)
class ValidationSummary:
    """Combined error/warning counts across all checks."""

    total_errors: int
    total_warnings: int
    is_valid: bool


@dataclass(frozen=True)
class ValidationReport:
    """Findings from validating a content tree."""

    valid: bool
    errors: tuple[str, ...]
    warnings: tuple[str, ...]
    stats: ValidationStats
    duplicate_ids: tuple[str, ...]
    html_warnings: tuple[str, ...]
    summary: ValidationSummary


@dataclass(frozen=True)
class VisitRecord:
    """Visit history for one recognized location. Timestamps are epoch ms."""

    path: str
    title: str
    count: int
    first_visit: int
    last_visit: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "title": self.title,
            "count": self.count,
            "first_visit": self.first_visit,
            "last_visit": self.last_visit,
        }

    @classmethod
    def from_dict(cls, path: str, data: dict[str, Any]) -> "VisitRecord":
        return cls(
            path=path,
            title=str(data["title"]),
            count=int(data["count"]),
            first_visit=int(data["first_visit"]),
            last_visit=int(data["last_visit"]),
        )


@dataclass(frozen=True)
class QuickLink:
    """A navigation shortcut."""

    path: str
    title: str


@dataclass(frozen=True)
class DefaultLink:
    """A fallback quick link with a fixed priority weight."""

    path: str
    title: str
    priority: int
