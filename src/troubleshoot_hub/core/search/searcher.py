"""Case-insensitive substring search over a content tree."""

from collections.abc import Sequence

from loguru import logger

from troubleshoot_hub.config import MAX_DISPLAYED_RESULTS
from troubleshoot_hub.core.tree.indexer import flatten
from troubleshoot_hub.core.tree.navigation import resolve_id_by_path
from troubleshoot_hub.models.node import ContentNode, FlatRecord, SearchOutcome


def matches(record: FlatRecord, query: str) -> bool:
    """True if query occurs in the record's title or content, ignoring case."""
    return query.lower() in f"{record.title} {record.content}".lower()


def expand_ids_for(roots: Sequence[ContentNode], results: Sequence[FlatRecord]) -> frozenset[str]:
    """Ids of every ancestor needed to reveal the results, plus the results themselves."""
    ids: set[str] = set()
    for record in results:
        for end in range(1, len(record.path_array)):
            node_id = resolve_id_by_path(roots, record.path_array[:end])
            if node_id:
                ids.add(node_id)
        ids.add(record.id)
    return frozenset(ids)


def search(roots: Sequence[ContentNode], query: str) -> SearchOutcome:
    """Search a tree for nodes whose title or content contains query.

    Results keep the tree's pre-order; there is no relevance ranking.
    A blank query returns an empty outcome, which callers treat as a reset.

    Args:
        roots: The content tree.
        query: Raw text typed by the user.

    Returns:
        SearchOutcome with all matches and the ids to expand.
    """
    if not query.strip():
        return SearchOutcome(query=query, display_limit=MAX_DISPLAYED_RESULTS)

    results = tuple(r for r in flatten(roots) if matches(r, query))
    logger.debug("Search {!r}: {} results", query, len(results))
    return SearchOutcome(
        query=query,
        results=results,
        expand_ids=expand_ids_for(roots, results),
        display_limit=MAX_DISPLAYED_RESULTS,
    )
