"""Troubleshooting knowledge-base engine: search, validation and quick links."""

from troubleshoot_hub.core.search.searcher import search
from troubleshoot_hub.core.search.session import SearchSession
from troubleshoot_hub.core.tree.indexer import flatten
from troubleshoot_hub.core.tree.loader import load_tree, parse_tree
from troubleshoot_hub.core.tree.navigation import resolve_id_by_path
from troubleshoot_hub.core.validation.validator import validate
from troubleshoot_hub.core.visits.ranking import VisitTracker
from troubleshoot_hub.models.node import ContentNode
from troubleshoot_hub.protocols import SchedulerProtocol, VisitStoreProtocol

__all__ = [
    "ContentNode",
    "SchedulerProtocol",
    "SearchSession",
    "VisitStoreProtocol",
    "VisitTracker",
    "flatten",
    "load_tree",
    "parse_tree",
    "resolve_id_by_path",
    "search",
    "validate",
]
