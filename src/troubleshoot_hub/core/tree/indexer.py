"""Flatten a content tree into searchable records."""

from collections.abc import Sequence

from troubleshoot_hub.config import PATH_SEPARATOR
from troubleshoot_hub.core.tree.walk import walk
from troubleshoot_hub.models.node import ContentNode, FlatRecord


def flatten(roots: Sequence[ContentNode]) -> list[FlatRecord]:
    """Return one record per node in pre-order, with its title path from the root."""
    records: list[FlatRecord] = []
    for visit in walk(roots):
        node: ContentNode = visit.node
        path_array = (*(a.title for a in visit.ancestors), node.title)
        records.append(
            FlatRecord(
                id=node.id,
                title=node.title,
                content=node.content or "",
                path=PATH_SEPARATOR.join(path_array),
                path_array=path_array,
            )
        )
    return records
