"""Page-visit tracking and quick-link ranking.

Each recognized location keeps a visit count and timestamps. Quick links
favour frequent and recent visits, decay with age, and fall back to a fixed
list of default locations.
"""

import math
import time
from collections.abc import Callable
from dataclasses import replace

from loguru import logger

from troubleshoot_hub.config import DEFAULT_LINKS, MAX_QUICK_LINKS, PAGE_MAPPING
from troubleshoot_hub.models.node import QuickLink, VisitRecord
from troubleshoot_hub.protocols import VisitStoreProtocol

ONE_DAY_MS = 24 * 60 * 60 * 1000
ONE_WEEK_MS = 7 * ONE_DAY_MS

RECENT_WEEK_BONUS = 5
RECENT_DAY_BONUS = 3
DECAY_PER_WEEK = 0.1
UNVISITED_DEFAULT_FACTOR = 0.5


def now_ms() -> int:
    return int(time.time() * 1000)


def score_visit(record: VisitRecord, now: int) -> float:
    """Score a visit record by frequency, with bonuses for recency and decay with age."""
    elapsed = now - record.last_visit
    score = float(record.count)
    if elapsed < ONE_WEEK_MS:
        score += RECENT_WEEK_BONUS
    if elapsed < ONE_DAY_MS:
        score += RECENT_DAY_BONUS
    weeks = elapsed / ONE_WEEK_MS
    return score * math.exp(-DECAY_PER_WEEK * weeks)


def rank_quick_links(records: dict[str, VisitRecord], now: int) -> list[QuickLink]:
    """Merge scored visits with unvisited defaults and return the top links."""
    scored: list[tuple[float, QuickLink]] = [
        (score_visit(record, now), QuickLink(path=path, title=record.title))
        for path, record in records.items()
    ]
    for default in DEFAULT_LINKS:
        if default.path not in records:
            scored.append(
                (
                    default.priority * UNVISITED_DEFAULT_FACTOR,
                    QuickLink(path=default.path, title=default.title),
                )
            )

    # sorted() is stable, so ties keep visits first, then defaults in list order.
    ranked = sorted(scored, key=lambda item: item[0], reverse=True)
    return [link for _, link in ranked[:MAX_QUICK_LINKS]]


class VisitTracker:
    """Record page visits and compute quick links from them."""

    def __init__(
        self,
        store: VisitStoreProtocol,
        *,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.store = store
        self.clock = clock

    def _load(self) -> dict[str, VisitRecord]:
        try:
            return self.store.load()
        except Exception:
            logger.warning("Failed to load page visit data, starting empty", exc_info=True)
            return {}

    def record_visit(self, path: str) -> None:
        """Count a visit to path. Unrecognized paths are ignored."""
        title = PAGE_MAPPING.get(path)
        if title is None:
            return

        records = self._load()
        now = self.clock()
        existing = records.get(path)
        if existing is None:
            existing = VisitRecord(path=path, title=title, count=0, first_visit=now, last_visit=now)
        records[path] = replace(existing, count=existing.count + 1, last_visit=now)

        try:
            self.store.save(records)
        except Exception:
            logger.warning("Failed to save page visit data", exc_info=True)
            return
        logger.debug("Visit {} (count={})", path, records[path].count)

    def compute_quick_links(self) -> list[QuickLink]:
        """Return up to MAX_QUICK_LINKS links, best first."""
        return rank_quick_links(self._load(), self.clock())

    def navigate(self, path: str) -> list[QuickLink]:
        """Record a visit to path and return the refreshed quick links."""
        self.record_visit(path)
        return self.compute_quick_links()
