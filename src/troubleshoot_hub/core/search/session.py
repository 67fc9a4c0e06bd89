"""Debounced, keystroke-driven search over a content tree."""

import asyncio
import threading
from collections.abc import Callable, Sequence

from loguru import logger

from troubleshoot_hub.config import MAX_DISPLAYED_RESULTS, SEARCH_DEBOUNCE_DELAY
from troubleshoot_hub.core.search.searcher import search
from troubleshoot_hub.models.node import ContentNode, SearchOutcome
from troubleshoot_hub.protocols import SchedulerProtocol, TimerHandleProtocol


class ThreadTimerScheduler:
    """Run deferred callbacks on threading.Timer threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandleProtocol:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class AsyncioScheduler:
    """Run deferred callbacks on an asyncio event loop.

    Without an explicit loop, must be created from inside a running loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self.loop = loop or asyncio.get_running_loop()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandleProtocol:
        return self.loop.call_later(delay, callback)


class SearchSession:
    """Search box state: coalesces keystrokes and reports outcomes.

    Each call to schedule_search() cancels the pending timer and arms a new
    one, so only the last query of a burst runs. dispose() cancels whatever
    is still pending; the session ignores further input afterwards.
    """

    def __init__(
        self,
        roots: Sequence[ContentNode],
        *,
        on_results: Callable[[SearchOutcome], None] | None = None,
        on_expand: Callable[[frozenset[str]], None] | None = None,
        on_scroll: Callable[[str], None] | None = None,
        scheduler: SchedulerProtocol | None = None,
        delay: float = SEARCH_DEBOUNCE_DELAY,
    ) -> None:
        self.roots = tuple(roots)
        self.on_results = on_results
        self.on_expand = on_expand
        self.on_scroll = on_scroll
        self.scheduler = scheduler or ThreadTimerScheduler()
        self.delay = delay
        self.outcome = SearchOutcome(query="", display_limit=MAX_DISPLAYED_RESULTS)
        self.disposed = False

        self._pending: TimerHandleProtocol | None = None
        # Bumped on every schedule; a timer only acts if it still holds the latest value.
        self._generation = 0
        self._lock = threading.RLock()

    def schedule_search(self, query: str) -> None:
        """Queue a search for query, replacing any search not yet run."""
        with self._lock:
            if self.disposed:
                return
            self._cancel_pending()
            self._generation += 1
            generation = self._generation
            self._pending = self.scheduler.call_later(
                self.delay, lambda: self._fire(generation, query)
            )

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _fire(self, generation: int, query: str) -> None:
        with self._lock:
            if self.disposed or generation != self._generation:
                logger.debug("Dropping stale search {!r}", query)
                return
            self._pending = None
            self.run_search(query)

    def run_search(self, query: str) -> SearchOutcome:
        """Search immediately and notify listeners, unless the session is disposed."""
        outcome = search(self.roots, query)
        with self._lock:
            if self.disposed:
                return outcome
            self.outcome = outcome
            if self.on_results:
                self.on_results(outcome)
            if self.on_expand:
                self.on_expand(outcome.expand_ids)
        return outcome

    def jump_to_first(self) -> str | None:
        """Scroll to the first result, if any, and return its id."""
        if not self.outcome.results:
            return None
        return self.jump_to(self.outcome.results[0].id)

    def jump_to(self, result_id: str) -> str:
        """Scroll to a specific result."""
        if self.on_scroll:
            self.on_scroll(result_id)
        return result_id

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def dispose(self) -> None:
        """Cancel any pending search and stop accepting input."""
        with self._lock:
            self.disposed = True
            self._cancel_pending()
