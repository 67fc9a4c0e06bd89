"""Protocols for dependency injection in the knowledge base engine."""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from troubleshoot_hub.models.node import VisitRecord


@runtime_checkable
class VisitStoreProtocol(Protocol):
    """Protocol for durable storage of the visit mapping."""

    def load(self) -> dict[str, VisitRecord]:
        """Return the persisted mapping of path to visit record."""
        ...

    def save(self, records: dict[str, VisitRecord]) -> None:
        """Replace the persisted mapping."""
        ...


@runtime_checkable
class TimerHandleProtocol(Protocol):
    """A pending deferred callback."""

    def cancel(self) -> None:
        """Prevent the callback from running if it has not started yet."""
        ...


@runtime_checkable
class SchedulerProtocol(Protocol):
    """Protocol for arming cancellable timers."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandleProtocol:
        """Run callback after delay seconds unless cancelled."""
        ...
