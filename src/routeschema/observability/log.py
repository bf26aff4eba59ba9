"""Session history — what a watch session scanned, evicted and failed on.

``generate()`` and ``WatchSession`` append events as they happen; when the
session stops it prints ``EventLog.summary()``::

    Stopped watching: 4 regenerations (mean scan 1.8 ms), 1 failed, 6 changes, 11 cache entries evicted

Every append happens on the event loop thread (the watcher thread only
enqueues ``ChangeEvent`` objects), so the log takes no lock.
"""

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass

from routeschema.observability.events import (
    CacheInvalidated,
    FileChanged,
    GenerationFailed,
    RouteSchemaEvent,
    ScanCompleted,
)


@dataclass(frozen=True, slots=True)
class SessionSummary:
    """Totals over the events still held by an ``EventLog``.

    Attributes:
        scans: Completed top-level scans.
        failures: Regenerations that raised.
        changes: Endpoint file changes reported by the watcher.
        evicted: Cache entries removed by those changes.
        mean_scan_ms: Mean scan wall time, ``0.0`` without scans.
        endpoints: Endpoint count of the most recent scan, if any.

    """

    scans: int = 0
    failures: int = 0
    changes: int = 0
    evicted: int = 0
    mean_scan_ms: float = 0.0
    endpoints: int | None = None

    def describe(self) -> str:
        parts = [f"{_plural(self.scans, 'regeneration')} (mean scan {self.mean_scan_ms:.1f} ms)"]
        if self.failures:
            parts.append(f"{self.failures} failed")
        parts.append(_plural(self.changes, "change"))
        parts.append(f"{_plural(self.evicted, 'cache entry', 'cache entries')} evicted")
        return ", ".join(parts)


def _plural(count: int, singular: str, plural: str | None = None) -> str:
    return f"{count} {singular if count == 1 else plural or singular + 's'}"


class EventLog:
    """Bounded, append-only history of one process's scans and changes.

    Args:
        max_events: Oldest events are dropped beyond this many.

    """

    __slots__ = ("_events",)

    def __init__(self, max_events: int = 1_000) -> None:
        self._events: deque[RouteSchemaEvent] = deque(maxlen=max_events)

    def append(self, event: RouteSchemaEvent) -> None:
        self._events.append(event)

    def of_type[E](self, event_type: type[E]) -> list[E]:
        """Events of *event_type*, oldest first."""
        return [event for event in self._events if isinstance(event, event_type)]

    def latest[E](self, event_type: type[E]) -> E | None:
        for event in reversed(self._events):
            if isinstance(event, event_type):
                return event
        return None

    def summary(self) -> SessionSummary:
        scans = self.of_type(ScanCompleted)
        last = scans[-1] if scans else None
        return SessionSummary(
            scans=len(scans),
            failures=len(self.of_type(GenerationFailed)),
            changes=len(self.of_type(FileChanged)),
            evicted=sum(e.removed for e in self.of_type(CacheInvalidated)),
            mean_scan_ms=sum(s.duration_ms for s in scans) / len(scans) if scans else 0.0,
            endpoints=last.endpoints if last is not None else None,
        )

    def __iter__(self) -> Iterator[RouteSchemaEvent]:
        return iter(tuple(self._events))

    def __len__(self) -> int:
        return len(self._events)
