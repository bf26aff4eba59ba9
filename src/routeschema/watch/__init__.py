"""Watch mode — regenerate on endpoint file changes.

Bridges watchfiles events to cache invalidation and a single-flight
debounced regeneration.
"""

from routeschema.watch.debounce import DebounceScheduler, SchedulerState
from routeschema.watch.session import WatchSession, watch
from routeschema.watch.watcher import ChangeEvent, EndpointFilter, RouteWatcher

__all__ = [
    "ChangeEvent",
    "DebounceScheduler",
    "EndpointFilter",
    "RouteWatcher",
    "SchedulerState",
    "WatchSession",
    "watch",
]
