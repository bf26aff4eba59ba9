"""Observability — structured events for scans and watch sessions.

A watch session owns one ``EventLog``; ``generate()`` appends a
``ScanCompleted`` per regeneration and the session appends the change,
invalidation and failure events.  The session prints
``EventLog.summary().describe()`` when it stops.

"""

from routeschema.observability.events import (
    CacheInvalidated,
    FileChanged,
    GenerationFailed,
    RouteSchemaEvent,
    ScanCompleted,
    now_ns,
)
from routeschema.observability.log import EventLog, SessionSummary

__all__ = [
    "CacheInvalidated",
    "EventLog",
    "FileChanged",
    "GenerationFailed",
    "RouteSchemaEvent",
    "ScanCompleted",
    "SessionSummary",
    "now_ns",
]
