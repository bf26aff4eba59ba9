"""Structured events emitted by scans, invalidations and watch sessions.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True)
class ScanCompleted:
    """A top-level scan of the app directory finished.

    Attributes:
        path: The scanned base directory.
        endpoints: Number of reachable endpoints in the resulting schema.
        imports: Number of import references collected.
        duration_ms: Wall time of the scan in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    endpoints: int
    imports: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class CacheInvalidated:
    """Cache entries were evicted because a path changed.

    Attributes:
        path: The changed path that drove the eviction.
        removed: Total number of entries removed across both caches.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    removed: int
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class FileChanged:
    """The watcher reported a change to an endpoint file.

    Attributes:
        path: Absolute path of the endpoint file.
        kind: Type of filesystem change.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    kind: Literal["created", "modified", "deleted"]
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class GenerationFailed:
    """A regeneration raised instead of writing the artifact.

    Attributes:
        path: The base directory being generated.
        error: The error message.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    error: str
    timestamp_ns: int


type RouteSchemaEvent = ScanCompleted | CacheInvalidated | FileChanged | GenerationFailed


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
