"""File watcher — reports changes to endpoint files under the app directory.

Only files whose name is a recognised endpoint file name (``page.tsx``,
``route.ts``) are reported; every other change is filtered out before it
reaches the event loop.
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from watchfiles import Change, watch

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """An endpoint file change detected by the watcher.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.

    """

    path: Path
    kind: Literal["created", "modified", "deleted"]


# Mapping from watchfiles Change enum to our kind literals.
_CHANGE_KIND_MAP: dict[Change, Literal["created", "modified", "deleted"]] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


class EndpointFilter:
    """``watch_filter`` for watchfiles: accept endpoint file names only."""

    __slots__ = ("_names",)

    def __init__(self, endpoint_file_names: Iterable[str]) -> None:
        self._names = frozenset(endpoint_file_names)

    def __call__(self, change: Change, path: str) -> bool:
        return Path(path).name in self._names


class RouteWatcher:
    """Watches the app directory and bridges endpoint changes to asyncio.

    watchfiles runs in a background thread; events are handed to the event
    loop that called ``start()`` through ``call_soon_threadsafe``.

    Args:
        base_dir: Directory to watch recursively.
        endpoint_file_names: File names worth reporting.

    """

    def __init__(self, base_dir: Path, endpoint_file_names: Iterable[str]) -> None:
        self._base_dir = base_dir
        self._filter = EndpointFilter(endpoint_file_names)
        self._queue: asyncio.Queue[ChangeEvent] = asyncio.Queue()
        self._ready = asyncio.Event()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def is_running(self) -> bool:
        """Whether the watcher background thread is active."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start watching in a background thread.  Call from the event loop."""
        if self.is_running:
            return

        self._loop = asyncio.get_running_loop()
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._watch_loop,
            args=(self._loop,),
            name="routeschema-watcher",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the watcher to stop and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None

    async def ready(self) -> None:
        """Wait until the background thread has started watching."""
        await self._ready.wait()

    async def changes(self) -> AsyncIterator[ChangeEvent]:
        """Async iterator that yields ChangeEvent objects as they occur.

        Ends once the watcher is stopped and the queue is drained.

        """
        while self.is_running or not self._queue.empty():
            try:
                event = await asyncio.wait_for(self._queue.get(), timeout=0.5)
                yield event
            except TimeoutError:
                if not self.is_running:
                    break

    def dispatch(self, raw_changes: Iterable[tuple[Change, str]]) -> list[ChangeEvent]:
        """Convert raw watchfiles changes into ChangeEvents and enqueue them.

        Safe to call from the watcher thread.  Returns the events, sorted by
        path so one batch is handled in a stable order.
        """
        events = sorted(
            (
                ChangeEvent(path=Path(path_str), kind=_CHANGE_KIND_MAP.get(change, "modified"))
                for change, path_str in raw_changes
                if self._filter(change, path_str)
            ),
            key=lambda e: (str(e.path), e.kind),
        )
        for event in events:
            self._enqueue(event)
        return events

    def _enqueue(self, event: ChangeEvent) -> None:
        if self._loop is None or self._loop.is_closed():
            self._queue.put_nowait(event)
        else:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, event)

    def _watch_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Background thread: run watchfiles and push events to the queue."""
        loop.call_soon_threadsafe(self._ready.set)

        for raw_changes in watch(
            self._base_dir,
            watch_filter=self._filter,
            stop_event=self._stop_event,
            debounce=50,
            step=50,
        ):
            self.dispatch(raw_changes)
