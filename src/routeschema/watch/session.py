"""Watch session — keep the generated artifact in sync with the app directory.

Flow per endpoint file change::

    RouteWatcher event
      -> ScanCache.invalidate(path)        (synchronous, before re-arming)
      -> DebounceScheduler.schedule()
      -> regenerate()                      (one run per burst, plus one trailing)

The first regeneration is scheduled once the watcher reports ready.  When the
session stops it prints a summary of its ``EventLog``.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING

from routeschema._errors import RouteSchemaError
from routeschema.console import Console
from routeschema.generator import create_scanner, generate
from routeschema.observability.events import (
    CacheInvalidated,
    FileChanged,
    GenerationFailed,
    now_ns,
)
from routeschema.observability.log import EventLog
from routeschema.routes.cache import ScanCache
from routeschema.watch.debounce import DebounceScheduler
from routeschema.watch.watcher import ChangeEvent, RouteWatcher

if TYPE_CHECKING:
    from routeschema._types import RegenerateFunc
    from routeschema.config import ScanConfig


class WatchSession:
    """Drives invalidation and debounced regeneration from watcher events.

    Args:
        config: Resolved configuration (base_dir, debounce delay, file names).
        regenerate: Zero-argument regeneration hook.  ``RouteSchemaError``
            raised by it is reported and the session keeps watching.
        cache: The cache the regeneration scans through.
        console: Progress reporter.
        log: History of the session.  A fresh ``EventLog`` is created when
            omitted; pass the one ``regenerate`` records scans into so the
            closing summary counts them.
        watcher: Injected watcher; a ``RouteWatcher`` over ``config.base_dir``
            is created by default.

    """

    def __init__(
        self,
        config: ScanConfig,
        regenerate: RegenerateFunc,
        *,
        cache: ScanCache,
        console: Console | None = None,
        log: EventLog | None = None,
        watcher: RouteWatcher | None = None,
    ) -> None:
        self._config = config
        self._regenerate = regenerate
        self._cache = cache
        self._console = console or Console()
        self.log = log if log is not None else EventLog()
        self._watcher = watcher or RouteWatcher(config.base_dir, config.endpoint_file_names)
        self.scheduler = DebounceScheduler(
            self._regenerate_safely,
            config.debounce_seconds,
            console=self._console,
        )

    def handle_ready(self) -> None:
        """Initial sync: schedule the first generation."""
        self._console.info(f"Watching {self._config.base_dir}...")
        self.scheduler.schedule()

    def handle_change(self, event: ChangeEvent) -> int:
        """Invalidate the changed path's ancestry, then (re)arm the scheduler.

        Returns:
            The number of cache entries evicted.

        """
        self._console.info(str(event.path), event=event.kind)
        removed = self._cache.invalidate(event.path)
        self.log.append(FileChanged(path=str(event.path), kind=event.kind, timestamp_ns=now_ns()))
        self.log.append(CacheInvalidated(path=str(event.path), removed=removed, timestamp_ns=now_ns()))
        self.scheduler.schedule()
        return removed

    async def run(self) -> None:
        """Watch until ``stop()`` is called or the task is cancelled."""
        self._watcher.start()
        try:
            await self._watcher.ready()
            self.handle_ready()
            async for event in self._watcher.changes():
                self.handle_change(event)
        finally:
            self.scheduler.cancel()
            self._watcher.stop()
            self._console.info(f"Stopped watching: {self.log.summary().describe()}")

    def stop(self) -> None:
        self._watcher.stop()

    async def _regenerate_safely(self) -> None:
        try:
            result = self._regenerate()
            if inspect.isawaitable(result):
                await result
        except RouteSchemaError as exc:
            self._console.error(f"Failed to generate: {exc}")
            self.log.append(GenerationFailed(
                path=str(self._config.base_dir),
                error=str(exc),
                timestamp_ns=now_ns(),
            ))


async def watch(
    config: ScanConfig,
    *,
    console: Console | None = None,
    log: EventLog | None = None,
) -> None:
    """Generate on start-up and after every burst of endpoint file changes."""
    console = console or Console()
    log = log if log is not None else EventLog()
    cache = ScanCache()
    scanner = create_scanner(config, cache)

    def regenerate() -> None:
        generate(config, scanner=scanner, console=console, log=log)

    session = WatchSession(config, regenerate, cache=cache, console=console, log=log)
    await session.run()
