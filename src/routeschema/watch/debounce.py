"""Single-flight debounce scheduler.

Coalesces bursts of ``schedule()`` calls into one execution of an (async or
sync) callback, with at most one execution in flight and at most one
trailing execution queued behind it::

    IDLE ──schedule──▶ SCHEDULED ──timer──▶ RUNNING ──done──▶ IDLE
                        │   ▲                  │  ▲
                        └───┘ re-arm     schedule│  │ done: run pending now
                                                ▼  │
                                         RUNNING_WITH_PENDING

Only the arguments of the latest ``schedule()`` call survive, both for the
armed timer and for the pending trailing run.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from routeschema.console import Console


class SchedulerState(Enum):
    IDLE = "idle"
    SCHEDULED = "scheduled"
    RUNNING = "running"
    RUNNING_WITH_PENDING = "running_with_pending"


class DebounceScheduler:
    """Debounced, single-flight runner for *callback*.

    Must be used from within a running asyncio event loop.

    Args:
        callback: Invoked with the arguments of the winning ``schedule()``
            call.  May return an awaitable.
        delay: Quiet period in seconds before an armed timer fires.
        console: Where callback failures are reported.  A failing callback
            never breaks the state machine.

    """

    def __init__(
        self,
        callback: Callable[..., Awaitable[None] | None],
        delay: float,
        *,
        console: Console | None = None,
    ) -> None:
        self._callback = callback
        self._delay = delay
        self._console = console or Console()
        self._state = SchedulerState.IDLE
        self._timer: asyncio.TimerHandle | None = None
        self._pending: tuple[Any, ...] | None = None
        self._task: asyncio.Task[None] | None = None
        self._idle = asyncio.Event()
        self._idle.set()
        self.runs = 0

    @property
    def state(self) -> SchedulerState:
        return self._state

    def schedule(self, *args: Any) -> None:
        """Request an execution with *args*; never raises on overlap."""
        match self._state:
            case SchedulerState.IDLE | SchedulerState.SCHEDULED:
                self._cancel_timer()
                loop = asyncio.get_running_loop()
                self._timer = loop.call_later(self._delay, self._fire, args)
                self._state = SchedulerState.SCHEDULED
                self._idle.clear()
            case SchedulerState.RUNNING | SchedulerState.RUNNING_WITH_PENDING:
                self._pending = args
                self._state = SchedulerState.RUNNING_WITH_PENDING

    def cancel(self) -> None:
        """Disarm a not-yet-fired timer.  An in-flight run is left to finish."""
        if self._state is SchedulerState.SCHEDULED:
            self._cancel_timer()
            self._state = SchedulerState.IDLE
            self._idle.set()

    async def wait_idle(self) -> None:
        """Wait until no timer is armed and no run is in flight."""
        await self._idle.wait()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, args: tuple[Any, ...]) -> None:
        self._timer = None
        if self._state in (SchedulerState.RUNNING, SchedulerState.RUNNING_WITH_PENDING):
            self._pending = args
            self._state = SchedulerState.RUNNING_WITH_PENDING
            return
        self._state = SchedulerState.RUNNING
        self._task = asyncio.get_running_loop().create_task(self._run(args))

    async def _run(self, args: tuple[Any, ...]) -> None:
        while True:
            await self._invoke(args)
            if self._state is SchedulerState.RUNNING_WITH_PENDING and self._pending is not None:
                args, self._pending = self._pending, None
                self._state = SchedulerState.RUNNING
                continue
            break

        self._state = SchedulerState.IDLE
        self._task = None
        self._idle.set()

    async def _invoke(self, args: tuple[Any, ...]) -> None:
        self.runs += 1
        try:
            result = self._callback(*args)
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            self._console.error(f"Unexpected error during regeneration: {exc}")
