"""Tests for routeschema.watch.watcher — endpoint change detection."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from watchfiles import Change

from routeschema.watch.watcher import ChangeEvent, EndpointFilter, RouteWatcher

from .conftest import PAGE

NAMES = ("page.tsx", "route.ts")


class TestChangeEvent:
    """Verify ChangeEvent is frozen and well-behaved."""

    def test_frozen(self) -> None:
        event = ChangeEvent(path=Path("/app/page.tsx"), kind="modified")
        with pytest.raises(AttributeError):
            event.kind = "created"  # type: ignore[misc]

    def test_equality_and_hash(self) -> None:
        a = ChangeEvent(path=Path("/app/route.ts"), kind="deleted")
        b = ChangeEvent(path=Path("/app/route.ts"), kind="deleted")
        assert a == b
        assert hash(a) == hash(b)


class TestEndpointFilter:

    @pytest.mark.parametrize("path", ["/app/page.tsx", "/app/api/[id]/route.ts"])
    def test_accepts_endpoint_files(self, path: str) -> None:
        assert EndpointFilter(NAMES)(Change.modified, path)

    @pytest.mark.parametrize(
        "path",
        ["/app/layout.tsx", "/app/page.ts", "/app/route.tsx", "/app/notpage.tsx", "/app/page.tsx.swp"],
    )
    def test_rejects_everything_else(self, path: str) -> None:
        assert not EndpointFilter(NAMES)(Change.added, path)


class TestDispatch:
    """RouteWatcher.dispatch() converts raw watchfiles batches."""

    def test_maps_change_kinds(self, tmp_path: Path) -> None:
        watcher = RouteWatcher(tmp_path, NAMES)
        events = watcher.dispatch({
            (Change.added, str(tmp_path / "a" / "page.tsx")),
            (Change.modified, str(tmp_path / "b" / "route.ts")),
            (Change.deleted, str(tmp_path / "c" / "page.tsx")),
        })
        assert events == [
            ChangeEvent(path=tmp_path / "a" / "page.tsx", kind="created"),
            ChangeEvent(path=tmp_path / "b" / "route.ts", kind="modified"),
            ChangeEvent(path=tmp_path / "c" / "page.tsx", kind="deleted"),
        ]

    def test_filters_non_endpoint_files(self, tmp_path: Path) -> None:
        watcher = RouteWatcher(tmp_path, NAMES)
        events = watcher.dispatch({
            (Change.modified, str(tmp_path / "layout.tsx")),
            (Change.modified, str(tmp_path / "page.tsx")),
        })
        assert [e.path.name for e in events] == ["page.tsx"]

    @pytest.mark.asyncio
    async def test_dispatched_events_reach_the_queue(self, tmp_path: Path) -> None:
        watcher = RouteWatcher(tmp_path, NAMES)
        watcher.dispatch({(Change.modified, str(tmp_path / "page.tsx"))})

        received = [event async for event in watcher.changes()]

        assert received == [ChangeEvent(path=tmp_path / "page.tsx", kind="modified")]

    def test_not_running_before_start(self, tmp_path: Path) -> None:
        assert not RouteWatcher(tmp_path, NAMES).is_running


class TestLiveWatching:
    """RouteWatcher against the real watchfiles backend."""

    @pytest.mark.asyncio
    async def test_reports_endpoint_file_written_under_base_dir(self, tmp_path: Path) -> None:
        (tmp_path / "about").mkdir()
        watcher = RouteWatcher(tmp_path, NAMES)
        watcher.start()
        changes = watcher.changes()
        try:
            await asyncio.wait_for(watcher.ready(), timeout=5.0)
            assert watcher.is_running
            # Give the notify backend a moment to register the watch.
            await asyncio.sleep(0.3)
            (tmp_path / "about" / "layout.tsx").write_text(PAGE)
            (tmp_path / "about" / "page.tsx").write_text(PAGE)

            event = await asyncio.wait_for(anext(changes), timeout=10.0)
        finally:
            watcher.stop()
            await changes.aclose()

        assert event.path.name == "page.tsx"
        assert event.path.parent.name == "about"
        assert event.kind in ("created", "modified")
        assert not watcher.is_running
