"""Tests for the callback-driven polling monitor."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

import pytest

from fwatch import ABSENT, BasicTarget, PollingMonitor, Present, Transition, Watcher, WatchEvent
from tests.utils import T0, T1, overwrite


class TestPollOnce:
    """Test single poll cycles."""

    def test_reports_only_changes(self, existing_file: Path, missing_file: Path) -> None:
        monitor = PollingMonitor()
        monitor.add_path(existing_file)
        monitor.add_path(missing_file)
        assert monitor.poll_once() == []

        overwrite(existing_file, "changed", T1)
        events = monitor.poll_once()

        assert len(events) == 1
        event = events[0]
        assert event.index == 0
        assert event.path == os.fspath(existing_file)
        assert event.transition is Transition.MODIFIED
        assert event.state == Present(T1)

    def test_report_unchanged(self, existing_file: Path, missing_file: Path) -> None:
        monitor = PollingMonitor(report_unchanged=True)
        monitor.add_path(existing_file)
        monitor.add_path(missing_file)

        events = monitor.poll_once()
        assert [e.transition for e in events] == [Transition.NONE, Transition.NONE]
        assert [e.index for e in events] == [0, 1]

    def test_add_path_returns_index(self, tmp_path: Path) -> None:
        monitor = PollingMonitor()
        assert monitor.add_path(tmp_path / "a") == 0
        assert monitor.add_path(tmp_path / "b") == 1

    def test_wraps_existing_watcher(self, missing_file: Path) -> None:
        watcher: Watcher[BasicTarget] = Watcher()
        watcher.add_target(BasicTarget(missing_file))
        monitor = PollingMonitor(watcher)
        assert monitor.watcher is watcher

        missing_file.write_text("x")
        assert [e.transition for e in monitor.poll_once()] == [Transition.CREATED]

    def test_poll_interval_minimum(self) -> None:
        monitor = PollingMonitor(poll_interval=0.0)
        assert monitor.poll_interval == 0.1
        monitor.poll_interval = 2.5
        assert monitor.poll_interval == 2.5
        monitor.poll_interval = -1
        assert monitor.poll_interval == 0.1


class TestWatchEvent:
    """Test event serialisation."""

    def test_to_dict(self) -> None:
        event = WatchEvent(2, "a.txt", Transition.CREATED, Present(T0), timestamp=10.0)
        assert event.to_dict() == {
            "index": 2,
            "path": "a.txt",
            "transition": "created",
            "exists": True,
            "mtime": T0 / 1_000_000_000,
            "timestamp": 10.0,
        }

    def test_to_dict_deleted_bytes_path(self) -> None:
        data = WatchEvent(0, b"gone.bin", Transition.DELETED, ABSENT).to_dict()
        assert data["path"] == "gone.bin"
        assert data["exists"] is False
        assert data["mtime"] is None


class TestRun:
    """Test the asyncio polling loop."""

    @pytest.mark.asyncio
    async def test_max_polls(self, missing_file: Path) -> None:
        monitor = PollingMonitor(poll_interval=0.1, report_unchanged=True)
        monitor.add_path(missing_file)
        events: list[WatchEvent] = []

        await monitor.run(events.append, max_polls=3)

        assert len(events) == 3
        assert not monitor.is_running()

    @pytest.mark.asyncio
    async def test_detects_creation_while_running(self, missing_file: Path) -> None:
        monitor = PollingMonitor(poll_interval=0.1)
        monitor.add_path(missing_file)
        events: list[WatchEvent] = []

        task = monitor.start(events.append)
        await asyncio.sleep(0.05)
        assert monitor.is_running()

        missing_file.write_text("x")
        for _ in range(20):
            if events:
                break
            await asyncio.sleep(0.05)

        monitor.stop()
        await task
        assert [e.transition for e in events] == [Transition.CREATED]
        assert not monitor.is_running()

    @pytest.mark.asyncio
    async def test_callback_errors_do_not_stop_polling(self, missing_file: Path) -> None:
        monitor = PollingMonitor(poll_interval=0.1, report_unchanged=True)
        monitor.add_path(missing_file)
        calls = []

        def broken(event: WatchEvent) -> None:
            calls.append(event)
            raise RuntimeError("boom")

        await monitor.run(broken, max_polls=2)
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_second_run_is_ignored(self, missing_file: Path) -> None:
        monitor = PollingMonitor(poll_interval=0.1, report_unchanged=True)
        monitor.add_path(missing_file)
        events: list[WatchEvent] = []

        task = monitor.start(events.append)
        await asyncio.sleep(0)
        await monitor.run(events.append, max_polls=1)

        monitor.stop()
        await task
        assert len(events) == 1
        assert monitor.is_running() is False

    @pytest.mark.asyncio
    async def test_context_manager_stops(self, missing_file: Path) -> None:
        async with PollingMonitor(poll_interval=0.1) as monitor:
            monitor.add_path(missing_file)
            task = monitor.start(lambda event: None)
            await asyncio.sleep(0)
            assert monitor.is_running()

        await task
        assert not monitor.is_running()
