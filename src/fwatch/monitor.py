"""Callback-driven polling on top of a Watcher.

The Watcher itself never schedules anything. PollingMonitor adds an
asyncio loop that calls watch() at a fixed interval and hands the
interesting transitions to a callback.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from fwatch.logging import get_logger
from fwatch.state import Present, Transition, WatchState
from fwatch.target import BasicTarget, StrPath
from fwatch.watcher import Watcher

log = get_logger("monitor")

MIN_POLL_INTERVAL = 0.1


@dataclass
class WatchEvent:
    """A transition observed for one target during one poll."""

    index: int
    path: StrPath
    transition: Transition
    state: WatchState
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for event payloads."""
        path = self.path.decode(errors="replace") if isinstance(self.path, bytes) else str(self.path)
        return {
            "index": self.index,
            "path": path,
            "transition": self.transition.value,
            "exists": self.state.exists,
            "mtime": self.state.mtime if isinstance(self.state, Present) else None,
            "timestamp": self.timestamp,
        }


class PollingMonitor:
    """Polls a Watcher on an interval and reports changes via callback.

    Example:
        monitor = PollingMonitor(poll_interval=0.5)
        monitor.add_path("build/output.log")

        def on_change(event: WatchEvent) -> None:
            print(f"{event.transition.value}: {event.path}")

        await monitor.run(on_change)
    """

    def __init__(
        self,
        watcher: Watcher[Any] | None = None,
        poll_interval: float = 1.0,
        report_unchanged: bool = False,
    ) -> None:
        """Initialize the monitor.

        Args:
            watcher: Watcher to poll. A new empty one is created if omitted.
            poll_interval: Seconds between polls (minimum 0.1).
            report_unchanged: Also emit events for NONE transitions.
        """
        self._watcher: Watcher[Any] = watcher if watcher is not None else Watcher()
        self._poll_interval = max(MIN_POLL_INTERVAL, poll_interval)
        self._report_unchanged = report_unchanged

        self._running = False
        self._task: asyncio.Task[None] | None = None

    @property
    def watcher(self) -> Watcher[Any]:
        return self._watcher

    @property
    def poll_interval(self) -> float:
        """Get the polling interval in seconds."""
        return self._poll_interval

    @poll_interval.setter
    def poll_interval(self, value: float) -> None:
        self._poll_interval = max(MIN_POLL_INTERVAL, value)

    def add_path(self, path: StrPath) -> int:
        """Watch a plain path.

        Returns:
            The index the new target was given.
        """
        self._watcher.add_target(BasicTarget(path))
        return len(self._watcher) - 1

    def poll_once(self) -> list[WatchEvent]:
        """Run one watch() cycle and collect the events worth reporting."""
        events: list[WatchEvent] = []

        for index, transition in enumerate(self._watcher.watch()):
            if transition is Transition.NONE and not self._report_unchanged:
                continue
            path = self._watcher.get_path(index)
            state = self._watcher.get_state(index)
            if path is None or state is None:
                continue
            events.append(WatchEvent(index, path, transition, state))

        return events

    async def run(
        self,
        callback: Callable[[WatchEvent], None],
        max_polls: int | None = None,
    ) -> None:
        """Poll until stopped.

        Args:
            callback: Called once per reported event. Exceptions it raises
                are logged and polling continues.
            max_polls: Stop on its own after this many polls.
        """
        if self._running:
            log.warning("PollingMonitor already running")
            return

        self._running = True
        log.info(
            "Monitor started (%d targets, interval: %.1fs)",
            len(self._watcher),
            self._poll_interval,
        )

        polls = 0
        try:
            while self._running:
                for event in self.poll_once():
                    try:
                        callback(event)
                    except Exception as e:
                        log.error("Error in watch callback: %s", e)

                polls += 1
                if max_polls is not None and polls >= max_polls:
                    break

                await asyncio.sleep(self._poll_interval)

        except asyncio.CancelledError:
            log.info("Monitor cancelled")
        finally:
            self._running = False

    def start(
        self,
        callback: Callable[[WatchEvent], None],
        max_polls: int | None = None,
    ) -> asyncio.Task[None]:
        """Run the polling loop as a task on the current event loop."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run(callback, max_polls=max_polls))
        return self._task

    def stop(self) -> None:
        """Stop the polling loop."""
        self._running = False
        if self._task and not self._task.done():
            self._task.cancel()
        log.info("Monitor stopped")

    def is_running(self) -> bool:
        """Check if the monitor is currently polling."""
        return self._running

    async def __aenter__(self) -> PollingMonitor:
        return self

    async def __aexit__(self, *args: object) -> None:
        self.stop()
