"""Config file watcher for automatic reload on changes.

Polls every file in the config cascade with a Watcher and reloads the
configuration when any of them is created, modified or deleted.
"""

from __future__ import annotations

import asyncio
import logging

from fwatch.config.loader import reload_config
from fwatch.config.paths import get_config_paths
from fwatch.state import Transition
from fwatch.target import BasicTarget, StrPath
from fwatch.watcher import Watcher

_log = logging.getLogger("fwatch.config.watcher")

DEFAULT_POLL_INTERVAL = 2.0


class ConfigWatcher:
    """Watches config files for changes and triggers reload."""

    def __init__(
        self,
        project_root: str | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        """Initialize the config watcher.

        Args:
            project_root: Optional project directory to watch.
            poll_interval: How often to check for changes (seconds).
        """
        self._project_root = project_root
        self._poll_interval = poll_interval
        self._running = False
        self._task: asyncio.Task[None] | None = None
        self._watcher = self._build_watcher()

    def _build_watcher(self) -> Watcher[BasicTarget]:
        watcher: Watcher[BasicTarget] = Watcher()
        for path in get_config_paths(self._project_root):
            watcher.add_target(BasicTarget(path))
        return watcher

    def _detect_changes(self) -> list[StrPath]:
        """Poll the config files once.

        Returns:
            Paths that were created, modified, or deleted since the last poll.
        """
        changed: list[StrPath] = []
        for index, transition in enumerate(self._watcher.watch()):
            if transition is not Transition.NONE:
                path = self._watcher.get_path(index)
                if path is not None:
                    changed.append(path)
        return changed

    async def _poll_loop(self) -> None:
        """Main polling loop."""
        while self._running:
            await asyncio.sleep(self._poll_interval)

            if not self._running:
                break

            changed = self._detect_changes()
            if changed:
                _log.info("Config changed: %s", [str(p) for p in changed])
                try:
                    reload_config(project_root=self._project_root)
                except Exception as e:
                    _log.error("Error reloading config: %s", e)

    def start(self) -> None:
        """Start watching for config changes.

        Must be called from within a running event loop.
        """
        if self._running:
            return

        self._running = True
        self._task = asyncio.create_task(self._poll_loop())
        _log.debug("Config watcher started (interval=%.1fs)", self._poll_interval)

    def stop(self) -> None:
        """Stop watching for config changes."""
        self._running = False
        if self._task:
            self._task.cancel()
            self._task = None
        _log.debug("Config watcher stopped")

    async def __aenter__(self) -> ConfigWatcher:
        self.start()
        return self

    async def __aexit__(self, *args: object) -> None:
        self.stop()


_global_watcher: ConfigWatcher | None = None


def start_watching(
    project_root: str | None = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> ConfigWatcher:
    """Start the global config watcher, replacing any running one.

    Args:
        project_root: Optional project directory.
        poll_interval: How often to check for changes.

    Returns:
        The ConfigWatcher instance.
    """
    global _global_watcher

    if _global_watcher is not None:
        _global_watcher.stop()

    _global_watcher = ConfigWatcher(project_root=project_root, poll_interval=poll_interval)
    _global_watcher.start()
    return _global_watcher


def stop_watching() -> None:
    """Stop the global config watcher."""
    global _global_watcher

    if _global_watcher is not None:
        _global_watcher.stop()
        _global_watcher = None
