"""Polling watcher registry.

The Watcher keeps an ordered list of targets together with the state each
one had when it was last looked at. It does no background work: every
check happens inside watch(), on the caller's thread, and the caller
decides how often to call it.

Example:
    watcher = Watcher()
    watcher.add_target(BasicTarget("settings.yaml"))

    for index, transition in enumerate(watcher.watch()):
        if transition is Transition.MODIFIED:
            reload(watcher.get_path(index))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from fwatch.logging import get_logger
from fwatch.probe import probe
from fwatch.state import Transition, WatchState, classify
from fwatch.target import StrPath, Watchable, path_of

log = get_logger("watcher")

W = TypeVar("W", bound=Watchable)


@dataclass
class _Slot(Generic[W]):
    """A registered target and its last observed state."""

    target: W
    state: WatchState


class Watcher(Generic[W]):
    """Tracks a list of targets and reports how each changed between polls.

    Targets keep their insertion order. Every public method is total:
    out-of-range indices give None or False, and filesystem failures are
    folded into the stored states.

    Not thread-safe; share an instance across threads only under a lock.
    """

    def __init__(self, follow_symlinks: bool = True) -> None:
        """Create an empty watcher.

        Args:
            follow_symlinks: Whether symbolic links are judged by their
                targets. Fixed for the lifetime of the watcher so that
                successive probes stay comparable.
        """
        self._follow_symlinks = follow_symlinks
        self._slots: list[_Slot[W]] = []

    @property
    def follow_symlinks(self) -> bool:
        return self._follow_symlinks

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"<Watcher targets={len(self._slots)}>"

    def _probe(self, target: W) -> WatchState:
        return probe(path_of(target), follow_symlinks=self._follow_symlinks)

    def _valid(self, index: int) -> bool:
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        return 0 <= index < len(self._slots)

    def add_target(self, target: W) -> None:
        """Register a target at the end of the list.

        The target's path is probed immediately and that state becomes the
        baseline for the next watch().
        """
        state = self._probe(target)
        self._slots.append(_Slot(target, state))
        log.debug("Added %r at index %d (%s)", path_of(target), len(self._slots) - 1, state)

    def remove_target(self, index: int) -> bool:
        """Remove the target at ``index``.

        Targets after it shift down by one.

        Returns:
            True if a target was removed, False if the index was out of range.
        """
        if not self._valid(index):
            log.debug("Rejected removal of index %r (%d targets)", index, len(self._slots))
            return False

        slot = self._slots.pop(index)
        log.debug("Removed %r from index %d", path_of(slot.target), index)
        return True

    def get_state(self, index: int) -> WatchState | None:
        """Get the state stored for the target at ``index``.

        This doesn't probe the filesystem; it returns whatever the last
        add_target() or watch() recorded.
        """
        if not self._valid(index):
            return None
        return self._slots[index].state

    def get_path(self, index: int) -> StrPath | None:
        """Get the path of the target at ``index``, or None if out of range."""
        if not self._valid(index):
            return None
        return path_of(self._slots[index].target)

    def watch(self) -> list[Transition]:
        """Probe every target once and report what changed.

        Targets are probed in index order. Each target's stored state is
        replaced by the state just observed.

        Returns:
            One Transition per target, in target order.
        """
        result: list[Transition] = []

        for index, slot in enumerate(self._slots):
            current = self._probe(slot.target)
            transition = classify(slot.state, current)
            slot.state = current

            if transition is not Transition.NONE:
                log.debug("%s: %r (index %d)", transition.value, path_of(slot.target), index)
            result.append(transition)

        return result
