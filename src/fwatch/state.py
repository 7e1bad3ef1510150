"""Watch states and the transitions between them.

A path is either absent or present; a present path may or may not have a
readable modification time. Two successive states reduce to exactly one
Transition via classify().
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Transition(Enum):
    """State transitions a watched path may undergo between two polls."""

    CREATED = "created"
    MODIFIED = "modified"
    DELETED = "deleted"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class Absent:
    """The path does not exist (or cannot be told apart from not existing)."""

    @property
    def exists(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Present:
    """The path exists.

    Attributes:
        mtime_ns: Modification time in nanoseconds since the epoch, or None
            when the path exists but its metadata could not be read.
    """

    mtime_ns: int | None = None

    @property
    def exists(self) -> bool:
        return True

    @property
    def mtime(self) -> float | None:
        """Modification time in seconds, or None if unknown."""
        if self.mtime_ns is None:
            return None
        return self.mtime_ns / 1_000_000_000


WatchState = Union[Absent, Present]

ABSENT = Absent()


def classify(previous: WatchState, current: WatchState) -> Transition:
    """Reduce two successive states of one path to a transition.

    An unknown timestamp on either side never yields MODIFIED: failing to
    read metadata is not evidence that the file changed.
    """
    if isinstance(previous, Absent):
        return Transition.CREATED if isinstance(current, Present) else Transition.NONE
    if isinstance(current, Absent):
        return Transition.DELETED

    if previous.mtime_ns is None or current.mtime_ns is None:
        return Transition.NONE
    if previous.mtime_ns != current.mtime_ns:
        return Transition.MODIFIED
    return Transition.NONE
