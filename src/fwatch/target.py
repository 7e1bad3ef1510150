"""Watch targets.

A target is anything that can name a filesystem path. The registry only
ever reads ``target.path``; everything else on a target belongs to the
client.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Protocol, Union, runtime_checkable

StrPath = Union[str, bytes, os.PathLike]


@runtime_checkable
class Watchable(Protocol):
    """Protocol for objects that can be watched.

    ``path`` must return the same value for the lifetime of the object;
    the watcher relies on it to keep stored states meaningful across polls.

    Example:
        @dataclass(frozen=True)
        class ConfigFile:
            path: str
            owner: str  # visible only to the client
    """

    @property
    def path(self) -> StrPath:
        """The path to watch."""
        ...


@dataclass(frozen=True)
class BasicTarget:
    """A target that holds nothing but a path.

    The path is kept verbatim (via ``os.fspath``), so ``"logs/"`` and
    ``"logs"`` are different targets.
    """

    path: str | bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", os.fspath(self.path))


def path_of(target: Watchable) -> StrPath:
    """Return the path a target refers to."""
    return target.path
