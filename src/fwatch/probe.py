"""Reduce a path's live filesystem facts to a WatchState."""

from __future__ import annotations

import os

from fwatch.logging import TRACE, get_logger
from fwatch.state import ABSENT, Present, WatchState
from fwatch.target import StrPath

log = get_logger("probe")


def probe(path: StrPath, follow_symlinks: bool = True) -> WatchState:
    """Read the current state of a path.

    Never raises: a path that cannot be seen is ABSENT, and a path that
    exists but whose metadata cannot be read is ``Present(None)``.

    Args:
        path: The path to inspect, used verbatim.
        follow_symlinks: Whether a symbolic link is judged by its target
            (the default) or by the link itself.

    Returns:
        The canonical state of the path at the moment of the call.
    """
    exists = os.path.exists if follow_symlinks else os.path.lexists
    if not exists(path):
        return ABSENT

    try:
        stat = os.stat(path, follow_symlinks=follow_symlinks)
    except (OSError, ValueError) as e:
        log.log(TRACE, "Metadata unavailable for %r: %s", path, e)
        return Present(None)

    return Present(stat.st_mtime_ns)
