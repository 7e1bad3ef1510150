"""Shared test helpers for fwatch tests."""

from __future__ import annotations

import os
from pathlib import Path

# Arbitrary fixed instants, far enough apart for any filesystem granularity
T0 = 1_600_000_000_000_000_000
T1 = T0 + 5_000_000_000
T2 = T1 + 5_000_000_000


def set_mtime(path: Path, mtime_ns: int) -> None:
    """Pin a path's access and modification times to an exact value."""
    os.utime(path, ns=(mtime_ns, mtime_ns))


def overwrite(path: Path, content: str, mtime_ns: int) -> None:
    """Rewrite a file and give it a known modification time."""
    path.write_text(content)
    set_mtime(path, mtime_ns)
