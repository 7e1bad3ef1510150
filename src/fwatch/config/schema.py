"""Configuration schema dataclasses for fwatch.

Defines the structure of configuration at all levels (system, user, project).
All fields have defaults so partial configs merge together.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class WatchConfig:
    """Polling configuration for the monitor and the command line.

    Example config.yaml:
        watch:
          paths:
            - build/output.log
            - settings.yaml
          poll_interval: 0.5
          follow_symlinks: true
          report_unchanged: false
    """

    paths: list[str] = field(default_factory=list)  # Paths to watch, verbatim
    poll_interval: float = 1.0  # Seconds between polls
    follow_symlinks: bool = True  # Judge symlinks by their targets
    report_unchanged: bool = False  # Also report NONE transitions


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str | None = None  # DEBUG, INFO, WARNING, ERROR
    verbose: int | None = None  # 0-4, takes precedence over level
    file: str | None = None  # Log file path


@dataclass
class Config:
    """Root configuration object."""

    watch: WatchConfig = field(default_factory=WatchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Unknown top-level sections, kept for callers that extend the file
    extra: dict[str, Any] = field(default_factory=dict)
