"""Command-line interface for fwatch."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape

from fwatch import __version__
from fwatch.config import load_config
from fwatch.config.schema import Config
from fwatch.logging import get_logger, setup_logging
from fwatch.monitor import PollingMonitor, WatchEvent
from fwatch.state import Transition
from fwatch.watcher import Watcher

log = get_logger("cli")

console = Console(highlight=False)

_STYLES = {
    Transition.CREATED: "green",
    Transition.MODIFIED: "yellow",
    Transition.DELETED: "red",
    Transition.NONE: "dim",
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="fwatch",
        description="Poll files and directories and report when they are "
        "created, modified or deleted",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (can be repeated)",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only print transitions",
    )
    parser.add_argument(
        "-i", "--interval",
        type=float,
        help="Seconds between polls (default: from config, else 1.0)",
    )
    parser.add_argument(
        "-n", "--count",
        type=int,
        help="Stop after this many polls",
    )
    parser.add_argument(
        "-a", "--all",
        action="store_true",
        help="Also print targets that did not change",
    )
    parser.add_argument(
        "--no-follow",
        action="store_true",
        help="Judge symbolic links by the link itself, not its target",
    )
    parser.add_argument(
        "--project",
        help="Project directory for .fwatch/config.yaml (default: cwd)",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Paths to watch (default: watch.paths from config)",
    )
    return parser


def build_monitor(parsed: argparse.Namespace, config: Config) -> PollingMonitor:
    """Create a monitor from parsed arguments, falling back to config values."""
    follow = config.watch.follow_symlinks and not parsed.no_follow
    interval = parsed.interval if parsed.interval is not None else config.watch.poll_interval

    monitor = PollingMonitor(
        Watcher(follow_symlinks=follow),
        poll_interval=interval,
        report_unchanged=parsed.all or config.watch.report_unchanged,
    )
    for path in parsed.paths or config.watch.paths:
        monitor.add_path(path)
    return monitor


def print_event(event: WatchEvent) -> None:
    """Print one event as a single line."""
    style = _STYLES[event.transition]
    path = os.fsdecode(event.path)
    console.print(
        f"[{style}]{event.transition.value:<8}[/{style}] {escape(path)}",
        soft_wrap=True,
    )


def run_cli(args: Sequence[str]) -> int:
    """Run the CLI with the given arguments."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    config = load_config(project_root=parsed.project or os.getcwd())
    if parsed.verbose:
        config.logging.verbose = min(2 + parsed.verbose, 4)
    setup_logging(config.logging)

    monitor = build_monitor(parsed, config)
    if len(monitor.watcher) == 0:
        console.print("[red]No paths to watch[/red] (pass paths or set watch.paths)")
        return 1

    if not parsed.quiet:
        console.print(
            f"[dim]Watching {len(monitor.watcher)} path(s) "
            f"every {monitor.poll_interval:.1f}s; Ctrl-C to stop[/dim]"
        )

    try:
        asyncio.run(monitor.run(print_event, max_polls=parsed.count))
    except KeyboardInterrupt:
        log.debug("Interrupted")
    return 0


def main() -> None:
    """Console script entry point."""
    sys.exit(run_cli(sys.argv[1:]))
