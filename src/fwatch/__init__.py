"""fwatch: polling file change detection.

Register paths with a Watcher, call watch() whenever you like, and get back
one Transition per path: CREATED, MODIFIED, DELETED or NONE.
"""

__version__ = "0.1.0"

from fwatch.target import BasicTarget, Watchable, path_of
from fwatch.state import ABSENT, Absent, Present, Transition, WatchState, classify
from fwatch.probe import probe
from fwatch.watcher import Watcher
from fwatch.monitor import PollingMonitor, WatchEvent
from fwatch.config import Config, get_config, load_config

__all__ = [
    # Targets
    "BasicTarget",
    "Watchable",
    "path_of",
    # States
    "ABSENT",
    "Absent",
    "Present",
    "Transition",
    "WatchState",
    "classify",
    "probe",
    # Watching
    "Watcher",
    "PollingMonitor",
    "WatchEvent",
    # Config
    "Config",
    "load_config",
    "get_config",
]
