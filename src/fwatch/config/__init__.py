"""Configuration management for fwatch.

Provides hierarchical YAML-based configuration with:
- System-level config (/etc/fwatch/ or %PROGRAMDATA%)
- User-level config (~/.config/fwatch/, ~/.fwatch/ or %APPDATA%)
- Project-level config ($project_root/.fwatch/)
- Environment variable overrides (highest priority)

Example usage:
    from fwatch.config import load_config

    config = load_config(project_root="/path/to/project")
    print(config.watch.paths, config.watch.poll_interval)
"""

from fwatch.config.loader import (
    get_config,
    load_config,
    on_config_reload,
    reload_config,
    reset_config,
)
from fwatch.config.paths import (
    get_config_paths,
    get_project_config_path,
    get_system_config_path,
    get_user_config_path,
)
from fwatch.config.schema import Config, LoggingConfig, WatchConfig
from fwatch.config.watcher import ConfigWatcher, start_watching, stop_watching

__all__ = [
    "Config",
    "load_config",
    "get_config",
    "reload_config",
    "reset_config",
    "on_config_reload",
    "LoggingConfig",
    "WatchConfig",
    "get_config_paths",
    "get_system_config_path",
    "get_user_config_path",
    "get_project_config_path",
    "ConfigWatcher",
    "start_watching",
    "stop_watching",
]
