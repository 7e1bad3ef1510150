"""Configuration file loading and caching.

Handles:
- YAML file parsing
- Environment variable overrides
- Config caching with reload support
- Conversion from dict to typed Config dataclass
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from fwatch.config.merge import merge_configs
from fwatch.config.paths import get_config_paths
from fwatch.config.schema import Config, LoggingConfig, WatchConfig

_log = logging.getLogger("fwatch.config")

_cached_config: Config | None = None

_reload_callbacks: list[Callable[[Config], None]] = []


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found or invalid.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML as dict, or empty dict on error.
    """
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        _log.warning("Invalid YAML in %s: %s", path, e)
        return {}
    except PermissionError:
        _log.debug("Permission denied reading %s", path)
        return {}
    except OSError as e:
        _log.warning("Error reading %s: %s", path, e)
        return {}

    if not isinstance(data, dict):
        if data is not None:
            _log.warning("Ignoring %s: top level is not a mapping", path)
        return {}
    return data


def env_overrides() -> dict[str, Any]:
    """Build config dict from environment variables.

    FWATCH_LOG sets the log file, FWATCH_POLL_INTERVAL the poll interval.

    Returns:
        Config dict with values from environment.
    """
    overrides: dict[str, Any] = {}

    log_path = os.environ.get("FWATCH_LOG")
    if log_path:
        overrides.setdefault("logging", {})["file"] = log_path

    interval = os.environ.get("FWATCH_POLL_INTERVAL")
    if interval:
        try:
            overrides.setdefault("watch", {})["poll_interval"] = float(interval)
        except ValueError:
            _log.warning("Ignoring FWATCH_POLL_INTERVAL=%r: not a number", interval)

    return overrides


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        _log.warning("Ignoring config section %r: expected a mapping", name)
        return {}
    return section


def _watch_config(data: dict[str, Any]) -> WatchConfig:
    defaults = WatchConfig()

    paths_data = data.get("paths", [])
    if isinstance(paths_data, list):
        paths = [str(p) for p in paths_data if isinstance(p, (str, int, float))]
    else:
        _log.warning("Ignoring watch.paths: expected a list")
        paths = []

    interval = data.get("poll_interval", defaults.poll_interval)
    if isinstance(interval, bool) or not isinstance(interval, (int, float)):
        _log.warning("Ignoring watch.poll_interval=%r: not a number", interval)
        interval = defaults.poll_interval

    return WatchConfig(
        paths=paths,
        poll_interval=float(interval),
        follow_symlinks=_flag(data, "follow_symlinks", defaults.follow_symlinks),
        report_unchanged=_flag(data, "report_unchanged", defaults.report_unchanged),
    )


def _flag(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        _log.warning("Ignoring watch.%s=%r: expected true or false", key, value)
        return default
    return value


def _text(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        _log.warning("Ignoring logging.%s=%r: expected a string", key, value)
        return None
    return value


def dict_to_config(data: dict[str, Any]) -> Config:
    """Convert merged dict to typed Config dataclass.

    Args:
        data: Merged configuration dictionary.

    Returns:
        Typed Config object.
    """
    watch = _watch_config(_section(data, "watch"))

    log_data = _section(data, "logging")
    verbose = log_data.get("verbose")
    if verbose is not None and (isinstance(verbose, bool) or not isinstance(verbose, int)):
        _log.warning("Ignoring logging.verbose=%r: not an integer", verbose)
        verbose = None
    logging_config = LoggingConfig(
        level=_text(log_data, "level"),
        verbose=verbose,
        file=_text(log_data, "file"),
    )

    known_keys = {"watch", "logging"}
    extra = {k: v for k, v in data.items() if k not in known_keys}

    return Config(watch=watch, logging=logging_config, extra=extra)


def load_config(project_root: str | None = None, reload: bool = False) -> Config:
    """Load and merge config from all sources.

    Priority order (highest to lowest):
    1. Environment variables
    2. Project config ($project_root/.fwatch/config.yaml)
    3. User config (~/.config/fwatch/config.yaml or %APPDATA%)
    4. System config (/etc/fwatch/ or %PROGRAMDATA%)

    Args:
        project_root: Project directory for project-level config.
        reload: Force reload even if cached.

    Returns:
        Merged Config object.
    """
    global _cached_config

    if _cached_config is not None and not reload and project_root is None:
        return _cached_config

    configs: list[dict[str, Any]] = []

    for path in get_config_paths(project_root):
        config_data = load_yaml_file(path)
        if config_data:
            _log.debug("Loaded config from %s", path)
            configs.append(config_data)

    env_config = env_overrides()
    if env_config:
        configs.append(env_config)

    config = dict_to_config(merge_configs(*configs))

    # Only the global config is cached
    if project_root is None:
        _cached_config = config

    return config


def get_config() -> Config:
    """Get the cached global config, loading it on first use."""
    if _cached_config is None:
        return load_config()
    return _cached_config


def reset_config() -> None:
    """Reset cached config.

    Useful for testing or forcing a reload.
    """
    global _cached_config
    _cached_config = None


def reload_config(project_root: str | None = None) -> Config:
    """Reload config from files and notify callbacks.

    Args:
        project_root: Optional project directory.

    Returns:
        The newly loaded Config.
    """
    config = load_config(project_root=project_root, reload=True)

    for callback in list(_reload_callbacks):
        try:
            callback(config)
        except Exception as e:
            _log.warning("Config reload callback error: %s", e)

    return config


def on_config_reload(callback: Callable[[Config], None]) -> Callable[[], None]:
    """Register a callback to be called when config is reloaded.

    Args:
        callback: Function to call with the new Config.

    Returns:
        A function to unregister the callback.
    """
    _reload_callbacks.append(callback)

    def unregister() -> None:
        if callback in _reload_callbacks:
            _reload_callbacks.remove(callback)

    return unregister
