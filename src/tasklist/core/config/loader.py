"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import os
from pathlib import Path
from typing import Any

from .models import LOG_LEVELS, TasklistConfig

# Global cache to avoid reloading config multiple times per process
_config_cache: TasklistConfig | None = None


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """
    Get path to user configuration file.

    Returns:
        Path to ~/.config/tasklist/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / "tasklist" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Working directory to search from (defaults to current directory)

    Returns:
        Path to .tasklist.json in that directory
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".tasklist.json"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`.
    Nested dicts are merged, not replaced.

    Example:
        >>> deep_merge({"server": {"host": "a", "port": 1}}, {"server": {"port": 2}})
        {'server': {'host': 'a', 'port': 2}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            return None
    except (json.JSONDecodeError, OSError) as e:
        # Config system should be resilient to a broken file
        print(f"Warning: Failed to parse config at {path}: {e}")
        return None


def _set(config: dict[str, Any], section: str, key: str, value: Any) -> None:
    config.setdefault(section, {})
    config[section][key] = value


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Env vars have the highest precedence and override all config files.

    Supported env vars:
        TASKLIST_HOST - overrides server.host
        TASKLIST_PORT - overrides server.port
        TASKLIST_LOG_LEVEL - overrides logging.level
        TASKLIST_BACKEND - overrides storage.backend

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = {k: dict(v) if isinstance(v, dict) else v for k, v in config_dict.items()}

    if host := os.environ.get("TASKLIST_HOST"):
        _set(result, "server", "host", host)

    if port_str := os.environ.get("TASKLIST_PORT"):
        try:
            port = int(port_str)
            if not 1 <= port <= 65535:
                print(f"Warning: TASKLIST_PORT must be 1-65535, got {port}, ignoring")
            else:
                _set(result, "server", "port", port)
        except ValueError:
            print(f"Warning: Invalid TASKLIST_PORT value '{port_str}', ignoring")

    if level := os.environ.get("TASKLIST_LOG_LEVEL"):
        if level.upper() in LOG_LEVELS:
            _set(result, "logging", "level", level.upper())
        else:
            print(f"Warning: Invalid TASKLIST_LOG_LEVEL value '{level}', ignoring")

    if backend := os.environ.get("TASKLIST_BACKEND"):
        _set(result, "storage", "backend", backend.lower())

    return result


def get_default_config() -> dict[str, Any]:
    """
    Get hardcoded default configuration.

    Returns:
        Dictionary with default configuration values
    """
    return {
        "server": {"host": "127.0.0.1", "port": 5000, "cors_origins": []},
        "logging": {"level": "INFO", "log_requests": True},
        "storage": {"backend": "memory"},
    }


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> TasklistConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (TASKLIST_*)
        2. Project config (.tasklist.json)
        3. User config (~/.config/tasklist/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Directory to load .tasklist.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load

    Returns:
        Validated TasklistConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)

    config = TasklistConfig(**merged)
    _config_cache = config

    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
