"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import SynthConfig

logger = logging.getLogger(__name__)

# Global cache to avoid reloading config multiple times per process
_config_cache: SynthConfig | None = None


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
        Path to ~/.config/tasksynth/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / "tasksynth" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Working directory to search from (defaults to current directory)

    Returns:
        Path to .tasksynth.json in the project root
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".tasksynth.json"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`. Nested
    dicts are merged, not replaced.

    Example:
        >>> deep_merge({"ai": {"model": "a", "enabled": True}}, {"ai": {"model": "b"}})
        {'ai': {'model': 'b', 'enabled': True}}
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
        Parsed JSON object, or None if the file is missing, unreadable or
        not a JSON object
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
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None


def _parse_bool(value: str) -> bool:
    return value.lower() not in ("false", "0", "no", "off", "")


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Env vars have the highest precedence and override all config files.

    Supported env vars:
        TASKSYNTH_AI_ENABLED - overrides ai.enabled
        TASKSYNTH_AI_MODEL - overrides ai.model
        TASKSYNTH_AI_BASE_URL - overrides ai.base_url
        TASKSYNTH_AI_TIMEOUT - overrides ai.timeout_seconds

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()
    ai = dict(result.get("ai") or {})

    if enabled_str := os.environ.get("TASKSYNTH_AI_ENABLED"):
        ai["enabled"] = _parse_bool(enabled_str)

    if model := os.environ.get("TASKSYNTH_AI_MODEL"):
        ai["model"] = model

    if base_url := os.environ.get("TASKSYNTH_AI_BASE_URL"):
        ai["base_url"] = base_url

    if timeout_str := os.environ.get("TASKSYNTH_AI_TIMEOUT"):
        try:
            timeout = float(timeout_str)
            if timeout <= 0:
                logger.warning("TASKSYNTH_AI_TIMEOUT must be > 0, got %s, ignoring", timeout_str)
            else:
                ai["timeout_seconds"] = timeout
        except ValueError:
            logger.warning("Invalid TASKSYNTH_AI_TIMEOUT value '%s', ignoring", timeout_str)

    if ai:
        result["ai"] = ai
    return result


def get_default_config() -> dict[str, Any]:
    """
    Get hardcoded default configuration.

    Returns:
        Dictionary with default configuration values
    """
    return {
        "ai": {
            "enabled": True,
            "api_key_env": "OPENAI_API_KEY",
            "model": "gpt-4-turbo-preview",
            "temperature": 0.4,
            "max_tokens": 3000,
            "timeout_seconds": 60.0,
        },
        "pipeline": {"reject_invalid": False},
    }


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> SynthConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (TASKSYNTH_*)
        2. Project config (.tasksynth.json)
        3. User config (~/.config/tasksynth/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Project directory to load .tasksynth.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load

    Returns:
        Validated SynthConfig instance

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

    config = SynthConfig(**merged)
    _config_cache = config

    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
