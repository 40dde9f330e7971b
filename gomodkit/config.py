"""
Configuration management for gomodkit.

Loads settings from:
1. .gomodkit.toml (local config)
2. pyproject.toml (project-level config)

Both files use the [tool.gomodkit] table.
"""

import os
import tomllib
from pathlib import Path

# Config files are looked up relative to the directory the tool runs in
PROJECT_ROOT = Path.cwd()

LOCAL_CONFIG_NAME = ".gomodkit.toml"

# Replacement for the user:password part of URLs found in tool output
DEFAULT_MASK_PLACEHOLDER = "***.***"

# Global settings (can be overridden)
_VERBOSE: bool | None = None
_MASK_PLACEHOLDER: str | None = None

_TRUTHY = {"1", "true", "yes", "on"}


def load_config_file(config_path: Path) -> dict:
    """Load a TOML configuration file."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def get_tool_config() -> dict:
    """
    Return the [tool.gomodkit] table.

    Priority:
    1. .gomodkit.toml (local config, highest priority)
    2. pyproject.toml (project-level config, fallback)

    Returns:
        The tool table, or an empty dict if neither file defines it.
    """
    local_config_path = PROJECT_ROOT / LOCAL_CONFIG_NAME
    if local_config_path.exists():
        config = load_config_file(local_config_path)
        tool_config = config.get("tool", {}).get("gomodkit", {})
        if tool_config:
            return tool_config

    pyproject_path = PROJECT_ROOT / "pyproject.toml"
    if pyproject_path.exists():
        config = load_config_file(pyproject_path)
        return config.get("tool", {}).get("gomodkit", {})

    return {}


def is_verbose_enabled() -> bool:
    """
    Check if verbose (debug) output is enabled.

    Priority:
    1. Explicitly set value via set_verbose()
    2. GOMODKIT_VERBOSE environment variable
    3. Config files
    4. Default: False
    """
    if _VERBOSE is not None:
        return _VERBOSE

    env_verbose = os.getenv("GOMODKIT_VERBOSE")
    if env_verbose:
        return env_verbose.strip().lower() in _TRUTHY

    return bool(get_tool_config().get("verbose", False))


def set_verbose(verbose: bool) -> None:
    """
    Set the verbose setting globally.

    Args:
        verbose: Whether debug output is printed.
    """
    global _VERBOSE
    _VERBOSE = verbose


def get_mask_placeholder() -> str:
    """
    Get the text that replaces credentials in tool output.

    Priority:
    1. Explicitly set value via set_mask_placeholder()
    2. GOMODKIT_MASK environment variable
    3. Config files ("mask" key)
    4. Default: ***.***
    """
    if _MASK_PLACEHOLDER is not None:
        return _MASK_PLACEHOLDER

    env_mask = os.getenv("GOMODKIT_MASK")
    if env_mask:
        return env_mask

    mask = get_tool_config().get("mask")
    if mask:
        return str(mask)

    return DEFAULT_MASK_PLACEHOLDER


def set_mask_placeholder(placeholder: str) -> None:
    """Set the credentials placeholder explicitly."""
    global _MASK_PLACEHOLDER
    _MASK_PLACEHOLDER = placeholder


def reset_config() -> None:
    """Drop explicitly set values so files and environment apply again."""
    global _VERBOSE, _MASK_PLACEHOLDER
    _VERBOSE = None
    _MASK_PLACEHOLDER = None
