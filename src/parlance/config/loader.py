"""
Configuration loader with deep merge.

Precedence order (lowest to highest):
1. Defaults (defined in the Pydantic schemas)
2. YAML file
3. Environment variables
4. CLI arguments

The merge is recursive so every key is preserved at every level.
"""

import os
from pathlib import Path
from typing import Any

import yaml

from .schema import I18nConfig


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary whose values win over the base

    Returns:
        New merged dictionary. The override wins on leaf conflicts.

    Example:
        >>> base = {"formats": {"number_format": {"style": "decimal"}}, "default_language": "en"}
        >>> override = {"formats": {"number_format": {"use_grouping": False}}}
        >>> deep_merge(base, override)
        {"formats": {"number_format": {"style": "decimal", "use_grouping": False}}, "default_language": "en"}
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_config(config_path: Path | None) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML file, or None to skip

    Returns:
        Configuration dictionary, or an empty dict when there is no file
    """
    if not config_path:
        return {}

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
        return data if data else {}


def load_env_overrides() -> dict[str, Any]:
    """Load overrides from environment variables.

    Supported variables:
        PARLANCE_DEFAULT_LANGUAGE: overrides default_language
        PARLANCE_TIME_ZONE: overrides default_time_zone
        PARLANCE_LOG_LEVEL: overrides logging.level
        PARLANCE_LOG_FILE: overrides logging.file

    Returns:
        Dictionary of overrides taken from the environment
    """
    overrides: dict[str, Any] = {}

    if language := os.environ.get("PARLANCE_DEFAULT_LANGUAGE"):
        overrides["default_language"] = language

    if time_zone := os.environ.get("PARLANCE_TIME_ZONE"):
        overrides["default_time_zone"] = time_zone

    if log_level := os.environ.get("PARLANCE_LOG_LEVEL"):
        overrides.setdefault("logging", {})["level"] = log_level.lower()

    if log_file := os.environ.get("PARLANCE_LOG_FILE"):
        overrides.setdefault("logging", {})["file"] = log_file

    return overrides


def apply_cli_overrides(config_dict: dict[str, Any], cli_args: dict[str, Any]) -> dict[str, Any]:
    """Apply overrides coming from CLI arguments.

    Args:
        config_dict: Base configuration (already merged with YAML and env)
        cli_args: Dictionary of CLI arguments

    Returns:
        Configuration with the CLI overrides applied
    """
    overrides: dict[str, Any] = {}

    if cli_args.get("default_language"):
        overrides["default_language"] = cli_args["default_language"]

    if cli_args.get("time_zone"):
        overrides["default_time_zone"] = cli_args["time_zone"]

    if cli_args.get("log_file"):
        overrides.setdefault("logging", {})["file"] = cli_args["log_file"]

    if cli_args.get("verbose") is not None:
        overrides.setdefault("logging", {})["verbose"] = cli_args["verbose"]

    return deep_merge(config_dict, overrides)


def load_config(
    config_path: Path | None = None,
    cli_args: dict[str, Any] | None = None,
) -> I18nConfig:
    """Load and validate the complete configuration.

    Args:
        config_path: Path to the YAML configuration file
        cli_args: Dictionary of CLI arguments

    Returns:
        Validated I18nConfig

    Raises:
        FileNotFoundError: If config_path does not exist
        ValidationError: If the final configuration is invalid
    """
    cli_args = cli_args or {}

    yaml_config = load_yaml_config(config_path)

    env_overrides = load_env_overrides()
    merged = deep_merge(yaml_config, env_overrides)

    merged = apply_cli_overrides(merged, cli_args)

    # Pydantic fills in the defaults
    return I18nConfig(**merged)
