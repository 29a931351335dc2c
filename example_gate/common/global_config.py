"""
================================================================================
Global Configuration for the Example Gate
================================================================================

This module provides centralized configuration management for the example
gate, including logging setup and configuration file loading.

Features:
    - YAML-based configuration loading
    - Environment-specific overlays (config/{ENV}.yaml)
    - Environment variable support (explicit names and KEY__SUBKEY form)
    - Centralized Loguru logging configuration

Author: Automation Team
License: MIT
================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

from example_gate.errors import ConfigurationError

# Global configuration storage
_config: Dict[str, Any] = {}
_config_dir_override: Optional[Path] = None
_logger_initialized: bool = False

# Environment variables understood without the KEY__SUBKEY convention.
# AUTH and MONGODB_URI are the names CI harnesses for MongoDB drivers export.
ENV_MAPPING: Dict[str, str] = {
    "MONGODB_URI": "mongodb.uri",
    "MONGODB_DATABASE": "mongodb.database",
    "MONGODB_REPLICA_SET": "mongodb.replica_set",
    "AUTH": "mongodb.auth",
    "SUITE_DEADLINE_SECONDS": "runner.deadline_seconds",
    "LOG_LEVEL": "logging.level",
}

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def init_logger(level: str = None, format_str: str = None) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Safe to call from every entry point; only the first call configures
    the sinks.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_str: Custom log format string. Defaults to config value.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    _ensure_config_loaded()

    log_level = str(level or get_config("logging.level", "INFO"))
    log_format = format_str or get_config("logging.format", DEFAULT_LOG_FORMAT)

    # Remove default logger and add configured one
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    log_file = get_config("logging.file", None)
    if log_file:
        log_dir = Path(log_file).parent
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level.upper(),
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
            compression="zip",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def get_logger():
    """
    Returns the configured Loguru logger instance.

    Ensures the logger is initialized before returning.
    """
    if not _logger_initialized:
        init_logger()
    return logger


def _ensure_config_loaded() -> None:
    """Ensures the configuration is loaded."""
    if not _config:
        _load_config()


def _candidate_config_dirs():
    if _config_dir_override is not None:
        return [_config_dir_override]
    return [
        Path("config"),
        Path(__file__).parent.parent.parent / "config",
    ]


def _load_config() -> None:
    """
    Loads configuration from YAML files and environment variables.

    Configuration loading order:
        1. Built-in defaults
        2. Default configuration file (config/config.yaml)
        3. Environment-specific configuration (config/{ENV}.yaml)
        4. Environment variables (override YAML settings)
    """
    global _config

    _config = _get_defaults()

    config_dir = None
    for dir_path in _candidate_config_dirs():
        if dir_path.exists():
            config_dir = dir_path
            break

    if config_dir is None:
        logger.debug("No configuration directory found. Using defaults.")
    else:
        _config = _deep_merge(_config, _read_yaml(config_dir / "config.yaml"))

        env = os.getenv("ENVIRONMENT", os.getenv("ENV", "dev"))
        env_config = _read_yaml(config_dir / f"{env}.yaml")
        if env_config:
            _config = _deep_merge(_config, env_config)
            logger.debug(f"Merged environment config: {config_dir / f'{env}.yaml'}")

    _apply_env_overrides()


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")
    logger.debug(f"Loaded configuration from {path}")
    return data


def _get_defaults() -> Dict[str, Any]:
    """Returns default configuration values."""
    return {
        "logging": {
            "level": "INFO",
            "format": DEFAULT_LOG_FORMAT,
        },
        "mongodb": {
            "uri": "mongodb://localhost:27017",
            "database": "documentation_examples",
            "replica_set": None,
            "auth": "noauth",
            "server_selection_timeout_ms": 30000,
        },
        "runner": {
            "deadline_seconds": 30,
        },
    }


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """Deep merges two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides() -> None:
    """
    Applies environment variable overrides to the configuration.

    Two naming conventions are honoured:
        - Names listed in ENV_MAPPING (MONGODB_URI, AUTH, ...)
        - Double underscore separated keys: RUNNER__DEADLINE_SECONDS=10
          overrides runner.deadline_seconds
    """
    for key, value in os.environ.items():
        if "__" in key:
            parts = [p.lower() for p in key.split("__")]
            _set_nested(_config, parts, value)

    for env_key, config_key in ENV_MAPPING.items():
        if env_key in os.environ:
            _set_nested(_config, config_key.split("."), os.environ[env_key])


def _set_nested(d: Dict, keys: list, value: Any) -> None:
    """Sets a nested dictionary value using a list of keys."""
    for key in keys[:-1]:
        child = d.get(key)
        if not isinstance(child, dict):
            child = {}
            d[key] = child
        d = child
    d[keys[-1]] = value


def get_config(key: str, default: Any = None) -> Any:
    """
    Retrieves a configuration value using a dot-separated key path.

    Args:
        key: Dot-separated key path (e.g., "mongodb.uri", "runner.deadline_seconds").
        default: Default value to return if key is not found.

    Returns:
        The configuration value, or the default if not found.

    Examples:
        >>> get_config("mongodb.database")
        'documentation_examples'
        >>> get_config("runner.deadline_seconds", 30)
        30
    """
    _ensure_config_loaded()

    value = _config
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return default if value is None else value


def set_config(key: str, value: Any) -> None:
    """
    Sets a configuration value at runtime.

    Args:
        key: Dot-separated key path.
        value: Value to set.
    """
    _ensure_config_loaded()
    _set_nested(_config, key.split("."), value)


def reload_config(config_dir: Optional[Path] = None) -> None:
    """
    Reloads the configuration from files and the environment.

    Args:
        config_dir: Directory holding config.yaml. When omitted the default
            search locations are used.
    """
    global _config, _config_dir_override
    _config = {}
    _config_dir_override = Path(config_dir) if config_dir is not None else None
    _load_config()
    logger.debug("Configuration reloaded.")
