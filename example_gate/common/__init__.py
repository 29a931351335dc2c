"""
================================================================================
Example Gate Common Utilities
================================================================================

This module provides shared configuration management and logging setup for
all example_gate components.

Exports:
    - get_config / set_config / reload_config: layered YAML + env configuration
    - init_logger / get_logger: loguru logger with standard settings
    - RunSettings: immutable settings record passed into the runner and gate
    - mask_uri: hides credentials in connection strings before logging

Usage:
    from example_gate.common import RunSettings, init_logger

    init_logger()
    settings = RunSettings.from_config()

================================================================================
"""

import re

from .global_config import (
    get_config,
    get_logger,
    init_logger,
    reload_config,
    set_config,
)
from .run_settings import RunSettings


def mask_uri(uri: str) -> str:
    """
    Masks the credentials part of a MongoDB connection string.

    Example:
        >>> mask_uri("mongodb://user:secret@db:27017")
        'mongodb://****:****@db:27017'
    """
    return re.sub(r"://[^@/]+@", "://****:****@", uri)


# Export public API
__all__ = [
    "RunSettings",
    "get_config",
    "get_logger",
    "init_logger",
    "mask_uri",
    "reload_config",
    "set_config",
]
