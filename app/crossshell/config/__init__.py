"""
Configuration system for crossshell.

Exports:
    CrossShellConfig: Main configuration container
    load_config: Load configuration from YAML/env
"""

from crossshell.config.models import (
    CrossShellConfig,
    ExecutionSettings,
    LoggingSettings,
)
from crossshell.config.loader import load_config

__all__ = [
    "CrossShellConfig",
    "ExecutionSettings",
    "LoggingSettings",
    "load_config",
]
