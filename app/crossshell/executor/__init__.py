"""
Cross-platform shell command execution.

This module handles:
- Host platform detection and shell selection
- Async subprocess execution with live output streaming
- Success evaluation from exit code and stderr policy
"""

from crossshell.executor.types import (
    CommandResult,
    ExecutionOptions,
    Platform,
    ShellDescriptor,
    ExecutorError,
    UnsupportedPlatformError,
    CommandExecutionError,
    CommandTimeoutError,
)
from crossshell.executor.platform import (
    PlatformResolver,
    detect_platform,
    get_shell,
    get_shell_args,
    is_linux,
    is_macos,
    is_windows,
    resolve_shell,
)
from crossshell.executor.runner import (
    CommandRunner,
    create_runner,
    execute_command,
    system_command,
)

__all__ = [
    # Types
    "CommandResult",
    "ExecutionOptions",
    "Platform",
    "ShellDescriptor",
    # Exceptions
    "ExecutorError",
    "UnsupportedPlatformError",
    "CommandExecutionError",
    "CommandTimeoutError",
    # Platform
    "PlatformResolver",
    "detect_platform",
    "get_shell",
    "get_shell_args",
    "is_linux",
    "is_macos",
    "is_windows",
    "resolve_shell",
    # Runner
    "CommandRunner",
    "create_runner",
    "execute_command",
    "system_command",
]
