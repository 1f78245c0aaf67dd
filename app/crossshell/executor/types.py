"""
Type definitions for command execution.

This module defines the data structures used throughout the executor.
"""

import shlex
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Platform(str, Enum):
    """Host operating system families the resolver knows about."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class ShellDescriptor:
    """
    Shell executable plus its argument-formatting rule.

    Attributes:
        platform: Platform the descriptor was resolved for
        path: Shell executable (cmd.exe or /bin/bash)
    """

    platform: Platform
    path: str

    def format_args(self, command: str) -> str:
        """
        Build the shell invocation string for a raw command.

        The POSIX form wraps the command in double quotes without escaping
        embedded quotes, so commands containing '"' are split differently
        by the shell than the caller may expect.
        """
        if self.platform == Platform.WINDOWS:
            # /c runs the command and then exits cmd.exe
            return f"/c {command}"
        return f'-c "{command}"'

    def command_line(self, command: str) -> Union[str, list[str]]:
        """
        Process arguments for subprocess.Popen.

        Windows gets one verbatim command line, which CreateProcess hands to
        cmd.exe unchanged. POSIX gets an argv list tokenized with shell
        quoting rules.

        Raises:
            ValueError: If a POSIX invocation has unbalanced quotes
        """
        if self.platform == Platform.WINDOWS:
            return f"{self.path} {self.format_args(command)}"
        return [self.path, *shlex.split(self.format_args(command))]


@dataclass(frozen=True)
class ExecutionOptions:
    """
    Per-call execution policy.

    Attributes:
        stream: Write output lines to the console as they arrive instead of
            buffering them into the result
        treat_stderr_as_failure: Any stderr line forces a failed result even
            when the exit code is 0
    """

    stream: bool = True
    treat_stderr_as_failure: bool = False


@dataclass
class CommandResult:
    """
    Result of a command execution.

    Attributes:
        command: The command that was executed
        success: Exit code 0 and, when stderr counts as failure, no stderr
        exit_code: Process exit code (None if the process never started)
        stdout: Buffered standard output (empty when streamed)
        stderr: Buffered standard error (empty when streamed)
        stderr_seen: Whether any stderr line was observed
        error_message: Start failure description, if any
    """

    command: str
    success: bool
    exit_code: Optional[int]
    stdout: str = ""
    stderr: str = ""
    stderr_seen: bool = False
    error_message: Optional[str] = None

    @property
    def started(self) -> bool:
        """Check if the child process was created at all."""
        return self.exit_code is not None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "command": self.command,
            "success": self.success,
            "exit_code": self.exit_code,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "stderr_seen": self.stderr_seen,
            "error_message": self.error_message,
        }

    @classmethod
    def start_failed(cls, command: str, message: str, stderr: str = "") -> "CommandResult":
        """Create a result for a process that could not be created."""
        return cls(
            command=command,
            success=False,
            exit_code=None,
            stderr=stderr,
            error_message=message,
        )


class ExecutorError(Exception):
    """Base exception for executor errors."""

    pass


class UnsupportedPlatformError(ExecutorError):
    """Raised when no shell is known for the host operating system."""

    def __init__(self, platform_name: str = ""):
        super().__init__("Unsupported OS" + (f": {platform_name}" if platform_name else ""))
        self.platform_name = platform_name


class CommandExecutionError(ExecutorError):
    """Raised when shell command execution fails."""

    default_message = "An error occurred during shell command execution."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class CommandTimeoutError(CommandExecutionError):
    """
    Raised when a command times out.

    Nothing in the runner raises this yet; it is kept for callers that bound
    the wait themselves.
    """

    def __init__(self, timeout: float, message: Optional[str] = None):
        super().__init__(
            message or f"Shell command execution timed out after {timeout:g} seconds."
        )
        self.timeout = timeout
