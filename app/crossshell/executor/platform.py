"""
Host platform detection and shell selection.

The OS identity is read on every call so a resolver can be pointed at a
fake identity source in tests.
"""

import platform as _platform
from typing import Callable, Optional

from crossshell.executor.types import Platform, ShellDescriptor, UnsupportedPlatformError
from crossshell.utils import get_logger

logger = get_logger(__name__)

# platform.system() names mapped to shell families
SYSTEM_NAMES: dict[str, Platform] = {
    "windows": Platform.WINDOWS,
    "darwin": Platform.MACOS,
    "linux": Platform.LINUX,
}

SHELL_PATHS: dict[Platform, str] = {
    Platform.WINDOWS: "cmd.exe",
    Platform.MACOS: "/bin/bash",
    Platform.LINUX: "/bin/bash",
}


def detect_platform(system: Optional[str] = None) -> Platform:
    """Map an OS identity string (default: the host's) to a Platform."""
    if system is None:
        system = _platform.system()
    return SYSTEM_NAMES.get((system or "").strip().lower(), Platform.UNSUPPORTED)


class PlatformResolver:
    """
    Resolves the shell for the current platform.

    Args:
        system: Callable returning the OS identity (platform.system() style).
            Failures of the callable are treated as an unsupported platform.
    """

    def __init__(self, system: Callable[[], str] = _platform.system):
        self._system = system

    def _identity(self) -> str:
        try:
            return self._system() or ""
        except Exception as e:
            logger.debug(f"OS identity lookup failed: {e}")
            return ""

    def detect(self) -> Platform:
        return detect_platform(self._identity())

    def is_windows(self) -> bool:
        return self.detect() == Platform.WINDOWS

    def is_macos(self) -> bool:
        return self.detect() == Platform.MACOS

    def is_linux(self) -> bool:
        return self.detect() == Platform.LINUX

    def resolve(self) -> ShellDescriptor:
        """
        Get the shell descriptor for the detected platform.

        Raises:
            UnsupportedPlatformError: If the platform has no known shell
        """
        name = self._identity()
        detected = detect_platform(name)
        path = SHELL_PATHS.get(detected)
        if path is None:
            raise UnsupportedPlatformError(name)
        return ShellDescriptor(platform=detected, path=path)

    def get_shell(self) -> str:
        """Shell executable: cmd.exe on Windows, /bin/bash on macOS and Linux."""
        return self.resolve().path

    def get_shell_args(self, command: str) -> str:
        """
        Shell invocation string for a command.

        Anything that is not Windows gets the POSIX form, matching how the
        shell path is paired with it at launch.
        """
        if self.is_windows():
            return ShellDescriptor(Platform.WINDOWS, SHELL_PATHS[Platform.WINDOWS]).format_args(command)
        return ShellDescriptor(Platform.LINUX, SHELL_PATHS[Platform.LINUX]).format_args(command)


_default_resolver = PlatformResolver()


def is_windows() -> bool:
    """Check if the host is Windows."""
    return _default_resolver.is_windows()


def is_macos() -> bool:
    """Check if the host is macOS."""
    return _default_resolver.is_macos()


def is_linux() -> bool:
    """Check if the host is Linux."""
    return _default_resolver.is_linux()


def get_shell() -> str:
    return _default_resolver.get_shell()


def get_shell_args(command: str) -> str:
    return _default_resolver.get_shell_args(command)


def resolve_shell() -> ShellDescriptor:
    return _default_resolver.resolve()
