# tests/unit/test_platform.py
"""
Unit tests for platform detection and shell selection.
"""

import pytest

from crossshell.executor import (
    Platform,
    PlatformResolver,
    ShellDescriptor,
    UnsupportedPlatformError,
    detect_platform,
    get_shell,
    get_shell_args,
    is_linux,
    is_macos,
    is_windows,
)


class TestDetectPlatform:
    """Tests for OS identity mapping."""

    @pytest.mark.parametrize(
        "system, expected",
        [
            ("Windows", Platform.WINDOWS),
            ("Darwin", Platform.MACOS),
            ("Linux", Platform.LINUX),
            ("linux", Platform.LINUX),
            ("FreeBSD", Platform.UNSUPPORTED),
            ("", Platform.UNSUPPORTED),
        ],
    )
    def test_mapping(self, system, expected):
        assert detect_platform(system) == expected

    def test_host_flags_are_mutually_exclusive(self):
        """At most one of the host checks can be true."""
        assert sum([is_windows(), is_macos(), is_linux()]) <= 1

    def test_host_shell_matches_flags(self):
        if is_windows():
            assert get_shell() == "cmd.exe"
            assert get_shell_args("dir") == "/c dir"
        elif is_macos() or is_linux():
            assert get_shell() == "/bin/bash"
            assert get_shell_args("ls -la") == '-c "ls -la"'
        else:
            with pytest.raises(UnsupportedPlatformError):
                get_shell()


class TestPlatformResolver:
    """Tests for the injectable resolver."""

    def test_detection_is_not_cached(self):
        """The OS identity is read on every query."""
        names = iter(["Windows", "Linux", "Darwin"])
        resolver = PlatformResolver(system=lambda: next(names))

        assert resolver.detect() == Platform.WINDOWS
        assert resolver.detect() == Platform.LINUX
        assert resolver.detect() == Platform.MACOS

    def test_failing_identity_source_is_unsupported(self):
        def broken() -> str:
            raise OSError("no uname")

        resolver = PlatformResolver(system=broken)

        assert resolver.detect() == Platform.UNSUPPORTED
        with pytest.raises(UnsupportedPlatformError):
            resolver.resolve()

    def test_none_identity_is_unsupported(self):
        resolver = PlatformResolver(system=lambda: None)

        assert resolver.detect() == Platform.UNSUPPORTED

    def test_unsupported_error_names_platform(self, fake_platform):
        with pytest.raises(UnsupportedPlatformError, match="Unsupported OS") as exc_info:
            fake_platform("Haiku").resolve()

        assert exc_info.value.platform_name == "Haiku"

    @pytest.mark.parametrize("system", ["Windows", "Darwin", "Linux"])
    def test_flags_follow_simulated_platform(self, fake_platform, system):
        resolver = fake_platform(system)

        assert [resolver.is_windows(), resolver.is_macos(), resolver.is_linux()].count(True) == 1

    def test_unsupported_platform_gets_posix_args(self, fake_platform):
        """Only Windows switches the argument format."""
        assert fake_platform("SunOS").get_shell_args("ls") == '-c "ls"'

    def test_resolve_returns_descriptor(self, fake_platform):
        shell = fake_platform("Darwin").resolve()

        assert shell == ShellDescriptor(platform=Platform.MACOS, path="/bin/bash")



class TestShellDescriptor:
    """Tests for the process arguments handed to Popen."""

    def test_posix_argv(self):
        shell = ShellDescriptor(Platform.LINUX, "/bin/bash")

        assert shell.command_line("echo a | wc -c") == ["/bin/bash", "-c", "echo a | wc -c"]

    def test_posix_empty_command(self):
        shell = ShellDescriptor(Platform.LINUX, "/bin/bash")

        assert shell.command_line("") == ["/bin/bash", "-c", ""]

    def test_posix_keeps_single_quotes_and_dollars(self):
        shell = ShellDescriptor(Platform.MACOS, "/bin/bash")

        assert shell.command_line("echo '$HOME'") == ["/bin/bash", "-c", "echo '$HOME'"]

    def test_posix_unbalanced_quotes(self):
        shell = ShellDescriptor(Platform.LINUX, "/bin/bash")

        with pytest.raises(ValueError):
            shell.command_line('echo "unterminated')

    @pytest.mark.parametrize(
        "command",
        [
            "dir C:\\Temp",
            'type "my file.txt"',
            'echo "unbalanced',
            'copy "a b.txt" "c d.txt" && echo done',
        ],
    )
    def test_windows_command_line_is_verbatim(self, command):
        """cmd.exe receives '/c ' + command with no re-quoting."""
        shell = ShellDescriptor(Platform.WINDOWS, "cmd.exe")

        assert shell.command_line(command) == f"cmd.exe /c {command}"

    def test_windows_quoted_argument(self):
        shell = ShellDescriptor(Platform.WINDOWS, "cmd.exe")

        assert shell.command_line('type "my file.txt"') == 'cmd.exe /c type "my file.txt"'

    def test_windows_empty_command(self):
        shell = ShellDescriptor(Platform.WINDOWS, "cmd.exe")

        assert shell.format_args("") == "/c "
        assert shell.command_line("") == "cmd.exe /c "
