"""
Command execution engine.

This module launches a command through the platform shell. It includes:
- Shell selection through a PlatformResolver
- One reader thread per output pipe, started before the wait
- Console streaming or in-memory buffering of output
- Success evaluation from exit code and stderr policy

Processes are created with subprocess.Popen rather than asyncio's
subprocess API because on Windows the cmd.exe command line has to reach
CreateProcess verbatim, and asyncio always rebuilds it from an argv list.
The async entry points run the blocking path in a worker thread.
"""

import asyncio
import subprocess
import sys
import threading
from typing import IO, Callable, Optional, TextIO

from crossshell.config.models import CrossShellConfig, ExecutionSettings
from crossshell.executor.platform import PlatformResolver
from crossshell.executor.types import CommandResult, ExecutionOptions
from crossshell.utils import get_logger

logger = get_logger(__name__)


class _LineReader(threading.Thread):
    """
    Drains one pipe, feeding each decoded line to a callback.

    Lines are read whole, whatever their length. If the callback raises,
    the error is kept for the waiting thread and the pipe is still drained
    so the child never blocks on a full buffer.
    """

    def __init__(self, pipe: IO[bytes], on_line: Callable[[str], None], encoding: str, name: str):
        super().__init__(name=name, daemon=True)
        self._pipe = pipe
        self._on_line = on_line
        self._encoding = encoding
        self.error: Optional[Exception] = None

    def run(self) -> None:
        for raw in iter(self._pipe.readline, b""):
            if self.error is not None:
                continue
            try:
                self._on_line(raw.decode(self._encoding, errors="replace").rstrip("\r\n"))
            except Exception as e:
                self.error = e


class CommandRunner:
    """
    Executes shell commands on the host platform.

    This class is the main entry point for command execution. It:
    1. Resolves the shell for the current platform
    2. Starts the child with both output streams piped
    3. Streams or buffers each output line as it arrives
    4. Returns a structured result once the child exits

    An unsupported platform raises UnsupportedPlatformError. A child that
    cannot be started yields a failed result instead of an exception.
    """

    def __init__(
        self,
        resolver: Optional[PlatformResolver] = None,
        settings: Optional[ExecutionSettings] = None,
        console: Optional[TextIO] = None,
    ):
        """
        Initialize the command runner.

        Args:
            resolver: Platform/shell resolver (defaults to the host platform)
            settings: Default execution policy and decoding settings
            console: Stream for streamed output (defaults to sys.stdout at
                write time)
        """
        self.resolver = resolver or PlatformResolver()
        self.settings = settings or ExecutionSettings()
        self._console = console
        self._console_lock = threading.Lock()

    @property
    def console(self) -> TextIO:
        return self._console if self._console is not None else sys.stdout

    def default_options(self) -> ExecutionOptions:
        return ExecutionOptions(
            stream=self.settings.stream,
            treat_stderr_as_failure=self.settings.treat_stderr_as_failure,
        )

    def run(
        self,
        command: str,
        options: Optional[ExecutionOptions] = None,
    ) -> CommandResult:
        """
        Execute a command through the platform shell and wait for it.

        Args:
            command: Command line passed verbatim to the shell
            options: Streaming and stderr policy (defaults from settings)

        Returns:
            CommandResult with execution results

        Raises:
            UnsupportedPlatformError: If the host platform has no known shell
        """
        options = options or self.default_options()
        shell = self.resolver.resolve()

        stdout_lines: list[str] = []
        stderr_lines: list[str] = []
        stderr_seen = threading.Event()

        def on_stdout(line: str) -> None:
            if options.stream:
                self._write(line)
            else:
                stdout_lines.append(line)

        def on_stderr(line: str) -> None:
            stderr_seen.set()
            if options.stream:
                self._write(f"{self.settings.stderr_prefix}{line}")
            else:
                stderr_lines.append(line)

        try:
            args = shell.command_line(command)
            logger.debug(f"Starting {args!r}")
            process = subprocess.Popen(
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                **_no_window_kwargs(),
            )
        except (OSError, ValueError) as e:
            logger.warning(f"Could not start process for {command!r}: {e}")
            if options.stream:
                self._write(f"Exception starting process: {e}")
            else:
                stderr_lines.append(str(e))
            return CommandResult.start_failed(command, str(e), stderr=_join(stderr_lines))

        encoding = self.settings.encoding
        readers = [
            _LineReader(process.stdout, on_stdout, encoding, name="crossshell-stdout"),
            _LineReader(process.stderr, on_stderr, encoding, name="crossshell-stderr"),
        ]
        with process:
            try:
                for reader in readers:
                    reader.start()
                exit_code = process.wait()
            finally:
                if process.poll() is None:
                    process.kill()
                    process.wait()
                for reader in readers:
                    if reader.is_alive():
                        reader.join()

        for reader in readers:
            if reader.error is not None:
                raise reader.error

        exit_ok = exit_code == 0
        stderr_ok = not options.treat_stderr_as_failure or not stderr_seen.is_set()
        logger.info(f"Command exited with code {exit_code}: {command!r}")

        return CommandResult(
            command=command,
            success=exit_ok and stderr_ok,
            exit_code=exit_code,
            stdout=_join(stdout_lines),
            stderr=_join(stderr_lines),
            stderr_seen=stderr_seen.is_set(),
        )

    async def execute(
        self,
        command: str,
        options: Optional[ExecutionOptions] = None,
    ) -> CommandResult:
        """
        Async variant of run().

        Cancelling the awaiting task does not stop the child; the worker
        thread keeps waiting until the child exits.
        """
        return await asyncio.to_thread(self.run, command, options)

    def system_command(
        self,
        command: str,
        stream: bool = True,
        treat_stderr_as_failure: bool = False,
    ) -> bool:
        """Run a command and report only whether it succeeded."""
        options = ExecutionOptions(stream=stream, treat_stderr_as_failure=treat_stderr_as_failure)
        return self.run(command, options).success

    def _write(self, line: str) -> None:
        # Both reader threads write here; keep lines whole
        with self._console_lock:
            print(line, file=self.console, flush=True)


def _join(lines: list[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


def _no_window_kwargs() -> dict:
    """Keep Windows from allocating a console window for the child."""
    if sys.platform == "win32":
        return {"creationflags": subprocess.CREATE_NO_WINDOW}
    return {}


def create_runner(
    config: Optional[CrossShellConfig] = None,
    resolver: Optional[PlatformResolver] = None,
    console: Optional[TextIO] = None,
) -> CommandRunner:
    """
    Factory function to create a CommandRunner.

    Args:
        config: Loaded configuration (defaults to built-in settings)
        resolver: Optional platform resolver override
        console: Optional stream for streamed output

    Returns:
        Configured CommandRunner instance
    """
    config = config or CrossShellConfig()
    return CommandRunner(resolver=resolver, settings=config.execution, console=console)


async def execute_command(
    command: str,
    stream: bool = True,
    treat_stderr_as_failure: bool = False,
    resolver: Optional[PlatformResolver] = None,
) -> CommandResult:
    """
    Convenience function to execute a command.

    Args:
        command: Command line to execute
        stream: Write output to the console as it arrives
        treat_stderr_as_failure: Fail when anything is written to stderr
        resolver: Optional platform resolver override

    Returns:
        CommandResult with execution results
    """
    runner = CommandRunner(resolver=resolver)
    options = ExecutionOptions(stream=stream, treat_stderr_as_failure=treat_stderr_as_failure)
    return await runner.execute(command, options)


def system_command(
    command: str,
    stream: bool = True,
    treat_stderr_as_failure: bool = False,
    resolver: Optional[PlatformResolver] = None,
) -> bool:
    """
    Execute a shell command and return True on success.

    Success means exit code 0 and, when treat_stderr_as_failure is set, no
    stderr output. A command whose process cannot be started returns False.

    Raises:
        UnsupportedPlatformError: If the host platform has no known shell
    """
    return CommandRunner(resolver=resolver).system_command(
        command,
        stream=stream,
        treat_stderr_as_failure=treat_stderr_as_failure,
    )
