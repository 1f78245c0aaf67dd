"""
crossshell - cross-platform shell command execution.

Runs a command line through the host's shell (cmd.exe on Windows,
/bin/bash on macOS and Linux), optionally streams its output, and
reports success from the exit code and stderr policy.
"""

__version__ = "0.1.0"

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
