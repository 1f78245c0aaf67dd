# utils/logging.py

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from crossshell.config.models import LoggingSettings

PACKAGE_LOGGER = "crossshell"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(settings: "LoggingSettings") -> logging.Logger:
    """
    Attach crossshell's handlers according to LoggingSettings.

    Only the package logger is touched, so host applications keep their
    own root configuration. Diagnostics go to stderr; stdout belongs to the
    runner's streamed command output. Calling it again replaces the
    handlers installed by the previous call.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, settings.level.upper()))
    logger.propagate = False

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the specified name."""
    return logging.getLogger(name)
