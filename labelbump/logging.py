"""
Module to handle logging to GitHub Actions.

Debug traces from the tag and label resolvers are often multi-line JSON
snapshots, so messages sent with a workflow command prefix are escaped to
keep each record on a single `::debug::` line.
"""

import logging

from typing import Optional


NOTICE = 25


def escape_command_data(message: str) -> str:
    """Escape a message for use in a GitHub Actions workflow command."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GHAFilter(logging.Filter):
    """A logging filter that plays nice with GitHub Actions output."""

    # pylint: disable=too-few-public-methods

    prefixes = {
        logging.DEBUG: "::debug::",
        logging.INFO: "",
        NOTICE: "::notice::",
        logging.WARNING: "::warning::",
        logging.ERROR: "::error::",
        logging.CRITICAL: "::error::",
    }

    def filter(self, record):
        record.ghaprefix = self.prefixes.get(record.levelno, "")
        return True


class GHAFormatter(logging.Formatter):
    """Render records as GitHub Actions workflow commands."""

    def format(self, record):
        message = super().format(record)

        if prefix := getattr(record, "ghaprefix", ""):
            return prefix + escape_command_data(message)

        return message


def setup_logging():
    """Set up logging to GitHub Actions."""
    if logging.getLevelName("NOTICE") == NOTICE:
        return

    logging.addLevelName(NOTICE, "NOTICE")

    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(GHAFormatter("%(message)s"))
    handler.addFilter(GHAFilter())

    # Set these handlers on the root logger of this package
    root_logger = logging.getLogger(__name__.rpartition(".")[0])
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG)


class LoggingMixin:
    """A mixin class for logging."""

    # pylint: disable=too-few-public-methods

    @property
    def logger(self) -> logging.Logger:
        """Create and return a logger for instance or class."""
        if not getattr(self, "_logger", None):
            self._logger = logging.getLogger(
                f"{self.__class__.__module__}.{self.__class__.__name__}"
            )
        return self._logger


class LoggerSink(LoggingMixin):
    """
    Debug sink handed to the resolvers.

    Each recorded message becomes one DEBUG record on `logger`, or on the
    sink's own class logger when none is given.
    """

    # pylint: disable=too-few-public-methods

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger

    def record(self, message: str):
        """Record a single debug message."""
        self.logger.debug(message)
