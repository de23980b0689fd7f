"""Logging configuration for linear_state.

Provides a formatter that keeps multiline messages (such as
``SearchStats.table()`` output) readable, and a helper that attaches it to
the package logger.
"""

import logging
import sys

__all__ = ["setup_logging", "AlignedFormatter"]

_PACKAGE_LOGGER = "linear_state"


class AlignedFormatter(logging.Formatter):
    """Formatter that pads the first message line and appends metadata.

    Continuation lines are emitted unchanged so tables stay aligned.

    Attributes:
        msg_width: Column at which metadata starts on the first line.
        show_metadata: Whether to append timestamp/level/name metadata.
    """

    def __init__(self, msg_width: int, show_metadata: bool) -> None:
        """Initialize the formatter.

        Args:
            msg_width: Column at which metadata starts on the first line.
            show_metadata: Whether to append timestamp/level/name metadata.
        """
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")
        self.msg_width = msg_width
        self.show_metadata = show_metadata

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record, keeping continuation lines verbatim.

        Args:
            record: The log record to format.

        Returns:
            Formatted log message string.
        """
        head, sep, rest = record.getMessage().partition("\n")
        if self.show_metadata:
            metadata = f"{self.formatTime(record, self.datefmt)} - {record.levelname} - {record.name}"
            head = f"{head:<{self.msg_width}}{metadata}"
        return f"{head}{sep}{rest}"


def setup_logging(
    level: int, log_file: str | None = None, msg_width: int = 60, show_metadata: bool = True
) -> logging.Handler:
    """Attach an ``AlignedFormatter`` handler to the package logger.

    Args:
        level: Logging level for the package logger.
        log_file: Write to this file (truncated) instead of stderr.
        msg_width: Column at which metadata starts on the first line.
        show_metadata: Whether to append timestamp/level/name metadata.

    Returns:
        The installed handler, so callers can remove it again.
    """
    handler: logging.Handler
    if log_file is None:
        handler = logging.StreamHandler(sys.stderr)
    else:
        handler = logging.FileHandler(log_file, mode="w")
    handler.setFormatter(AlignedFormatter(msg_width=msg_width, show_metadata=show_metadata))
    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
