"""
Logging configuration using loguru.

The CLI calls setup_logging() once per invocation with the level from
``logging.level`` (or DEBUG under ``--verbose``).  Library code only ever
logs through ``loguru.logger`` and never installs sinks itself.
"""

import sys

from loguru import logger

CONSOLE_FORMAT = "<level>[{level.name}]</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message}"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    fmt: str = CONSOLE_FORMAT,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Replace loguru's sinks with a stderr sink and an optional rotating file.

    Args:
        level: Minimum level name, case-insensitive.
        log_file: Log file path. Empty or None keeps output on stderr only.
        fmt: Format of the stderr sink.
        rotation: Size at which the log file rolls over.
        retention: How long rolled-over files are kept.
    """
    level = level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=fmt)

    if log_file:
        logger.add(log_file, level=level, format=FILE_FORMAT, rotation=rotation, retention=retention)
