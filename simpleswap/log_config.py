"""structlog setup for long-running processes."""

import logging

import structlog


def configure_logging(level: str | int = "INFO") -> None:
    """Configure structlog with levelled, timestamped console output.

    Args:
        level: Minimum level, as a name ("DEBUG", "info", ...) or a logging constant
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
