"""structlog configuration shared by the service and scripts."""

import logging

import structlog


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure structlog with level filtering and console rendering.

    Args:
        level: Minimum level to emit, as a logging constant or its name
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
