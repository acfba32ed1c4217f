"""Structured logging setup."""

import logging

import structlog


def configure_logging(level: str | None = None) -> None:
    """
    Configure structlog with the stdlib logger factory and JSON output.

    The library never calls this itself; applications opt in.

    Args:
        level: Logging level name, defaults to the LOG_LEVEL setting
    """
    if level is None:
        from betfair_rpc.config.settings import get_settings

        level = get_settings().log_level

    logging.basicConfig(format="%(message)s", level=level.upper())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
