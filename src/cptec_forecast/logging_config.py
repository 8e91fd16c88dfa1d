"""Centralized logging configuration."""

import logging

THIRD_PARTY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "httpx",
    "fastapi",
    "geopy",
)


def _console_handler(formatter: logging.Formatter, level: int) -> logging.Handler:
    """Create a console handler with the shared format."""
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_logging(level: int = logging.INFO):
    """
    Configure a consistent logging format for the entire application.

    The root logger and the third-party loggers listed in
    THIRD_PARTY_LOGGERS all get their own console handler with the same
    format, so uvicorn access lines read like the service's own lines.
    """
    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove any existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(_console_handler(formatter, level))

    for logger_name in THIRD_PARTY_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)

        # Remove existing handlers to avoid duplicate logs
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        # Don't propagate to avoid duplicate messages
        logger.propagate = False
        logger.addHandler(_console_handler(formatter, level))
