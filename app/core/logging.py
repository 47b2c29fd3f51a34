"""
Logging configuration.
Console logging for the whole application, driven by settings.
"""

import logging

from app.core.config import settings


def setup_logging() -> logging.Logger:
    """
    Configure the root logger.

    Level and format come from LOG_LEVEL and LOG_FORMAT. Existing handlers
    are replaced so reloads do not duplicate output.

    Returns:
        The configured root logger
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
    root_logger.addHandler(console_handler)

    # Third-party loggers
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    root_logger.info(f"Logging initialized at {logging.getLevelName(log_level)} level")
    return root_logger
