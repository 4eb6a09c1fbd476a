"""
Logging Configuration
=====================
Centralized logging setup using loguru.

The package disables its own loggers on import, so nothing is emitted
until the host application calls `setup_logging()`.

Features:
- Structured JSON logging for production
- Human-readable logs for development
- botocore / aiobotocore logs routed through loguru
"""

import sys
import logging
from typing import Optional

from loguru import logger

from blobstore.core.config import Settings, settings as default_settings


PACKAGE_NAME = "blobstore"

# Third-party loggers that use the standard library
INTERCEPTED_LOGGERS = ("botocore", "aiobotocore", "aioboto3")


class InterceptHandler(logging.Handler):
    """
    Forward botocore, aiobotocore and aioboto3 records to loguru.

    Those libraries log through the standard library; installed on their
    loggers by setup_logging(), this puts request retries, credential
    resolution and endpoint messages on the package's sinks.
    """

    def emit(self, record: logging.LogRecord) -> None:
        """
        Emit a log record through loguru

        Args:
            record: Standard library log record
        """
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(current: Optional[Settings] = None) -> None:
    """
    Configure logging for the package

    Sets up:
    - Console logging (stderr)
    - JSON formatting outside development
    - Intercepts botocore standard library logging
    """
    current = current or default_settings

    # Remove default loguru handler
    logger.remove()

    if current.is_development:
        log_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )
        logger.add(
            sys.stderr,
            format=log_format,
            level="DEBUG" if current.DEBUG else current.LOG_LEVEL,
            colorize=True,
            backtrace=True,
            diagnose=True,
        )
    else:
        # JSON format for log aggregation
        logger.add(
            sys.stderr,
            format="{message}",
            level=current.LOG_LEVEL,
            serialize=True,
            backtrace=False,
            diagnose=False,
        )

    for name in INTERCEPTED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False
        # botocore is very chatty at DEBUG
        std_logger.setLevel(logging.DEBUG if current.DEBUG else logging.WARNING)

    logger.enable(PACKAGE_NAME)
    logger.info(f"Logging configured for {current.ENVIRONMENT} environment")
    logger.debug(f"Settings: {current.to_safe_dict()}")


def get_logger(name: Optional[str] = None):
    """
    Get a logger instance

    Args:
        name: Optional logger name for context

    Returns:
        logger: Configured loguru logger
    """
    if name:
        return logger.bind(logger_name=name)
    return logger
