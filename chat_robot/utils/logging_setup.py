"""
Logging configuration for the Chat Robot.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_level: Optional[str] = None, log_file: Optional[str] = "chat_robot.log"
) -> None:
    """
    Configure application logging.

    Args:
        log_level: Optional log level override (default: from environment)
        log_file: Rotating log file path, or None to log to the console only
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")
    log_level = log_level.upper()

    handlers: list[logging.Handler] = []
    if log_file:
        handlers.append(
            RotatingFileHandler(log_file, maxBytes=1024 * 1024, backupCount=3)
        )
    handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=logging.INFO,  # Overridden below once the level is validated
        format=LOG_FORMAT,
        handlers=handlers,
        datefmt=DATE_FORMAT,
    )

    set_log_level(log_level)


def set_log_level(log_level: str) -> None:
    """
    Set the root logger level.

    Args:
        log_level: Level name, e.g. "DEBUG"; invalid names fall back to INFO
    """
    log_level = log_level.upper()
    root_logger = logging.getLogger()
    level = logging.getLevelName(log_level)
    if isinstance(level, int):
        root_logger.setLevel(level)
    else:
        root_logger.setLevel(logging.INFO)
        logging.warning(f"Invalid LOG_LEVEL: {log_level}. Using INFO instead.")
