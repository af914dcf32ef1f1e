"""
Logging Configuration
Sets up the package logger. Importing hyperplanes never configures logging;
applications call ``setup_logging`` once.
"""
import logging
import sys
from typing import Optional, Union

from hyperplanes.config import get_settings

LOGGER_NAME = "hyperplanes"


def setup_logging(level: Union[int, str, None] = None,
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'hyperplanes' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG or "INFO"). Defaults to the
            ``log_level`` setting.
        log_file: Optional path to save logs to a file.
    """
    if level is None:
        level = get_settings()["log_level"]
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Drop handlers from an earlier call so messages are not duplicated
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
