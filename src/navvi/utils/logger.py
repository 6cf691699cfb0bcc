"""
Structured Logging Utility for Navvi
Configures the package logger once: console output plus an optional rotating file.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

ROOT_LOGGER_NAME = "navvi"


class NavviLogger:
    """Centralized logging configuration for Navvi"""

    _configured = {}

    @classmethod
    def setup(
        cls,
        level: Union[int, str] = logging.INFO,
        log_file: Optional[str] = None,
        console: bool = True,
    ) -> logging.Logger:
        """
        Configure the ``navvi`` logger hierarchy.

        Modules keep using ``logging.getLogger(__name__)``; their records
        propagate to the handlers installed here.

        Args:
            level: Logging level (name or number)
            log_file: Optional log file path
            console: Whether to log to stderr

        Returns:
            The configured root package logger
        """
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())
            if not isinstance(level, int):
                level = logging.INFO

        key = (level, log_file, console)
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        if cls._configured.get(ROOT_LOGGER_NAME) == key:
            return logger

        logger.setLevel(level)
        logger.propagate = False
        logger.handlers.clear()

        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        if console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        # File handler with rotation
        if log_file:
            log_path = Path(log_file).expanduser().resolve()
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = RotatingFileHandler(
                log_path, maxBytes=10 * 1024 * 1024, backupCount=5  # 10MB
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        cls._configured[ROOT_LOGGER_NAME] = key
        return logger


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None, **kwargs) -> logging.Logger:
    """Convenience function to configure package logging"""
    return NavviLogger.setup(level=level, log_file=log_file, **kwargs)
