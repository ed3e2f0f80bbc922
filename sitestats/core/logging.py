"""
Logger Configuration
Provides centralized logging setup with file and console output
"""
import logging
import logging.config
from pathlib import Path
from typing import Optional

from sitestats.core.config import LogConfig


class LogManager:
    """Centralized logging configuration management"""

    def __init__(self):
        self.config = LogConfig()

    def setup_logging(self, level: str = "INFO", log_file: Optional[Path] = None):
        """
        Configure logging with console and optional file handlers

        Args:
            level: Log level name
            log_file: Optional path to log file. Its parent directory is
                     created when missing.
        """
        self.config.LEVEL = level.upper()
        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            self.config.FILE = log_file

        logging.config.dictConfig(self.config.log_config)

        logger = logging.getLogger(__name__)
        logger.info("Logging configured successfully")
        if self.config.FILE:
            logger.info(f"Log file: {self.config.FILE}")


# Global logging manager instance
log_manager = LogManager()

# Global logger instance for importing in other modules
logger = logging.getLogger("sitestats")


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None):
    """
    Configure application logging

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file

    Returns:
        Logger instance
    """
    log_manager.setup_logging(level, log_file)
    return logger
