# ───────────────────────── src/stylecheck/logging_utils.py ─────────────────────────
"""
Logging utilities with rotating file handler.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from .config import Config

LOGGER_NAME = "stylecheck"


class InitializationError(RuntimeError):
    """Raised when a corpus, model or collaborator cannot be loaded."""


def setup_logger(config: Optional[Config] = None) -> logging.Logger:
    """Set up a rotating file logger for the package.

    Module loggers (``logging.getLogger(__name__)``) are children of this
    logger, so everything the engine reports lands in the same file.

    Args:
        config: Configuration object, uses defaults if None

    Returns:
        Configured logger instance

    Raises:
        OSError: If log file cannot be created
    """
    if config is None:
        config = Config()

    logger = logging.getLogger(LOGGER_NAME)

    # Avoid duplicate handlers if logger already configured
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, config.log_level))

    # Create log directory if it doesn't exist
    log_path = Path(config.log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        filename=config.log_file,
        maxBytes=config.max_log_size,
        backupCount=config.log_backup_count,
        encoding="utf-8",
    )

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(formatter)

    logger.addHandler(file_handler)

    return logger


def log_error(
    message: str, exception: Optional[Exception] = None, config: Optional[Config] = None
) -> None:
    """Log an error message with optional exception details.

    Args:
        message: Error message to log
        exception: Optional exception to include in log
        config: Configuration object, uses defaults if None
    """
    logger = setup_logger(config)

    if exception:
        logger.error(f"{message}: {str(exception)}", exc_info=True)
    else:
        logger.error(message)
