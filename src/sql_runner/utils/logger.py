# utils/logger.py
import logging
from pathlib import Path

from sql_runner.utils.config import app_config

# Create formatter
formatter = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(filename)s:%(lineno)d | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)

_handlers: list[logging.Handler] = []


def _build_handlers() -> list[logging.Handler]:
    if _handlers:
        return _handlers

    # Ensure logs directory exists
    log_file = Path(app_config.log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # File handler
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(app_config.log_level.upper())
    file_handler.setFormatter(formatter)

    # Console handler on stderr, stdout carries the run report
    console_handler = logging.StreamHandler()
    console_handler.setLevel("INFO")
    console_handler.setFormatter(formatter)

    _handlers.extend([file_handler, console_handler])
    return _handlers


def get_logger(name: str = "sql_runner") -> logging.Logger:
    """Return a configured logger instance."""
    logger = logging.getLogger(name)
    logger.setLevel(app_config.log_level.upper())

    # Avoid duplicate handlers if called multiple times
    if not logger.handlers:
        for handler in _build_handlers():
            logger.addHandler(handler)
        logger.propagate = False

    return logger
