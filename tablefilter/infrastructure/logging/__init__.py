"""
TableFilter Infrastructure Logging.

Logging configuration and utilities with file rotation and safe stream handling.

This module provides centralized logging for TableFilter with:
- File rotation (10 MB max, 5 backups)
- Safe stream handling for interpreter shutdown
- Configuration-driven level and log file for the 'TableFilter' root logger

Core modules only create their loggers (``logging.getLogger('TableFilter.X')``);
nothing is configured until the application calls ``configure_logging`` or
``setup_logger``.

Usage:
    from tablefilter.infrastructure.logging import configure_logging, get_logger
    configure_logging(config)
    logger = get_logger('TableFilter.MyModule')
    logger.info("Something happened")
"""

import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = 'TableFilter'

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class SafeStreamHandler(logging.StreamHandler):
    """
    StreamHandler that gracefully handles closed or None streams.

    This prevents AttributeError when the interpreter shuts down while
    objects are still logging, or when the stream becomes None during
    handler cleanup.
    """

    def emit(self, record):
        """Emit a record, with safe handling of None or closed streams."""
        try:
            if self.stream is None:
                return
            super().emit(record)
        except (AttributeError, ValueError, OSError):
            pass


def _formatter() -> logging.Formatter:
    return logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)


def _rotating_file_handler(log_file: str, level: int) -> Optional[RotatingFileHandler]:
    log_dir = os.path.dirname(log_file)
    if log_dir and not os.path.exists(log_dir):
        try:
            os.makedirs(log_dir, exist_ok=True)
        except OSError:
            log_file = os.path.basename(log_file)

    try:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding='utf-8',
            delay=True
        )
    except OSError:
        return None
    file_handler.setFormatter(_formatter())
    file_handler.setLevel(level)
    return file_handler


def setup_logger(name: str, log_file: str = None, level=logging.INFO):
    """
    Setup logger with file rotation.

    Args:
        name: Logger name (e.g., 'TableFilter.Parser')
        log_file: Path to log file (optional)
        level: Logging level (default: logging.INFO)

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    if logger.handlers:
        return logger

    if log_file:
        file_handler = _rotating_file_handler(log_file, level)
        if file_handler is not None:
            logger.addHandler(file_handler)

    # Console handler with SafeStreamHandler
    console_handler = SafeStreamHandler(sys.stderr)
    console_handler.setFormatter(_formatter())
    console_handler.setLevel(logging.WARNING)
    logger.addHandler(console_handler)

    return logger


def get_logger(name: str):
    """
    Get existing logger or create a default one.

    Args:
        name: Logger name

    Returns:
        logging.Logger: Logger instance
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger = setup_logger(name)
    return logger


def set_log_level(logger_name: str, level: int):
    """Change log level for a specific logger."""
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def safe_log(logger, level: int, message: str, exc_info: bool = False):
    """
    Safely log a message, catching any exceptions.

    Useful in exception handlers or during shutdown.
    """
    try:
        logger.log(level, message, exc_info=exc_info)
    except (OSError, ValueError, AttributeError):
        pass


def configure_logging(config=None):
    """
    Configure the 'TableFilter' root logger from the LOGGING section.

    Installs a SafeStreamHandler on stderr (WARNING and above) and, when
    ``LOGGING.LOG_FILE`` is set, a rotating file handler. Calling it again
    replaces the file handler if the path changed.

    Args:
        config: ConfigManager, None for the defaults

    Returns:
        logging.Logger: The root TableFilter logger
    """
    level_name = 'WARNING'
    log_file = ''
    if config is not None:
        level_name = config.get('LOGGING', 'LEVEL') or level_name
        log_file = config.get('LOGGING', 'LOG_FILE') or ''
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    if not any(isinstance(h, SafeStreamHandler) for h in root_logger.handlers):
        console_handler = SafeStreamHandler(sys.stderr)
        console_handler.setFormatter(_formatter())
        console_handler.setLevel(logging.WARNING)
        root_logger.addHandler(console_handler)

    for handler in [h for h in root_logger.handlers if isinstance(h, RotatingFileHandler)]:
        if log_file and handler.baseFilename == os.path.abspath(log_file):
            handler.setLevel(level)
            return root_logger
        root_logger.removeHandler(handler)
        handler.close()

    if log_file:
        file_handler = _rotating_file_handler(log_file, level)
        if file_handler is not None:
            root_logger.addHandler(file_handler)

    return root_logger


def get_log_file_path() -> Optional[str]:
    """Get the path of the root logger's log file, None when logging to stderr only."""
    for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
        if isinstance(handler, RotatingFileHandler):
            return handler.baseFilename
    return None


def flush_logs():
    """Flush all root logger handlers."""
    for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
        try:
            handler.flush()
        except (OSError, ValueError):
            pass


__all__ = [
    'ROOT_LOGGER_NAME',
    'SafeStreamHandler',
    'setup_logger',
    'get_logger',
    'set_log_level',
    'safe_log',
    'configure_logging',
    'get_log_file_path',
    'flush_logs',
]
