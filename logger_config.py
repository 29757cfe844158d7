"""Centralized logging configuration for the journal tool.

File logs rotate under ~/.journal/logs, or JOURNAL__LOG_DIR when set. The
console only shows what JOURNAL__LOG_LEVEL asks for (default ERROR) so command
output stays clean.
"""

import logging
from logging.handlers import RotatingFileHandler
import os

LOG_DIR = os.environ.get('JOURNAL__LOG_DIR') or os.path.join(os.path.expanduser('~'), '.journal', 'logs')


def _console_level() -> int:
    name = os.environ.get('JOURNAL__LOG_LEVEL', 'ERROR').upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.ERROR


def setup_logger(name: str, log_file: str = 'journal.log') -> logging.Logger:
    """Setup logger with rotation.

    Args:
        name: Logger name (usually __name__)
        log_file: Log file name (e.g., 'reminders.log', 'storage.log')

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # File handler - 10MB max, keep 5 backups
    try:
        os.makedirs(LOG_DIR, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(LOG_DIR, log_file),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
    except OSError:
        # Read-only home: console logging only
        file_handler = None

    if file_handler is not None:
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(_console_level())
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def configure_root_logger():
    """Reduce third-party library noise."""
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)


# Auto-configure on import
configure_root_logger()
