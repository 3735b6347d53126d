import logging
import sys

from taskhub.core.config import settings

LOG_FORMAT = '[%(asctime)s] %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging():
    """Set up the `taskhub` logger from settings. Safe to call more than once."""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    logger = logging.getLogger('taskhub')
    logger.setLevel(logging.DEBUG)  # Logger accepts all, handlers filter
    logger.handlers.clear()  # Remove any existing handlers
    logger.addHandler(console_handler)

    if settings.LOG_FILE:
        file_handler = logging.FileHandler(settings.LOG_FILE)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)  # File gets all messages
        logger.addHandler(file_handler)

    # Prevent propagation to root logger (uvicorn configures its own)
    logger.propagate = False

    return logger


def get_logger(name: str = None):
    """Get a logger instance for a specific module."""
    if not name:
        return logging.getLogger('taskhub')
    if name == 'taskhub' or name.startswith('taskhub.'):
        return logging.getLogger(name)
    return logging.getLogger(f'taskhub.{name}')
