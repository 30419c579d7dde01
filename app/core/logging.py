"""
Logging configuration for the Event Manager Service.
"""

import logging
import sys


def setup_logging(level: str = "INFO", service_name: str = "event-manager") -> logging.Logger:
    """
    Setup standardized logging for the service.

    Configures the root logger so that every module logger created with
    ``logging.getLogger(__name__)`` shares the same handler and format.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        service_name: Name of the service for log identification

    Returns:
        Configured root logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    formatter = logging.Formatter(
        f'[%(asctime)s] {service_name.upper()}: %(levelname)s - %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    return logger
