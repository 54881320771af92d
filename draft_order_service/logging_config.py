"""
logging_config.py — Centralized Logging Configuration for the Draft Order Service

This module configures unified logging behavior for the entire application.
It ensures that all modules log messages consistently to the console and,
where the platform allows it, to a file.

Features:
    • Console logging (stdout), picked up by the serverless platform's log stream
    • Optional file logging via LOG_FILE
    • Process ID tagging for multi-process visibility
    • Reduced verbosity for external dependencies (httpx, httpcore)
"""

import logging
import os
import sys

LOG_FORMAT = '%(asctime)s - %(levelname)s - [PID:%(process)d] - %(message)s'


def setup_logging(level=None, log_file=None):
    """
    Configures the global logging system for the application.

    The configuration includes:
        - Log level: LOG_LEVEL environment variable, INFO by default
        - Log format: timestamp, log level, process ID, and message
        - Output destinations:
            1. Console (stdout): real-time logs, serverless/Docker compatible
            2. File: only if LOG_FILE is set (serverless file systems are often read-only)
        - Reduced verbosity for third-party libraries such as httpx

    Args:
        level (str | int | None): Overrides LOG_LEVEL.
        log_file (str | None): Overrides LOG_FILE.
    """
    level = level or os.environ.get("LOG_LEVEL", "INFO").upper()
    log_file = log_file or os.environ.get("LOG_FILE")

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)

    # Reduce verbosity from external libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name):
    """
    Returns a configured logger instance for a given module or component name.

    Args:
        name (str): The logger name, typically the module’s __name__.

    Returns:
        logging.Logger: A preconfigured logger that follows the global format and handlers.
    """
    return logging.getLogger(name)
