"""
Centralized logging utility for consistent logging across the application.

Module loggers are children of the ``practice_analytics`` logger, which owns
the only stdout handler, so each record is written once.
"""

import logging
import sys
import os

PACKAGE_LOGGER = "practice_analytics"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def get_package_logger() -> logging.Logger:
    """Get the package logger, attaching its stdout handler on first use."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
        
        # Set log level from environment
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        logger.setLevel(getattr(logging, log_level, logging.INFO))
    
    return logger

def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with consistent configuration."""
    get_package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
