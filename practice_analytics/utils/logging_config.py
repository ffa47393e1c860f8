"""
Application-wide logging setup, run once at startup.
"""

import logging
import sys
from practice_analytics.config import get_settings
from practice_analytics.utils.logger import LOG_FORMAT, get_package_logger

def setup_logging() -> logging.Logger:
    """Configure application logging."""
    settings = get_settings()
    level = getattr(logging, settings.LOG_LEVEL, logging.INFO)
    
    # Root handler for third-party libraries
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )
    
    package_logger = get_package_logger()
    package_logger.setLevel(level)
    
    # Add file handler if log file is specified
    if settings.LOG_FILE:
        file_handler = logging.FileHandler(settings.LOG_FILE)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(file_handler)
        package_logger.addHandler(file_handler)
    
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("fastapi").setLevel(logging.INFO)
    
    # Reduce noise from external libraries
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    
    return package_logger
