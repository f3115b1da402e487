import logging
import sys
from typing import Any, Optional

from campusdesk.config import Settings, get_settings

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str, level: str = "INFO") -> logging.Logger:
    """Setup console logger for campusdesk consumers"""

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Re-running setup must not stack handlers
    if not any(getattr(h, "_campusdesk", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handler._campusdesk = True
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(logger.level)

    return logger


def log_with_context(logger: logging.Logger, level: str, message: str, **context: Any):
    """Log with additional key=value context"""
    context_str = " ".join(f"{k}={v}" for k, v in context.items())
    full_message = f"{message} {context_str}" if context else message

    log_func = getattr(logger, level.lower())
    log_func(full_message)


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Attach the console handler to the ``campusdesk`` logger at the configured level"""
    settings = settings or get_settings()
    return setup_logger("campusdesk", settings.log_level)
