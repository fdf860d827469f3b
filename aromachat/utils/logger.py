"""
Logging setup for aromachat.

All modules log through children of the "aromachat" logger. The level comes
from LOG_LEVEL (default INFO) and can be changed later by the config layer.
"""
import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("aromachat")


def configure(level: Optional[str] = None) -> logging.Logger:
    """
    Attach the stdout handler (once) and set the package log level.

    Args:
        level: Level name such as "DEBUG". Falls back to LOG_LEVEL env, then INFO.

    Returns:
        The package root logger.
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logger.setLevel(level_name)

    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(console_handler)
    for handler in logger.handlers:
        handler.setLevel(level_name)

    # Keep chat logs out of the host application's root handlers
    logger.propagate = False
    return logger


configure()


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or a child such as 'aromachat.core.orchestrator'."""
    if name:
        return logging.getLogger(f"aromachat.{name}")
    return logger
