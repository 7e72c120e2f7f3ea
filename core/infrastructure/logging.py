"""
Logging infrastructure.

Provides logging utilities for the infrastructure layer.
"""
import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Install a single stream handler on the root logger.

    Safe to call more than once; only the level is updated on later calls.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ...)
    """
    root = logging.getLogger()
    if not any(getattr(h, "_fulfillment_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._fulfillment_handler = True
        root.addHandler(handler)
    root.setLevel(level.upper())

