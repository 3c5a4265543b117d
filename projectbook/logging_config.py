"""Application-wide logging setup."""

import logging

from .config import LOG_LEVEL

_LOGGER_NAME = "projectbook"


def setup_logging(log_level=LOG_LEVEL) -> logging.Logger:
    """Attach a console handler to the package logger (once)."""
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(log_level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
        logger.addHandler(handler)
    logger.propagate = False

    logger.debug("Logging initialized at %s", logging.getLevelName(logger.level))
    return logger
