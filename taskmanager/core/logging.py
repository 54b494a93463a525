"""Logging setup for the ``taskmanager`` logger tree."""

import logging
import sys

APP_LOGGER = "taskmanager"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Client libraries that log every request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore", "authlib", "sqlalchemy.engine")


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stdout handler to the app logger and return it.

    Safe to call more than once; the handler is replaced, not duplicated.
    """

    numeric = getattr(logging, str(level).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger(APP_LOGGER)
    logger.handlers = [handler]
    logger.setLevel(numeric)
    logger.propagate = False

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric, logging.WARNING))
    return logger


__all__ = ["APP_LOGGER", "configure_logging"]
