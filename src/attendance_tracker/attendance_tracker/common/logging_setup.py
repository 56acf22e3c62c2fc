from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PACKAGE_LOGGER = __name__.rsplit(".common.", 1)[0]


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one console handler to the package logger.

    Safe to call more than once (e.g. one app per test); handlers are replaced,
    not stacked.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
