"""Logging setup for the ats-tailor command line."""

import logging
import sys

PACKAGE_LOGGER = "ats_tailor"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers of the remote keyword client's dependencies, chatty at INFO.
NOISY_LOGGERS = ("LiteLLM", "httpx", "httpcore")


def _package_handler(logger: logging.Logger) -> logging.Handler | None:
    for handler in logger.handlers:
        if getattr(handler, "ats_tailor_handler", False):
            return handler
    return None


def configure_logging(level: str | None = None) -> logging.Logger:
    """Send ``ats_tailor.*`` records to stderr at ``level`` (default INFO).

    Calling it again only changes the level. Remote-client libraries are held
    at WARNING unless ``level`` is DEBUG.
    """
    log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level)

    handler = _package_handler(logger)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handler.ats_tailor_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
        logger.propagate = False
    handler.setLevel(log_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
    return logger


def reset_logging() -> None:
    """Undo :func:`configure_logging`; used between tests."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handler = _package_handler(logger)
    if handler is not None:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET)
