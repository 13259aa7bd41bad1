"""Logging setup for the dsr CLI."""

import logging
import sys

import coloredlogs

FORMATS = {
    "DEFAULT": "[%(asctime)s: %(levelname)s] %(message)s",
    "DEBUG": "[%(asctime)s: %(levelname)s] [%(module)s: %(lineno)d] %(message)s",
}


def setup_logging(logger: logging.Logger, log_level: str = "WARNING", colors: bool = True):
    """
    Setup and configure Python logging.

    Diagnostics go to stderr; stdout is reserved for command output.

    Args:
        logger: A logging.Logger object.
        log_level: Logger level.
        colors: If True use colored logs.
    """
    fmt = FORMATS["DEBUG"] if log_level == "DEBUG" else FORMATS["DEFAULT"]

    if colors:
        coloredlogs.install(level=log_level, logger=logger, fmt=fmt, stream=sys.stderr)
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt))
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.setLevel(log_level)

    logger.propagate = False
