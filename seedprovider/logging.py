"""
Logging for the seed provider.

Every module logs through a child of the "seedprovider" logger and never
installs handlers itself. A seed provider runs inside a container
entrypoint whose stdout is the seed list, so configure_logging() sends
records to stderr unless told otherwise.

Example:
    # What `seedprovider --log-level INFO seeds` does before resolving
    from seedprovider.logging import configure_logging

    configure_logging(level="INFO")

    # Inside a component
    from seedprovider.logging import get_logger

    logger = get_logger("discovery.endpoints")
    logger.warning("Dropping endpoint address %s", "10.0.0.7")
"""

import logging
import sys

from .exceptions import ConfigurationError

LOGGER_NAME = "seedprovider"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
SHORT_LOG_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(LOGGER_NAME)


class SeedProviderFormatter(logging.Formatter):
    """
    Pipe-delimited record layout.

    Kubelet and most log shippers stamp container lines already, so
    timestamps can be left out with include_timestamp=False.
    """

    def __init__(self, include_timestamp: bool = True):
        if include_timestamp:
            super().__init__(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
        else:
            super().__init__(fmt=SHORT_LOG_FORMAT)


def _level_number(level: int | str) -> int:
    """Turn a level name from the command line or environment into a number."""
    if isinstance(level, int):
        return level

    name = level.strip().upper()
    levels = logging.getLevelNamesMapping()
    if name not in levels:
        choices = ", ".join(sorted(levels, key=levels.__getitem__))
        raise ConfigurationError(f"Unknown log level {level!r}, expected one of {choices}")
    return levels[name]


def configure_logging(
    level: int | str = logging.INFO,
    handler: logging.Handler | None = None,
    format_timestamps: bool = True,
) -> logging.Logger:
    """
    Route seed provider records to a single handler.

    Calling it again replaces the previous handler, so the CLI callback and
    an embedding entrypoint can both call it without doubling output.

    Args:
        level: Level number, or a name such as "warning" in any case.
        handler: Where records go. Defaults to a stderr stream handler.
        format_timestamps: Prefix records with the local time.

    Returns:
        The "seedprovider" logger.

    Raises:
        ConfigurationError: If level is a name logging does not know.

    Example:
        # Container entrypoint: stdout carries CASSANDRA_SEEDS, logs go to stderr
        configure_logging(level=os.getenv("SEEDPROVIDER_LOG_LEVEL", "WARNING"),
                          format_timestamps=False)
    """
    level = _level_number(level)

    logger.setLevel(level)
    logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(SeedProviderFormatter(include_timestamp=format_timestamps))
    logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child of the package logger, e.g. get_logger("discovery.dns")."""
    return logger.getChild(name)
