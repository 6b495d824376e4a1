"""
Logging for pyregistry.

Resolution diagnostics (strategy chosen, dropped URLs, empty results and,
at DEBUG, the full resolved set) are emitted on the ``pyregistry.resolver``
loggers below. Their verbosity can be tuned apart from the rest of the
package.
"""

import logging
import sys

# Create the package logger
logger = logging.getLogger("pyregistry")


class PyRegistryFormatter(logging.Formatter):
    """Formatter for pyregistry log records."""

    def __init__(self, include_timestamp: bool = True):
        if include_timestamp:
            fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
            datefmt = "%Y-%m-%d %H:%M:%S"
        else:
            fmt = "%(levelname)-8s | %(name)s | %(message)s"
            datefmt = None
        super().__init__(fmt=fmt, datefmt=datefmt)


def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger for a specific component.

    Args:
        name: Component name (e.g., "resolver.config")

    Returns:
        A child logger instance.
    """
    return logger.getChild(name)


# Component loggers used by the resolvers
resolver_logger = get_logger("resolver")
config_logger = resolver_logger.getChild("config")
dns_logger = resolver_logger.getChild("dns")
zones_logger = resolver_logger.getChild("zones")


def configure_logging(
    level: int = logging.INFO,
    handler: logging.Handler | None = None,
    format_timestamps: bool = True,
    resolution_level: int | None = None,
) -> logging.Logger:
    """
    Configure the pyregistry logger.

    Args:
        level: Logging level for the package.
        handler: Custom handler. If None, uses StreamHandler to stderr.
        format_timestamps: Include timestamps in log output.
        resolution_level: Level for resolver diagnostics only. DEBUG shows
            every resolved endpoint set; None follows ``level``.

    Returns:
        The configured logger instance.

    Example:
        import logging
        from pyregistry.logging import configure_logging

        # Quiet package, but log each resolved endpoint set
        configure_logging(level=logging.WARNING, resolution_level=logging.DEBUG)
    """
    logger.setLevel(level)
    resolver_logger.setLevel(logging.NOTSET if resolution_level is None else resolution_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(PyRegistryFormatter(include_timestamp=format_timestamps))
    # The handler must pass whatever the resolver loggers let through
    handler.setLevel(level if resolution_level is None else min(level, resolution_level))
    logger.addHandler(handler)

    return logger
