"""
Logging setup for hostbridge.

All modules log through loguru via ``get_logger(__name__)``; the module name
is bound into each record so the console shows where a line came from.
"""

import sys

from loguru import logger as _logger

DEFAULT_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)

_logger.configure(extra={"name": "hostbridge"})


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """
    Replace loguru's default sink with hostbridge's console format.

    Args:
        level: Minimum level for the console (and file) sink.
        log_file: Optional path for an additional rotating file sink.
    """
    _logger.remove()
    _logger.add(sys.stderr, level=level.upper(), format=DEFAULT_FORMAT)

    if log_file:
        _logger.add(
            log_file,
            level=level.upper(),
            format=DEFAULT_FORMAT,
            rotation="10 MB",
            retention=2,
        )


def get_logger(name: str):
    """Return the shared logger bound to a module name."""
    return _logger.bind(name=name)
