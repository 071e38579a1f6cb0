"""Logger setup shared by every resflow module.

All module loggers live under the ``resflow`` logger, which owns the only
handler. Engines log at DEBUG, the testbed logs engine failures and
disagreements at WARNING.
"""

import logging
import sys
from typing import Optional

_ROOT_LOGGER_NAME = "resflow"

# Set once the resflow logger has its handler
_ROOT_LOGGER_CONFIGURED = False


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Install the single handler on the ``resflow`` logger.

    Only the first call has an effect; later calls keep the existing handler
    and level.

    Args:
        level: Level for the ``resflow`` logger (default: INFO).
        format_string: Custom format string (optional).
        handler: Custom handler (optional, defaults to StreamHandler on stderr).
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            format_string or "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )
    root_logger.addHandler(handler)
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a resflow module.

    The logger has no level of its own, so engine DEBUG lines follow
    whatever level is set on ``resflow``.

    Args:
        name: Logger name, normally ``__name__`` of the calling module.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the ``resflow`` logger and its handlers.

    ``set_global_log_level(logging.DEBUG)`` turns on the per-run summaries
    written by the engines.
    """
    setup_root_logger()
    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


setup_root_logger()
