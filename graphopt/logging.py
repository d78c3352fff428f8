"""Logging for graphopt.

All modules log through children of the ``graphopt`` logger. The algorithms
only emit DEBUG records: augmentation counts and flow values from max flow,
phase counts from Stoer-Wagner, best cuts from Karger and per-iteration
modularity from Leiden. They stay silent at the default INFO level; call
``enable_debug_logging()`` to see them.
"""

import logging
import sys
from typing import Optional

_ROOT_LOGGER_CONFIGURED = False

ROOT_LOGGER_NAME = "graphopt"


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach the single output handler to the ``graphopt`` logger.

    Runs at import time with the defaults. Later calls do nothing until
    ``reset_logging()`` clears the configuration, so an application wanting
    its own handler or format calls ``reset_logging()`` first.

    Args:
        level: Level of the ``graphopt`` logger.
        format_string: Record format; defaults to time, logger name, level
            and message.
        handler: Output handler; defaults to a stdout stream handler.
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)

    handler.setFormatter(logging.Formatter(format_string))
    root_logger.addHandler(handler)

    # Propagate so pytest's caplog sees records
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return the module logger ``name``, e.g. ``graphopt.algorithms.leiden``.

    The logger has no handler or level of its own; both come from the
    ``graphopt`` logger.
    """
    setup_root_logger()

    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the ``graphopt`` logger and its handlers.

    Args:
        level: Logging level, e.g. ``logging.DEBUG``.
    """
    setup_root_logger()

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Show the algorithms' DEBUG records."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Return to INFO, hiding the algorithms' DEBUG records."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Drop the handler and level so ``setup_root_logger`` can run again."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
