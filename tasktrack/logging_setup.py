"""Logging configuration for the tasktrack CLI."""

import logging
import sys

_HANDLER_NAME = "tasktrack-console"


def configure_logging(verbose: bool = False) -> None:
    """Send tasktrack logs to stderr.

    Warnings and errors are always shown; ``verbose`` adds info and debug
    output. Calling this again replaces the handler it installed before.
    """
    logger = logging.getLogger("tasktrack")
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
