import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "codebreakers-console"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a Rich console handler to the ``codebreakers`` logger.

    Output goes to stderr so that cipher output written to stdout stays
    clean for piping. Calling this more than once replaces the handler
    instead of stacking duplicates.

    Args:
        level: Minimum severity name (DEBUG, INFO, WARNING, ...)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("codebreakers")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        show_time=True,
        rich_tracebacks=True,
        markup=False,
    )
    handler.set_name(_HANDLER_NAME)
    logger.addHandler(handler)

    return logger
