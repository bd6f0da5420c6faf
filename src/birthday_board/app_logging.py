"""Logging setup for the board service."""

import logging

# httpx logs every request at INFO; one board fetches a photo per celebrant.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str | int = "INFO") -> None:
    """Attach one stream handler to the package logger and quiet HTTP clients.

    Safe to call repeatedly: later calls only update the level.
    """
    logger = logging.getLogger("birthday_board")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
