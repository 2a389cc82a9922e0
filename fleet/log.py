"""Logging setup for the fleet package: system.log plus console errors."""

import logging
from pathlib import Path
from typing import Union

LOGGER_NAME = "fleet"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# INFO records are user actions; DEBUG records are written without a tag.
_TAGS = {
    logging.INFO: "ACTION: ",
    logging.WARNING: "WARNING: ",
    logging.ERROR: "ERROR: ",
    logging.CRITICAL: "ERROR: ",
}


class TaggedFormatter(logging.Formatter):
    """Formats records as ``[timestamp] TAG: message``."""

    def __init__(self, with_timestamp: bool = True):
        fmt = "[%(asctime)s] %(tag)s%(message)s" if with_timestamp else "%(tag)s%(message)s"
        super().__init__(fmt=fmt, datefmt=DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        record.tag = _TAGS.get(record.levelno, "")
        return super().format(record)


def setup_logging(log_file: Union[str, Path], console: bool = True) -> logging.Logger:
    """
    Attach handlers to the ``fleet`` logger.

    Everything from DEBUG up is appended to ``log_file``. With ``console``,
    WARNING and above are also printed so failures reach the user.
    Calling this again replaces the previous handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setFormatter(TaggedFormatter())
    logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(TaggedFormatter(with_timestamp=False))
        logger.addHandler(console_handler)

    return logger
