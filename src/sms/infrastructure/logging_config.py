"""Package-wide logging setup.

Called once by the CLI.  Library code only ever does
``logging.getLogger(__name__)`` and leaves handlers to the application.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER_NAME = "sms"
LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: int | str = logging.INFO, log_file: Path | None = None
) -> logging.Logger:
    """Attach console (and optionally rotating file) handlers to the ``sms`` logger.

    Safe to call repeatedly: handlers are replaced, not stacked.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(level)
    logger.propagate = False
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=1_000_000,
                backupCount=5,
                encoding="utf-8",
            )
        except OSError as exc:
            print(
                f"Warning: unable to initialize log file at '{log_file}': {exc}",
                file=sys.stderr,
            )
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
