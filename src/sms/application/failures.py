"""Uniform logging of rejected sale operations."""

from __future__ import annotations

import logging

from sms.domain.exceptions import ErrorKind, SaleError


def log_failure(logger: logging.Logger, action: str, exc: SaleError) -> None:
    """Storage failures are errors; business rejections are warnings."""
    if exc.kind is ErrorKind.PERSISTENCE:
        logger.error("%s failed and was rolled back: %s", action, exc, exc_info=exc)
    else:
        logger.warning("%s rejected (%s): %s", action, exc.kind.value, exc)
