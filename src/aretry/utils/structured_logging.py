r"""Structured logging utilities for machine-readable log output.

This module provides an opt-in JSON formatter and a context variable
holding the call-site location of the retry in progress. The executors
set the location around every attempt, so log records emitted by the
guarded operation itself can be traced back to the retry call site.

Example:
    Enable structured logging for aretry:

    ```python
    import logging
    from aretry.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("aretry")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_retry_location",
    "get_retry_location",
    "log_structured",
    "retry_location_scope",
    "set_retry_location",
]

import contextvars
import json
import logging
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator

_retry_location: contextvars.ContextVar[Any] = contextvars.ContextVar(
    "retry_location", default=None
)

# Attributes of every LogRecord, excluded from the "extra" fields
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}


def get_retry_location() -> Any:
    """Get the call-site location of the retry in progress.

    Returns:
        The location token, or None outside of a retry.

    Example:
        ```pycon
        >>> from aretry.utils.structured_logging import get_retry_location
        >>> get_retry_location() is None
        True

        ```
    """
    return _retry_location.get()


def set_retry_location(location: Any) -> contextvars.Token:
    """Set the call-site location for the current context.

    Args:
        location: Opaque location token.

    Returns:
        A token that can restore the previous value.
    """
    return _retry_location.set(location)


def clear_retry_location() -> None:
    """Clear the call-site location for the current context."""
    _retry_location.set(None)


@contextmanager
def retry_location_scope(location: Any) -> Iterator[None]:
    """Set the call-site location for the duration of a block.

    Args:
        location: Opaque location token. ``None`` leaves the current
            value untouched.

    Example:
        ```pycon
        >>> from aretry.utils.structured_logging import (
        ...     get_retry_location,
        ...     retry_location_scope,
        ... )
        >>> with retry_location_scope("test_api.py:42"):
        ...     get_retry_location()
        ...
        'test_api.py:42'
        >>> get_retry_location() is None
        True

        ```
    """
    if location is None:
        yield
        return
    token = _retry_location.set(location)
    try:
        yield
    finally:
        _retry_location.reset(token)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Each record is rendered as one JSON object with the fields
    ``timestamp``, ``level``, ``logger``, ``message``, ``module``,
    ``function`` and ``line``. The retry location is added as
    ``retry_location`` when set, and any field passed through ``extra``
    is preserved. Values that are not JSON serializable are rendered
    with ``str``.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from aretry.utils.structured_logging import StructuredFormatter
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("doctest_structured")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.INFO)
        >>> logger.info("Attempt failed", extra={"attempt": 2})
        >>> '"attempt": 2' in stream.getvalue()
        True

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        location = get_retry_location()
        if location is not None:
            log_data["retry_location"] = location

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Format timestamp as ISO 8601 with millisecond precision.

        Args:
            record: The log record.
            datefmt: Ignored, always uses ISO 8601.

        Returns:
            ISO 8601 formatted timestamp.
        """
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured data.

    The extra fields are included in the JSON output when using
    ``StructuredFormatter``.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.DEBUG).
        message: Log message.
        **extra: Additional structured fields to include in the log.
    """
    logger.log(level, message, extra=extra)
