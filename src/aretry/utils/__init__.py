r"""Utility functions for time measurement and structured logging."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "elapsed_since",
    "get_retry_location",
    "log_structured",
    "now",
    "retry_location_scope",
]

from aretry.utils.clock import elapsed_since, now
from aretry.utils.structured_logging import (
    StructuredFormatter,
    get_retry_location,
    log_structured,
    retry_location_scope,
)
