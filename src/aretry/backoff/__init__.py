r"""Backoff strategies for the wait between attempts.

This package provides the two-tier strategy used by default, which
polls at a tenth of the interval during the first interval window, and
a constant strategy.
"""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy", "ConstantBackoff", "TieredBackoff"]

from aretry.backoff.base import BaseBackoffStrategy
from aretry.backoff.constant import ConstantBackoff
from aretry.backoff.tiered import TieredBackoff
