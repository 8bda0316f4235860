r"""Unit tests for retry policy validation."""

from __future__ import annotations

import math

import pytest

from aretry.core import validate_duration, validate_policy_params


@pytest.mark.parametrize("value", [0, 0.0, 0.015, 1, 3600.0])
def test_validate_duration_valid(value: float) -> None:
    validate_duration("timeout", value)


def test_validate_duration_negative() -> None:
    with pytest.raises(ValueError, match=r"timeout must be >= 0, got -1"):
        validate_duration("timeout", -1)


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_validate_duration_not_finite(value: float) -> None:
    with pytest.raises(ValueError, match=r"interval must be finite"):
        validate_duration("interval", value)


def test_validate_policy_params_valid() -> None:
    validate_policy_params(timeout=0.15, interval=0.015)


def test_validate_policy_params_invalid_timeout() -> None:
    with pytest.raises(ValueError, match=r"timeout must be >= 0"):
        validate_policy_params(timeout=-0.1, interval=0.015)


def test_validate_policy_params_invalid_interval() -> None:
    with pytest.raises(ValueError, match=r"interval must be >= 0"):
        validate_policy_params(timeout=0.15, interval=-0.015)
