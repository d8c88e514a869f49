# event_model/dynamics/rates.py
"""
Conversion between annual event rates and daily draw probabilities.

An annual rate r is spread over DAYS_IN_YEAR independent daily trials with
probability p chosen so that 1 - (1 - p) ** DAYS_IN_YEAR == r.
"""

import math

DAYS_IN_YEAR = 365


class RateDomainError(ValueError):
    """Raised when an annual rate lies outside [0, 1)."""


def validate_annual_rate(rate: float, name: str = "rate") -> float:
    try:
        value = float(rate)
    except (TypeError, ValueError) as e:
        raise RateDomainError(f"{name} must be a number, got {rate!r}") from e
    if math.isnan(value) or not 0.0 <= value < 1.0:
        raise RateDomainError(f"{name} must be in [0, 1), got {rate!r}")
    return value


def annual_to_daily(rate: float, days_in_year: int = DAYS_IN_YEAR) -> float:
    """
    Convert an annual probability to the equivalent daily probability.

    Args:
        rate: Annual probability in [0, 1).
        days_in_year: Number of daily trials a year is compounded over.

    Returns:
        Daily probability p = 1 - (1 - rate) ** (1 / days_in_year).

    Raises:
        RateDomainError: if rate is outside [0, 1).
    """
    r = validate_annual_rate(rate)
    return 1.0 - (1.0 - r) ** (1.0 / days_in_year)


def daily_to_annual(p: float, days_in_year: int = DAYS_IN_YEAR) -> float:
    """Compound a daily probability back up to an annual one."""
    return 1.0 - (1.0 - p) ** days_in_year
