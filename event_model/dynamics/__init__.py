"""Rate conversion, seasonality and sampling primitives used by the engine."""

from .rates import DAYS_IN_YEAR, RateDomainError, annual_to_daily, daily_to_annual
from .seasonality import SEASONALITY_NAMES, get_seasonality

__all__ = [
    "DAYS_IN_YEAR",
    "RateDomainError",
    "annual_to_daily",
    "daily_to_annual",
    "SEASONALITY_NAMES",
    "get_seasonality",
]
