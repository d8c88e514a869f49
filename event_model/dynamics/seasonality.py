# event_model/dynamics/seasonality.py
"""
Seasonality curves applied to daily event probabilities.

Each curve maps a calendar date to a positive multiplier. Curves are pure
functions of the date: months are zero-based (January == 0) to match the
published curve definitions.
"""

import logging
import math
from datetime import date
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

SeasonalityFunction = Callable[[date], float]

DEFAULT_SINE_AMPLITUDE = 0.2
QUARTER_MULTIPLIERS = (1.2, 0.9, 1.1, 1.3)
HOLIDAY_MONTH = 11  # December
HOLIDAY_MULTIPLIER = 1.5
SUMMER_MONTHS = range(5, 8)  # June through August
SUMMER_MULTIPLIER = 0.8


def _month_index(day: date) -> int:
    return day.month - 1


def no_seasonality(day: date) -> float:
    return 1.0


def sine_seasonality(amplitude: float = DEFAULT_SINE_AMPLITUDE) -> SeasonalityFunction:
    """Build a sine curve 1 + amplitude * sin(month / 11 * 2pi)."""

    def _sine(day: date) -> float:
        return 1.0 + amplitude * math.sin(_month_index(day) / 11 * 2 * math.pi)

    _sine.__name__ = f"sine_seasonality_{amplitude}"
    return _sine


def quarterly_seasonality(day: date) -> float:
    return QUARTER_MULTIPLIERS[_month_index(day) // 3]


def holiday_seasonality(day: date) -> float:
    return HOLIDAY_MULTIPLIER if _month_index(day) == HOLIDAY_MONTH else 1.0


def summer_slump_seasonality(day: date) -> float:
    return SUMMER_MULTIPLIER if _month_index(day) in SUMMER_MONTHS else 1.0


SEASONALITY_NAMES = ("none", "sine", "quarterly", "holiday", "summer_slump")

_ALIASES: Dict[str, str] = {
    "summerslump": "summer_slump",
    "summer-slump": "summer_slump",
    "summer slump": "summer_slump",
}


def normalize_seasonality_name(name: str) -> str:
    """Map accepted spellings ('summerSlump', 'summer-slump') to a canonical name."""
    key = str(name).strip().lower()
    key = _ALIASES.get(key, key)
    if key not in SEASONALITY_NAMES:
        raise ValueError(
            f"Unknown seasonality '{name}'. Expected one of: {', '.join(SEASONALITY_NAMES)}"
        )
    return key


def get_seasonality(name: str, amplitude: Optional[float] = None) -> SeasonalityFunction:
    """
    Look up a seasonality curve by name.

    Args:
        name: One of SEASONALITY_NAMES (aliases accepted).
        amplitude: Sine amplitude; ignored by the other curves.

    Returns:
        A callable mapping a date to its multiplier.
    """
    key = normalize_seasonality_name(name)
    if key == "sine":
        return sine_seasonality(DEFAULT_SINE_AMPLITUDE if amplitude is None else amplitude)
    if amplitude is not None:
        logger.debug(f"Amplitude {amplitude} ignored for '{key}' seasonality")
    return {
        "none": no_seasonality,
        "quarterly": quarterly_seasonality,
        "holiday": holiday_seasonality,
        "summer_slump": summer_slump_seasonality,
    }[key]
