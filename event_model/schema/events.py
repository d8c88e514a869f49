"""
Event type definitions and constants.

This module defines the event types the generator emits and the
vocabularies used to key rates, seasonality and bias tables.
"""

from enum import Enum


class EventTypes(str, Enum):
    """Enumeration of all employee event types."""

    HIRE = "hire"
    TERMINATION = "termination"
    PROMOTION = "promotion"


class TerminationCause(str, Enum):
    """Why an employee left; both causes emit a plain termination event."""

    VOLUNTARY = "voluntary"
    INVOLUNTARY = "involuntary"


class SeasonalityCategory(str, Enum):
    """Event categories that carry their own seasonality curve and bias table."""

    HIRES = "hires"
    TERMINATIONS = "terminations"
    PROMOTIONS = "promotions"
