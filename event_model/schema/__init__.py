"""
Schema vocabulary for the event model.

Example Usage:
    >>> from event_model.schema import EventTypes, RosterColumns
    >>> EventTypes.HIRE.value
    'hire'
"""

from .columns import (
    DAILY_COLS,
    EVENT_COLS,
    ROSTER_COLS,
    DailyColumns,
    EventColumns,
    RosterColumns,
)
from .events import EventTypes, SeasonalityCategory, TerminationCause

__all__ = [
    "DailyColumns",
    "EventColumns",
    "RosterColumns",
    "DAILY_COLS",
    "EVENT_COLS",
    "ROSTER_COLS",
    "EventTypes",
    "TerminationCause",
    "SeasonalityCategory",
]
