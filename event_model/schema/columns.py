"""
Centralized column definitions for tabular exports.

This module defines all column names used when the simulation outputs are
rendered as DataFrames or written to disk, so the exporters, the reporting
helpers and the tests agree on one vocabulary.
"""

from enum import Enum
from typing import List


class RosterColumns(str, Enum):
    """Column definitions for the employee roster."""

    EMP_ID = "employee_id"
    EMP_HIRE_DATE = "hire_date"
    EMP_TERM_DATE = "termination_date"
    EMP_PROMOTION_DATES = "promotion_dates"
    EMP_GENDER = "gender"
    EMP_ETHNICITY = "ethnicity"
    EMP_DEPARTMENT = "department"
    EMP_AGE = "age"
    EMP_ACTIVE = "active"


class EventColumns(str, Enum):
    """Column definitions for the per-employee event log."""

    EVENT_DATE = "date"
    EVENT_TYPE = "event_type"
    EMP_ID = "employee_id"


class DailyColumns(str, Enum):
    """Column definitions for the daily aggregate series."""

    DATE = "date"
    HIRES = "hires"
    TERMINATIONS = "terminations"
    PROMOTIONS = "promotions"


def column_list(columns) -> List[str]:
    """Return the string values of a column enum in declaration order."""
    return [c.value for c in columns]


ROSTER_COLS = column_list(RosterColumns)
EVENT_COLS = column_list(EventColumns)
DAILY_COLS = column_list(DailyColumns)
