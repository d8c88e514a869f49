# event_model/state/employee.py
"""
Record types produced by the event generator.

Employee is mutable: the roster owns each instance and the lifecycle engine
updates termination and promotion dates in place. EmployeeEvent and EventData
are immutable facts.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from event_model.schema.events import EventTypes


@dataclass
class Employee:
    """A synthetic employee. Never removed from the roster once hired."""

    id: str
    hire_date: date
    termination_date: Optional[date] = None
    promotion_dates: List[date] = field(default_factory=list)
    gender: Optional[str] = None
    ethnicity: Optional[str] = None
    department: Optional[str] = None
    age: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.termination_date is None

    @property
    def has_demographics(self) -> bool:
        return None not in (self.gender, self.ethnicity, self.department, self.age)

    def promoted_on(self, day: date) -> bool:
        return day in self.promotion_dates


@dataclass(frozen=True)
class EmployeeEvent:
    date: date
    type: EventTypes
    employee_id: str


@dataclass(frozen=True)
class EventData:
    """Realized event counts for one simulated day."""

    date: date
    hires: int = 0
    terminations: int = 0
    promotions: int = 0
