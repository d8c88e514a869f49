# event_model/engines/lifecycle.py
"""
Employee lifecycle: hires, terminations and promotions against the active pool.

The lifecycle owns the roster (append-only) and the active pool. Every
realized transition appends one EmployeeEvent to the log. Terminations and
promotions on an empty pool are no-ops, not errors.
"""

from datetime import date
from typing import Callable, List, Optional, Union

import numpy as np

from event_model.schema.events import EventTypes, TerminationCause
from event_model.state.active_pool import ActivePool
from event_model.state.employee import Employee, EmployeeEvent
from event_model.utils.id_generation import EmployeeIdIssuer
from logging_config import get_diagnostic_logger

diag_logger = get_diagnostic_logger(__name__)

HireHook = Callable[[Employee], Employee]


class EmployeeLifecycle:
    def __init__(
        self,
        rng: np.random.Generator,
        id_issuer: Optional[EmployeeIdIssuer] = None,
        on_hire: Optional[HireHook] = None,
    ):
        """
        Args:
            rng: Random generator used for every selection from the active pool.
            id_issuer: Source of employee IDs; a fresh issuer when omitted.
            on_hire: Optional callback applied to each new Employee before it
                joins the roster (used for inline demographic assignment).
        """
        self.rng = rng
        self.id_issuer = id_issuer if id_issuer is not None else EmployeeIdIssuer()
        self.on_hire = on_hire
        self.roster: List[Employee] = []
        self.events: List[EmployeeEvent] = []
        self._active = ActivePool()
        self._by_id = {}

    @property
    def active_count(self) -> int:
        return len(self._active)

    def active_ids(self) -> List[str]:
        return list(self._active)

    def get(self, emp_id: str) -> Employee:
        return self._by_id[emp_id]

    def _emit(self, day: date, event_type: EventTypes, emp_id: str) -> EmployeeEvent:
        event = EmployeeEvent(date=day, type=event_type, employee_id=emp_id)
        self.events.append(event)
        return event

    def hire(self, day: date) -> Employee:
        if not isinstance(day, date):
            raise TypeError(f"hire() expects a date, got {type(day).__name__}")
        employee = Employee(id=self.id_issuer.next_id(), hire_date=day)
        if self.on_hire is not None:
            employee = self.on_hire(employee)
        self.roster.append(employee)
        self._by_id[employee.id] = employee
        self._active.add(employee.id)
        self._emit(day, EventTypes.HIRE, employee.id)
        return employee

    def terminate(
        self, day: date, cause: Union[TerminationCause, str] = TerminationCause.VOLUNTARY
    ) -> Optional[Employee]:
        """
        Terminate one uniformly chosen active employee.

        Returns:
            The terminated Employee, or None when the active pool is empty.
        """
        cause = TerminationCause(cause)
        emp_id = self._active.pop_random(self.rng)
        if emp_id is None:
            diag_logger.debug(f"[TERM {day}] Active pool empty; skipping {cause.value} termination")
            return None
        employee = self._by_id[emp_id]
        employee.termination_date = day
        self._emit(day, EventTypes.TERMINATION, emp_id)
        return employee

    def promote(self, day: date) -> Optional[Employee]:
        """
        Promote one uniformly chosen active employee.

        A draw landing on someone already promoted today is discarded.

        Returns:
            The promoted Employee, or None when the pool is empty or the draw was discarded.
        """
        emp_id = self._active.choose(self.rng)
        if emp_id is None:
            diag_logger.debug(f"[PROMO {day}] Active pool empty; skipping promotion")
            return None
        employee = self._by_id[emp_id]
        if employee.promoted_on(day):
            diag_logger.debug(f"[PROMO {day}] {emp_id} already promoted today; draw discarded")
            return None
        employee.promotion_dates.append(day)
        self._emit(day, EventTypes.PROMOTION, emp_id)
        return employee

    def hire_many(self, day: date, count: int) -> int:
        for _ in range(count):
            self.hire(day)
        return count

    def terminate_many(self, day: date, count: int, cause: Union[TerminationCause, str]) -> int:
        realized = 0
        for _ in range(count):
            if self.terminate(day, cause) is None:
                break
            realized += 1
        return realized

    def promote_many(self, day: date, count: int) -> int:
        realized = 0
        for _ in range(count):
            if not self._active:
                break
            if self.promote(day) is not None:
                realized += 1
        return realized
