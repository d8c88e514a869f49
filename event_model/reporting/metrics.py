# event_model/reporting/metrics.py
"""
Functions to calculate summary metrics from simulation results.
"""

import logging
from typing import Dict, Iterable

import pandas as pd

from event_model.dynamics.sampling.demographics import DIMENSIONS
from event_model.schema.columns import DailyColumns
from event_model.schema.events import EventTypes
from event_model.state.employee import Employee
from event_model.state.event_log import daily_events_to_frame

logger = logging.getLogger(__name__)


def summarize(result, initial_headcount: int = 0) -> Dict[str, int]:
    """
    Headline totals for a run.

    Args:
        result: A SimulationResult (an empty one yields all zeros).
        initial_headcount: Employees assumed present before the range started;
            only shifts final_headcount.

    Returns:
        Dict with total_events, hires, terminations, promotions, net_growth,
        final_headcount and active_employees.
    """
    counts = {t: 0 for t in EventTypes}
    for event in result.employee_events:
        counts[event.type] += 1
    hires = counts[EventTypes.HIRE]
    terminations = counts[EventTypes.TERMINATION]
    net_growth = hires - terminations
    return {
        "total_events": len(result.employee_events),
        "hires": hires,
        "terminations": terminations,
        "promotions": counts[EventTypes.PROMOTION],
        "net_growth": net_growth,
        "final_headcount": initial_headcount + net_growth,
        "active_employees": sum(1 for e in result.employees if e.is_active),
    }


def demographic_breakdown(employees: Iterable[Employee]) -> Dict[str, Dict[str, int]]:
    """
    Count employees per category for gender, ethnicity and department.

    Every canonical category is listed, zero counts included; employees without
    an assigned value are skipped.
    """
    breakdown = {dim: {c: 0 for c in cats} for dim, cats in DIMENSIONS.items()}
    for emp in employees:
        for dim in breakdown:
            value = getattr(emp, dim)
            if value is not None:
                breakdown[dim][value] += 1
    return breakdown


def yearly_summary(result) -> pd.DataFrame:
    """
    Per-calendar-year totals with the running headcount at year end.

    Returns:
        DataFrame indexed by year with hires, terminations, promotions and
        headcount_eoy columns (empty when the result is empty).
    """
    daily = daily_events_to_frame(result.daily_events)
    cols = [DailyColumns.HIRES.value, DailyColumns.TERMINATIONS.value, DailyColumns.PROMOTIONS.value]
    if daily.empty:
        logger.warning("No daily events to summarize. Returning empty results.")
        return pd.DataFrame(columns=cols + ["headcount_eoy"], index=pd.Index([], name="year"))

    yearly = daily.groupby(daily[DailyColumns.DATE.value].dt.year.rename("year"))[cols].sum()
    net = yearly[DailyColumns.HIRES.value] - yearly[DailyColumns.TERMINATIONS.value]
    yearly["headcount_eoy"] = net.cumsum()
    return yearly
