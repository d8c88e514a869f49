# event_model/dynamics/sampling/demographics.py
"""
Bias-weighted demographic assignment for synthetic employees.
QuickStart: see README.md ("Demographics")

Gender, ethnicity and department are drawn independently by weighted
categorical sampling over fixed category orderings; age is uniform over
AGE_RANGE and ignores the bias weights.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar

import numpy as np

from event_model.state.employee import Employee

logger = logging.getLogger(__name__)

GENDERS = ("Male", "Female", "Non-binary", "Prefer not to say")
ETHNICITIES = (
    "White",
    "Black or African American",
    "Asian",
    "Hispanic or Latino",
    "Native American",
    "Other",
)
DEPARTMENTS = ("Sales", "Engineering", "Human Resources", "Marketing", "Finance", "Operations")
AGE_RANGE = (18, 65)  # inclusive

DIMENSIONS: Dict[str, Sequence[str]] = {
    "gender": GENDERS,
    "ethnicity": ETHNICITIES,
    "department": DEPARTMENTS,
}

ASSIGNMENT_MODES = ("all", "hires", "none")

WeightTable = Mapping[str, Mapping[str, float]]
T = TypeVar("T", bound=str)


def equal_weights() -> Dict[str, Dict[str, float]]:
    """Unbiased weight table: every category of every dimension weighted 1.0."""
    return {dim: {c: 1.0 for c in cats} for dim, cats in DIMENSIONS.items()}


def weighted_random_select(
    options: Sequence[T], weights: Mapping[str, float], rng: np.random.Generator
) -> T:
    """
    Pick one option with probability proportional to its weight.

    Walks the options in their canonical order accumulating weight and returns
    the first option whose cumulative weight reaches a uniform draw from
    [0, total). Zero-weight options are never returned.

    Raises:
        ValueError: if any weight is negative or all weights are zero.
    """
    values = [float(weights.get(opt, 0.0)) for opt in options]
    if any(w < 0 for w in values):
        raise ValueError(f"Negative weight in {dict(zip(options, values))}")
    total = sum(values)
    if total <= 0:
        raise ValueError(f"Weights for {list(options)} sum to zero")

    draw = rng.random() * total
    cumulative = 0.0
    for option, weight in zip(options, values):
        cumulative += weight
        if weight > 0 and draw <= cumulative:
            return option

    # Floating-point edge at the top of the range
    return next(opt for opt, w in zip(reversed(options), reversed(values)) if w > 0)


def draw_age(rng: np.random.Generator) -> int:
    low, high = AGE_RANGE
    return int(rng.integers(low, high + 1))


def assign_employee(employee: Employee, weights: WeightTable, rng: np.random.Generator) -> Employee:
    """Draw all four demographic attributes for one employee, in place."""
    employee.gender = weighted_random_select(GENDERS, weights["gender"], rng)
    employee.age = draw_age(rng)
    employee.ethnicity = weighted_random_select(ETHNICITIES, weights["ethnicity"], rng)
    employee.department = weighted_random_select(DEPARTMENTS, weights["department"], rng)
    return employee


def assign_demographics(
    employees: Iterable[Employee],
    weights: Optional[WeightTable] = None,
    rng: Optional[np.random.Generator] = None,
    overwrite: bool = True,
) -> List[Employee]:
    """
    Assign demographics to each employee using `weights`.

    Args:
        employees: Roster members to update in place.
        weights: Per-dimension category weights; None means equal weights.
        rng: Random generator; a fresh entropy-seeded one when omitted.
        overwrite: When False, employees that already carry demographics are skipped.

    Returns:
        The employees, in input order.
    """
    weights = weights if weights is not None else equal_weights()
    rng = rng if rng is not None else np.random.default_rng()
    result = list(employees)
    assigned = 0
    for employee in result:
        if not overwrite and employee.has_demographics:
            continue
        assign_employee(employee, weights, rng)
        assigned += 1
    logger.debug(f"Assigned demographics to {assigned} of {len(result)} employees")
    return result


class DemographicAssigner:
    """Applies demographic assignment in one of the supported modes.

    Modes:
        all   -- every employee passed in, with the `all_weights` table
                 (equal weights unless given).
        hires -- only employees hired in the current run that do not yet
                 carry demographics, with the hire bias table.
        none  -- leave everything untouched.
    """

    def __init__(
        self,
        rng: np.random.Generator,
        hire_weights: Optional[WeightTable] = None,
        all_weights: Optional[WeightTable] = None,
    ):
        self.rng = rng
        self.hire_weights = hire_weights if hire_weights is not None else equal_weights()
        self.all_weights = all_weights if all_weights is not None else equal_weights()

    def assign_hire(self, employee: Employee) -> Employee:
        return assign_employee(employee, self.hire_weights, self.rng)

    def assign(
        self,
        employees: Iterable[Employee],
        mode: str = "hires",
        hired_ids: Optional[Iterable[str]] = None,
    ) -> List[Employee]:
        if mode not in ASSIGNMENT_MODES:
            raise ValueError(f"Unknown demographic mode '{mode}'. Expected one of: {ASSIGNMENT_MODES}")
        employees = list(employees)
        if mode == "none":
            return employees
        if mode == "all":
            return assign_demographics(employees, self.all_weights, self.rng)

        wanted = set(hired_ids) if hired_ids is not None else None
        targets = [e for e in employees if wanted is None or e.id in wanted]
        assign_demographics(targets, self.hire_weights, self.rng, overwrite=False)
        return employees
