# event_model/config/models.py
"""
Pydantic models for validating the structure and types of a simulation
scenario loaded from YAML files (e.g., config/default.yaml).
"""

import logging
from datetime import date
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from event_model.dynamics.sampling.counts import DEFAULT_TRIALS
from event_model.dynamics.sampling.demographics import DEPARTMENTS, DIMENSIONS, ETHNICITIES, GENDERS
from event_model.dynamics.seasonality import DEFAULT_SINE_AMPLITUDE, normalize_seasonality_name

logger = logging.getLogger(__name__)


class SimulationConfigError(ValueError):
    """Raised when a scenario fails validation; the simulation is not run."""


# --- Low-level Reusable Models ---


class DateRange(BaseModel):
    """Inclusive calendar range to simulate."""

    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @model_validator(mode="after")
    def check_order(self) -> "DateRange":
        if self.start > self.end:
            raise ValueError(f"start date {self.start} is after end date {self.end}")
        return self

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


class EventRates(BaseModel):
    """Annual probabilities; each must lie in [0, 1)."""

    hire_rate: float = Field(0.0, ge=0.0, lt=1.0)
    voluntary_termination_rate: float = Field(0.0, ge=0.0, lt=1.0)
    involuntary_termination_rate: float = Field(0.0, ge=0.0, lt=1.0)
    promotion_rate: float = Field(0.0, ge=0.0, lt=1.0)


def _check_weight_table(dimension: str, value: Any) -> Dict[str, float]:
    categories = DIMENSIONS[dimension]
    if value is None:
        return {c: 1.0 for c in categories}
    if not isinstance(value, dict):
        raise ValueError(f"{dimension} weights must be a mapping of category to weight")
    unknown = [k for k in value if k not in categories]
    if unknown:
        raise ValueError(f"Unknown {dimension} categories {unknown}; expected {list(categories)}")
    table = {}
    for category in categories:
        weight = float(value.get(category, 1.0))
        if weight < 0:
            raise ValueError(f"{dimension} weight for '{category}' is negative ({weight})")
        table[category] = weight
    if sum(table.values()) <= 0:
        raise ValueError(f"{dimension} weights are all zero; at least one category needs a positive weight")
    return table


class EventBiasTable(BaseModel):
    """Demographic weights for one event type. Missing categories default to 1.0."""

    gender: Dict[str, float] = Field(default_factory=lambda: {c: 1.0 for c in GENDERS})
    ethnicity: Dict[str, float] = Field(default_factory=lambda: {c: 1.0 for c in ETHNICITIES})
    department: Dict[str, float] = Field(default_factory=lambda: {c: 1.0 for c in DEPARTMENTS})

    @field_validator("gender", "ethnicity", "department", mode="before")
    @classmethod
    def validate_weights(cls, value: Any, info) -> Dict[str, float]:
        return _check_weight_table(info.field_name, value)

    def as_weights(self) -> Dict[str, Dict[str, float]]:
        return {"gender": dict(self.gender), "ethnicity": dict(self.ethnicity), "department": dict(self.department)}


DEFAULT_HIRE_BIAS = {
    "gender": {"Male": 0.5, "Female": 0.5, "Non-binary": 0.1, "Prefer not to say": 0.1},
    "ethnicity": {
        "White": 0.5,
        "Black or African American": 0.5,
        "Asian": 0.5,
        "Hispanic or Latino": 0.5,
        "Native American": 0.3,
        "Other": 0.3,
    },
    "department": {
        "Sales": 0.6,
        "Engineering": 0.7,
        "Human Resources": 0.4,
        "Marketing": 0.5,
        "Finance": 0.5,
        "Operations": 0.5,
    },
}


class BiasWeights(BaseModel):
    """
    Demographic bias tables per event category.

    Only the hires table drives assignment. The terminations and promotions
    tables are validated and kept on the config but currently have no effect.
    """

    hires: EventBiasTable = Field(default_factory=EventBiasTable)
    terminations: EventBiasTable = Field(default_factory=EventBiasTable)
    promotions: EventBiasTable = Field(default_factory=EventBiasTable)

    @classmethod
    def default(cls) -> "BiasWeights":
        """The reference tool's preset: the same skew for every event type."""
        return cls(hires=DEFAULT_HIRE_BIAS, terminations=DEFAULT_HIRE_BIAS, promotions=DEFAULT_HIRE_BIAS)


class SeasonalitySelection(BaseModel):
    """Seasonality curve name per event category."""

    hires: str = "none"
    terminations: str = "none"
    promotions: str = "none"
    sine_amplitude: float = Field(DEFAULT_SINE_AMPLITUDE, ge=0.0, lt=1.0)

    @field_validator("hires", "terminations", "promotions", mode="before")
    @classmethod
    def validate_name(cls, value: Any) -> str:
        return normalize_seasonality_name(value)


class SamplerConfig(BaseModel):
    method: Literal["trials", "binomial"] = "trials"
    trials: int = Field(DEFAULT_TRIALS, ge=1)


class DemographicsConfig(BaseModel):
    mode: Literal["hires", "all", "none"] = "hires"
    inline: bool = Field(False, description="Assign at hire time instead of as a post-pass")


# --- Top-level scenario ---


class SimulationConfig(BaseModel):
    """Complete, validated input for one simulation run."""

    date_range: DateRange
    rates: EventRates = Field(default_factory=EventRates)
    seasonality: SeasonalitySelection = Field(default_factory=SeasonalitySelection)
    sampler: SamplerConfig = Field(default_factory=SamplerConfig)
    demographics: DemographicsConfig = Field(default_factory=DemographicsConfig)
    bias_weights: BiasWeights = Field(default_factory=BiasWeights)
    seed: Optional[int] = Field(None, ge=0)
    scenario_name: str = "default"

    @field_validator("bias_weights", mode="before")
    @classmethod
    def expand_preset(cls, value: Any) -> Any:
        if value is None:
            return BiasWeights()
        if isinstance(value, str):
            if value == "default":
                return BiasWeights.default()
            if value in ("equal", "none"):
                return BiasWeights()
            raise ValueError(f"Unknown bias weight preset '{value}'")
        return value

    @model_validator(mode="before")
    @classmethod
    def accept_flat_dates(cls, data: Any) -> Any:
        """Allow top-level start_date/end_date in place of a date_range block."""
        if isinstance(data, dict) and "date_range" not in data and "start_date" in data:
            data = dict(data)
            data["date_range"] = {"start": data.pop("start_date"), "end": data.pop("end_date", None)}
        return data


def build_config(data: Dict[str, Any]) -> SimulationConfig:
    """
    Validate a raw scenario mapping.

    Raises:
        SimulationConfigError: describing every field that failed validation.
    """
    try:
        return SimulationConfig.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}" for err in e.errors()
        )
        logger.error(f"Invalid simulation configuration: {problems}")
        raise SimulationConfigError(f"Invalid simulation configuration: {problems}") from e
