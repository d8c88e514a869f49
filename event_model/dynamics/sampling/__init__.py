from .counts import (
    DEFAULT_TRIALS,
    BernoulliTrialSampler,
    BinomialSampler,
    make_count_sampler,
    sample_count,
)
from .demographics import (
    AGE_RANGE,
    DEPARTMENTS,
    ETHNICITIES,
    GENDERS,
    DemographicAssigner,
    assign_demographics,
    equal_weights,
    weighted_random_select,
)

__all__ = [
    "DEFAULT_TRIALS",
    "BernoulliTrialSampler",
    "BinomialSampler",
    "make_count_sampler",
    "sample_count",
    "AGE_RANGE",
    "DEPARTMENTS",
    "ETHNICITIES",
    "GENDERS",
    "DemographicAssigner",
    "assign_demographics",
    "equal_weights",
    "weighted_random_select",
]
