# event_model/dynamics/sampling/counts.py
"""
Daily event-count samplers.

A sampler turns an adjusted daily probability into an integer count of events
for one day. The default runs `trials` explicit Bernoulli draws and counts the
successes, which caps same-day volume at `trials`. BinomialSampler draws the
same distribution in one call.
"""

import logging
from typing import Callable, Union

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_TRIALS = 1000

CountSampler = Callable[[float, np.random.Generator], int]


def _clip_probability(p: float) -> float:
    if np.isnan(p):
        raise ValueError("Daily probability is NaN")
    if p < 0.0 or p > 1.0:
        logger.debug(f"Clipping daily probability {p} into [0, 1]")
    return min(max(float(p), 0.0), 1.0)


class BernoulliTrialSampler:
    """Count successes over `trials` independent Bernoulli(p) draws."""

    method = "trials"

    def __init__(self, trials: int = DEFAULT_TRIALS):
        if trials < 1:
            raise ValueError(f"trials must be >= 1, got {trials}")
        self.trials = int(trials)

    def __call__(self, p: float, rng: np.random.Generator) -> int:
        p = _clip_probability(p)
        if p == 0.0:
            return 0
        return int(np.count_nonzero(rng.random(self.trials) < p))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(trials={self.trials})"


class BinomialSampler(BernoulliTrialSampler):
    """Draw directly from Binomial(trials, p)."""

    method = "binomial"

    def __call__(self, p: float, rng: np.random.Generator) -> int:
        p = _clip_probability(p)
        if p == 0.0:
            return 0
        return int(rng.binomial(self.trials, p))


_SAMPLERS = {
    BernoulliTrialSampler.method: BernoulliTrialSampler,
    BinomialSampler.method: BinomialSampler,
}


def make_count_sampler(method: str = "trials", trials: int = DEFAULT_TRIALS) -> CountSampler:
    try:
        cls = _SAMPLERS[method]
    except KeyError:
        raise ValueError(
            f"Unknown sampler method '{method}'. Expected one of: {', '.join(_SAMPLERS)}"
        ) from None
    return cls(trials=trials)


def sample_count(
    p: float,
    rng: np.random.Generator,
    sampler: Union[CountSampler, None] = None,
) -> int:
    """Sample one day's event count with `sampler` (explicit trials by default)."""
    return (sampler or BernoulliTrialSampler())(p, rng)
