# event_model/simulation.py
"""
Main simulation orchestration module.

This module runs the day-by-day event loop: daily probabilities from annual
rates and seasonality, sampled counts per channel, lifecycle transitions in a
fixed order (hires, voluntary terminations, involuntary terminations,
promotions), and one EventData aggregate per day. Results are returned
together once the whole range has been simulated.
"""

import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import numpy as np

from event_model.config.models import (
    BiasWeights,
    DateRange,
    EventRates,
    SimulationConfig,
    SimulationConfigError,
    build_config,
)
from event_model.dynamics.rates import RateDomainError, annual_to_daily
from event_model.dynamics.sampling.counts import make_count_sampler
from event_model.dynamics.sampling.demographics import DemographicAssigner
from event_model.dynamics.seasonality import SeasonalityFunction, get_seasonality
from event_model.engines.lifecycle import EmployeeLifecycle
from event_model.schema.events import SeasonalityCategory, TerminationCause
from event_model.state.employee import Employee, EmployeeEvent, EventData
from event_model.utils.id_generation import EmployeeIdIssuer
from logging_config import ERROR_LOGGER, PERFORMANCE_LOGGER, SIMULATION_LOGGER, get_diagnostic_logger, get_logger

sim_logger = get_logger(SIMULATION_LOGGER)
perf_logger = get_logger(PERFORMANCE_LOGGER)
err_logger = get_logger(ERROR_LOGGER)
diag_logger = get_diagnostic_logger(__name__)


class SimulationError(RuntimeError):
    """An unexpected failure inside a run. No partial result is produced."""


class SimulationCancelled(SimulationError):
    """The caller cancelled the run; its partial state was discarded."""


@dataclass(frozen=True)
class SimulationResult:
    """Everything one run produced. Consumers must treat it as read-only."""

    daily_events: Tuple[EventData, ...] = ()
    employee_events: Tuple[EmployeeEvent, ...] = ()
    employees: Tuple[Employee, ...] = ()
    seed: Optional[int] = None
    config: Optional[SimulationConfig] = field(default=None, compare=False)

    @classmethod
    def empty(cls) -> "SimulationResult":
        """Placeholder for 'no run yet'."""
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.daily_events


@dataclass(frozen=True)
class DailyProbabilities:
    hire: float
    voluntary_termination: float
    involuntary_termination: float
    promotion: float


def daily_base_rates(rates: EventRates) -> DailyProbabilities:
    """Convert each annual rate to its daily probability."""
    try:
        return DailyProbabilities(
            hire=annual_to_daily(rates.hire_rate),
            voluntary_termination=annual_to_daily(rates.voluntary_termination_rate),
            involuntary_termination=annual_to_daily(rates.involuntary_termination_rate),
            promotion=annual_to_daily(rates.promotion_rate),
        )
    except RateDomainError as e:
        raise SimulationConfigError(str(e)) from e


def iter_days(date_range: DateRange):
    for offset in range(date_range.days):
        yield date_range.start + timedelta(days=offset)


class SimulationEngine:
    """
    Orchestrates one simulation run.

    The engine owns its roster, active pool and ID counter for the duration of
    run(); each call to run() starts from an empty roster and a reset counter.
    """

    def __init__(
        self,
        config: Union[SimulationConfig, Mapping[str, Any]],
        id_issuer: Optional[EmployeeIdIssuer] = None,
    ):
        if not isinstance(config, SimulationConfig):
            config = build_config(dict(config))
        self.config = config
        self.id_issuer = id_issuer if id_issuer is not None else EmployeeIdIssuer()
        self.base_rates = daily_base_rates(config.rates)
        self.count_sampler = make_count_sampler(config.sampler.method, config.sampler.trials)

        amplitude = config.seasonality.sine_amplitude
        self.seasonality: Dict[SeasonalityCategory, SeasonalityFunction] = {
            SeasonalityCategory.HIRES: get_seasonality(config.seasonality.hires, amplitude),
            SeasonalityCategory.TERMINATIONS: get_seasonality(config.seasonality.terminations, amplitude),
            SeasonalityCategory.PROMOTIONS: get_seasonality(config.seasonality.promotions, amplitude),
        }

    def adjusted_probabilities(self, day: date) -> DailyProbabilities:
        hire_mult = self.seasonality[SeasonalityCategory.HIRES](day)
        term_mult = self.seasonality[SeasonalityCategory.TERMINATIONS](day)
        promo_mult = self.seasonality[SeasonalityCategory.PROMOTIONS](day)
        return DailyProbabilities(
            hire=self.base_rates.hire * hire_mult,
            voluntary_termination=self.base_rates.voluntary_termination * term_mult,
            involuntary_termination=self.base_rates.involuntary_termination * term_mult,
            promotion=self.base_rates.promotion * promo_mult,
        )

    def _resolve_seed(self) -> int:
        if self.config.seed is not None:
            return self.config.seed
        return int(np.random.SeedSequence().entropy)

    def run(self, cancel_event: Optional[threading.Event] = None) -> SimulationResult:
        """
        Simulate every day of the configured range.

        Args:
            cancel_event: Checked once per simulated day; when set, the run
                stops and raises SimulationCancelled.

        Returns:
            SimulationResult holding the daily series, the event log and the roster.

        Raises:
            SimulationCancelled: if cancel_event was set.
            SimulationError: on any unexpected failure inside the loop.
        """
        cfg = self.config
        seed = self._resolve_seed()
        count_rng, select_rng, demo_rng = (
            np.random.default_rng(s) for s in np.random.SeedSequence(seed).spawn(3)
        )

        assigner = DemographicAssigner(
            demo_rng,
            hire_weights=cfg.bias_weights.hires.as_weights(),
        )
        inline = cfg.demographics.inline and cfg.demographics.mode == "hires"

        self.id_issuer.reset()
        lifecycle = EmployeeLifecycle(
            select_rng,
            id_issuer=self.id_issuer,
            on_hire=assigner.assign_hire if inline else None,
        )

        sim_logger.info(
            f"[RUN {cfg.scenario_name}] {cfg.date_range.start} -> {cfg.date_range.end} "
            f"({cfg.date_range.days} days), seed={seed}, rates={cfg.rates.model_dump()}, "
            f"sampler={self.count_sampler!r}"
        )
        started = time.perf_counter()

        try:
            daily_events = self._run_days(lifecycle, count_rng, cancel_event)
            if not inline:
                assigner.assign(lifecycle.roster, mode=cfg.demographics.mode)
        except SimulationCancelled:
            sim_logger.warning(f"[RUN {cfg.scenario_name}] Cancelled; discarding partial results")
            raise
        except Exception as e:
            err_logger.exception(f"[RUN {cfg.scenario_name}] Simulation failed: {e}")
            raise SimulationError(f"Simulation run '{cfg.scenario_name}' failed: {e}") from e

        elapsed = time.perf_counter() - started
        perf_logger.info(
            f"[RUN {cfg.scenario_name}] {len(daily_events)} days, {len(lifecycle.events)} events, "
            f"{len(lifecycle.roster)} employees ({lifecycle.active_count} active) in {elapsed:.3f}s"
        )
        return SimulationResult(
            daily_events=tuple(daily_events),
            employee_events=tuple(lifecycle.events),
            employees=tuple(lifecycle.roster),
            seed=seed,
            config=cfg,
        )

    def _run_days(
        self,
        lifecycle: EmployeeLifecycle,
        rng: np.random.Generator,
        cancel_event: Optional[threading.Event],
    ):
        daily_events = []
        year_totals = [0, 0, 0]
        current_year = self.config.date_range.start.year

        for day in iter_days(self.config.date_range):
            if cancel_event is not None and cancel_event.is_set():
                raise SimulationCancelled(f"Run cancelled at {day}")

            if day.year != current_year:
                self._log_year(current_year, year_totals, lifecycle)
                current_year, year_totals = day.year, [0, 0, 0]

            probs = self.adjusted_probabilities(day)
            hire_count = self.count_sampler(probs.hire, rng)
            voluntary_count = self.count_sampler(probs.voluntary_termination, rng)
            involuntary_count = self.count_sampler(probs.involuntary_termination, rng)
            promotion_count = self.count_sampler(probs.promotion, rng)

            hires = lifecycle.hire_many(day, hire_count)
            terminations = lifecycle.terminate_many(day, voluntary_count, TerminationCause.VOLUNTARY)
            terminations += lifecycle.terminate_many(day, involuntary_count, TerminationCause.INVOLUNTARY)
            promotions = lifecycle.promote_many(day, promotion_count)

            if terminations < voluntary_count + involuntary_count:
                diag_logger.debug(
                    f"[{day}] Sampled {voluntary_count + involuntary_count} terminations, "
                    f"realized {terminations} (active pool exhausted)"
                )

            daily_events.append(
                EventData(date=day, hires=hires, terminations=terminations, promotions=promotions)
            )
            year_totals[0] += hires
            year_totals[1] += terminations
            year_totals[2] += promotions

        self._log_year(current_year, year_totals, lifecycle)
        return daily_events

    def _log_year(self, year: int, totals, lifecycle: EmployeeLifecycle) -> None:
        sim_logger.info(
            f"[YEAR {year}] hires={totals[0]} terminations={totals[1]} promotions={totals[2]} "
            f"active={lifecycle.active_count}"
        )


def generate_events(
    date_range: Union[DateRange, Mapping[str, Any]],
    seasonality: Optional[Mapping[str, str]] = None,
    rates: Union[EventRates, Mapping[str, float], None] = None,
    bias_weights: Union[BiasWeights, Mapping[str, Any], str, None] = None,
    seed: Optional[int] = None,
    **options: Any,
) -> SimulationResult:
    """
    Validate the inputs and run one simulation synchronously.

    Args:
        date_range: DateRange or {'start': ..., 'end': ...}.
        seasonality: Curve name per category, e.g. {'hires': 'sine'}.
        rates: EventRates or a mapping of its fields.
        bias_weights: BiasWeights, a mapping, or a preset name ('default', 'equal').
        seed: Seed for reproducible output; None seeds from OS entropy.
        **options: Further SimulationConfig fields (sampler, demographics, scenario_name).

    Raises:
        SimulationConfigError: if any input is invalid; nothing is simulated.
    """

    def _dump(value):
        return value.model_dump() if hasattr(value, "model_dump") else value

    data: Dict[str, Any] = {"date_range": _dump(date_range), "seed": seed}
    if seasonality is not None:
        data["seasonality"] = dict(seasonality)
    if rates is not None:
        data["rates"] = _dump(rates)
    if bias_weights is not None:
        data["bias_weights"] = _dump(bias_weights)
    data.update(options)
    return SimulationEngine(build_config(data)).run()


def run_in_background(
    config: Union[SimulationConfig, Mapping[str, Any]],
    executor: Optional[ThreadPoolExecutor] = None,
    cancel_event: Optional[threading.Event] = None,
) -> "Future[SimulationResult]":
    """
    Run a simulation off the calling thread.

    The returned Future resolves once, with the complete result, or with the
    exception that stopped the run. Validation happens before submission, so
    a bad config raises here rather than through the Future.
    """
    engine = SimulationEngine(config)
    if executor is not None:
        return executor.submit(engine.run, cancel_event)
    own_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="event-model")
    try:
        return own_executor.submit(engine.run, cancel_event)
    finally:
        own_executor.shutdown(wait=False)
