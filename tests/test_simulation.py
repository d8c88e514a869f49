import threading
from collections import Counter, defaultdict
from datetime import date, timedelta

import pytest

from event_model.config.models import DateRange, EventRates, SimulationConfigError, build_config
from event_model.schema.events import EventTypes
from event_model.simulation import (
    SimulationCancelled,
    SimulationEngine,
    SimulationError,
    SimulationResult,
    generate_events,
    iter_days,
    run_in_background,
)
from event_model.utils.id_generation import EmployeeIdIssuer

EVENT_ORDER = {EventTypes.HIRE: 0, EventTypes.TERMINATION: 1, EventTypes.PROMOTION: 2}


@pytest.fixture
def busy_result(make_config):
    cfg = make_config(
        start=date(2023, 1, 1),
        end=date(2024, 12, 31),
        seed=7,
        rates={
            "hire_rate": 0.5,
            "voluntary_termination_rate": 0.3,
            "involuntary_termination_rate": 0.2,
            "promotion_rate": 0.4,
        },
        seasonality={"hires": "sine", "terminations": "summer_slump", "promotions": "quarterly"},
    )
    return SimulationEngine(cfg).run()


def test_single_day_with_zero_rates():
    result = generate_events(
        DateRange(start=date(2024, 1, 1), end=date(2024, 1, 1)),
        rates=EventRates(),
        seed=1,
    )
    assert len(result.daily_events) == 1
    day = result.daily_events[0]
    assert (day.date, day.hires, day.terminations, day.promotions) == (date(2024, 1, 1), 0, 0, 0)
    assert result.employee_events == ()
    assert result.employees == ()


def test_range_ending_on_last_representable_date():
    result = generate_events({"start": date.max, "end": date.max}, seed=1)
    assert [d.date for d in result.daily_events] == [date.max]


def test_iter_days_covers_range_inclusively():
    date_range = DateRange(start=date.max - timedelta(days=2), end=date.max)
    assert list(iter_days(date_range)) == [date.max - timedelta(days=n) for n in (2, 1, 0)]


def test_hire_rate_of_one_is_rejected():
    with pytest.raises(SimulationConfigError, match="hire_rate"):
        generate_events({"start": date(2024, 1, 1), "end": date(2024, 1, 2)}, rates={"hire_rate": 1.0})


def test_start_after_end_is_rejected_before_running():
    with pytest.raises(SimulationConfigError):
        generate_events({"start": date(2024, 1, 2), "end": date(2024, 1, 1)})


def test_daily_series_is_contiguous(busy_result):
    dates = [d.date for d in busy_result.daily_events]
    assert len(dates) == (date(2024, 12, 31) - date(2023, 1, 1)).days + 1
    assert all(b - a == timedelta(days=1) for a, b in zip(dates, dates[1:]))


def test_daily_counts_match_event_log(busy_result):
    per_day = defaultdict(Counter)
    for event in busy_result.employee_events:
        per_day[event.date][event.type] += 1
    for day in busy_result.daily_events:
        counts = per_day[day.date]
        assert day.hires == counts[EventTypes.HIRE]
        assert day.terminations == counts[EventTypes.TERMINATION]
        assert day.promotions == counts[EventTypes.PROMOTION]
    assert sum(d.hires + d.terminations + d.promotions for d in busy_result.daily_events) == len(
        busy_result.employee_events
    )


def test_each_employee_terminated_at_most_once(busy_result):
    term_ids = [e.employee_id for e in busy_result.employee_events if e.type == EventTypes.TERMINATION]
    assert term_ids
    assert len(term_ids) == len(set(term_ids))
    terminated = {e.id for e in busy_result.employees if not e.is_active}
    assert terminated == set(term_ids)


def test_no_duplicate_promotion_dates(busy_result):
    promoted = [e for e in busy_result.employees if e.promotion_dates]
    assert promoted
    for emp in promoted:
        assert len(emp.promotion_dates) == len(set(emp.promotion_dates))
        assert emp.promotion_dates == sorted(emp.promotion_dates)


def test_events_respect_employment_window(busy_result):
    by_id = {e.id: e for e in busy_result.employees}
    for event in busy_result.employee_events:
        emp = by_id[event.employee_id]
        assert emp.hire_date <= event.date
        if emp.termination_date is not None and event.type == EventTypes.PROMOTION:
            assert event.date <= emp.termination_date


def test_event_log_order(busy_result):
    events = busy_result.employee_events
    for prev, cur in zip(events, events[1:]):
        assert prev.date <= cur.date
        if prev.date == cur.date:
            assert EVENT_ORDER[prev.type] <= EVENT_ORDER[cur.type]


def test_ids_issued_in_order(busy_result):
    ids = [e.id for e in busy_result.employees]
    assert ids[0] == "EMP000001"
    assert ids == sorted(ids)
    assert len(ids) == len(set(ids))


def test_default_mode_assigns_demographics_to_every_hire(busy_result):
    assert all(e.has_demographics for e in busy_result.employees)


@pytest.mark.slow
def test_ten_years_of_hires_only(make_config):
    cfg = make_config(
        start=date(2014, 1, 1),
        end=date(2023, 12, 31),
        rates={"hire_rate": 0.2},
        demographics={"mode": "none"},
    )
    result = SimulationEngine(cfg).run()
    hires = [e for e in result.employee_events if e.type == EventTypes.HIRE]
    assert len(result.employees) == len(hires) > 0
    assert len(result.employee_events) == len(hires)
    assert all(e.is_active for e in result.employees)
    assert all(d.terminations == 0 and d.promotions == 0 for d in result.daily_events)


def test_terminations_without_hires_realize_nothing(make_config):
    cfg = make_config(rates={"voluntary_termination_rate": 0.9, "involuntary_termination_rate": 0.9})
    result = SimulationEngine(cfg).run()
    assert result.employee_events == ()
    assert all(d.terminations == 0 for d in result.daily_events)


def test_same_seed_reproduces_run(make_config):
    first = SimulationEngine(make_config(seed=99)).run()
    second = SimulationEngine(make_config(seed=99)).run()
    assert first.daily_events == second.daily_events
    assert first.employee_events == second.employee_events
    assert first.employees == second.employees


def test_demographic_mode_does_not_change_event_stream(make_config):
    a = SimulationEngine(make_config(seed=3, demographics={"mode": "none"})).run()
    b = SimulationEngine(make_config(seed=3, demographics={"mode": "all"})).run()
    assert a.employee_events == b.employee_events
    assert not any(e.has_demographics for e in a.employees)
    assert all(e.has_demographics for e in b.employees)


def test_only_hire_bias_table_affects_demographics(make_config):
    skewed = {"department": {"Sales": 1.0, "Engineering": 0.0}}
    plain = SimulationEngine(make_config(seed=8)).run()
    other_tables = SimulationEngine(
        make_config(seed=8, bias_weights={"terminations": skewed, "promotions": skewed})
    ).run()
    assert plain.employees == other_tables.employees


def test_inline_assignment(make_config):
    cfg = make_config(
        seed=4,
        demographics={"inline": True},
        bias_weights={"hires": {"department": {d: 0.0 for d in ("Sales", "Human Resources", "Marketing", "Finance", "Operations")}}},
    )
    result = SimulationEngine(cfg).run()
    assert result.employees
    assert {e.department for e in result.employees} == {"Engineering"}


def test_unseeded_run_records_its_seed(make_config):
    result = SimulationEngine(make_config(seed=None, end=date(2024, 1, 31))).run()
    assert isinstance(result.seed, int)
    replay = SimulationEngine(make_config(seed=result.seed, end=date(2024, 1, 31))).run()
    assert replay.employee_events == result.employee_events


def test_each_run_restarts_ids(make_config):
    issuer = EmployeeIdIssuer()
    engine = SimulationEngine(make_config(end=date(2024, 2, 29)), id_issuer=issuer)
    first = engine.run()
    second = engine.run()
    assert first.employees[0].id == second.employees[0].id == "EMP000001"


def test_binomial_sampler_runs(make_config):
    result = SimulationEngine(make_config(sampler={"method": "binomial"})).run()
    assert len(result.daily_events) == 366
    assert sum(d.hires for d in result.daily_events) == len(result.employees)


def test_seasonality_scales_daily_probability(make_config):
    engine = SimulationEngine(build_config(make_config(seasonality={"hires": "holiday"})))
    dec = engine.adjusted_probabilities(date(2024, 12, 1))
    jan = engine.adjusted_probabilities(date(2024, 1, 1))
    assert dec.hire == pytest.approx(jan.hire * 1.5)
    assert dec.voluntary_termination == pytest.approx(jan.voluntary_termination)


def test_cancelled_run_yields_no_result(make_config):
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(SimulationCancelled):
        SimulationEngine(make_config()).run(cancel_event=cancel)


def test_unexpected_failure_is_wrapped(make_config):
    engine = SimulationEngine(make_config())

    def broken(p, rng):
        raise MemoryError("out of memory")

    engine.count_sampler = broken
    with pytest.raises(SimulationError) as excinfo:
        engine.run()
    assert isinstance(excinfo.value.__cause__, MemoryError)


def test_background_run_matches_synchronous(make_config):
    cfg = make_config(seed=21, end=date(2024, 3, 31))
    future = run_in_background(cfg)
    background = future.result(timeout=60)
    assert background.employee_events == SimulationEngine(cfg).run().employee_events


def test_background_run_validates_eagerly(make_config):
    with pytest.raises(SimulationConfigError):
        run_in_background(make_config(rates={"hire_rate": 2.0}))


def test_empty_result_placeholder():
    empty = SimulationResult.empty()
    assert empty.is_empty
    assert empty.daily_events == () and empty.employee_events == () and empty.employees == ()
