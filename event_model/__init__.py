"""
Synthetic workforce event history generator.

Turns annual hire, termination and promotion rates into a day-by-day event
history with an attributable per-employee log and a roster of synthetic
employees.
"""

from event_model.config.models import BiasWeights, DateRange, EventRates, SimulationConfig, SimulationConfigError
from event_model.simulation import (
    SimulationCancelled,
    SimulationEngine,
    SimulationError,
    SimulationResult,
    generate_events,
    run_in_background,
)

__version__ = "0.1.0"

__all__ = [
    "BiasWeights",
    "DateRange",
    "EventRates",
    "SimulationConfig",
    "SimulationConfigError",
    "SimulationCancelled",
    "SimulationEngine",
    "SimulationError",
    "SimulationResult",
    "generate_events",
    "run_in_background",
]
