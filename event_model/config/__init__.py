from .loaders import ConfigLoadError, deep_merge, load_scenario, load_simulation_config, load_yaml_config
from .models import (
    BiasWeights,
    DateRange,
    DemographicsConfig,
    EventBiasTable,
    EventRates,
    SamplerConfig,
    SeasonalitySelection,
    SimulationConfig,
    SimulationConfigError,
    build_config,
)

__all__ = [
    "ConfigLoadError",
    "deep_merge",
    "load_scenario",
    "load_simulation_config",
    "load_yaml_config",
    "BiasWeights",
    "DateRange",
    "DemographicsConfig",
    "EventBiasTable",
    "EventRates",
    "SamplerConfig",
    "SeasonalitySelection",
    "SimulationConfig",
    "SimulationConfigError",
    "build_config",
]
