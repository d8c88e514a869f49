import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional, Set, Union

import yaml

from event_model.config.models import SimulationConfig, build_config

# Configure logger for this module
logger = logging.getLogger(__name__)


class ConfigLoadError(Exception):
    """Custom exception for errors during config loading."""

    pass


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge override into base and return the result.
    """
    for key, val in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            base[key] = deep_merge(base[key], val)
        else:
            base[key] = deepcopy(val)
    return base


def load_yaml_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Loads configuration data from a YAML file.

    Args:
        config_path: Path pointing to the YAML configuration file.

    Returns:
        A dictionary containing the loaded configuration.

    Raises:
        ConfigLoadError: If the file cannot be found or parsed.
    """
    config_path = Path(config_path)
    logger.info(f"Attempting to load configuration from: {config_path}")

    if not config_path.is_file():
        logger.error(f"Configuration file not found at path: {config_path}")
        raise ConfigLoadError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.exception(f"Error parsing YAML configuration file {config_path}: {e}")
        raise ConfigLoadError(f"Error parsing YAML file {config_path}") from e
    except OSError as e:
        logger.exception(f"Could not read configuration file {config_path}: {e}")
        raise ConfigLoadError(f"Could not read configuration file {config_path}") from e

    if config_data is None:
        config_data = {}
    if not isinstance(config_data, dict):
        logger.error(f"Configuration file {config_path} did not parse into a dictionary.")
        raise ConfigLoadError(
            f"Invalid configuration format in {config_path}: Expected a dictionary."
        )

    logger.info(f"Successfully loaded configuration from {config_path}")
    return config_data


def load_scenario(path: Union[str, Path], _seen: Optional[Set[Path]] = None) -> Dict[str, Any]:
    """
    Load a scenario file, resolving an optional 'extends' chain.

    The parent named by 'extends' (relative to the child's directory) is loaded
    first and the child's keys are deep-merged over it.
    """
    path = Path(path).resolve()
    seen = set() if _seen is None else _seen
    if path in seen:
        raise ConfigLoadError(f"Circular extends detected at '{path}'")
    seen.add(path)

    cfg = load_yaml_config(path)
    parent = cfg.pop("extends", None)
    if not parent:
        return cfg
    parent_fp = path.parent / parent
    if not parent_fp.exists():
        raise ConfigLoadError(f"Parent config '{parent}' not found for {path}")
    base = load_scenario(parent_fp, seen)
    return deep_merge(base, cfg)


def load_simulation_config(
    path: Union[str, Path], overrides: Optional[Dict[str, Any]] = None
) -> SimulationConfig:
    """
    Load, merge and validate a scenario into a SimulationConfig.

    Args:
        path: Scenario YAML file.
        overrides: Values merged over the file (e.g. from command-line flags).

    Raises:
        ConfigLoadError: if the file cannot be loaded.
        SimulationConfigError: if the merged scenario is invalid.
    """
    raw = load_scenario(path)
    raw.setdefault("scenario_name", Path(path).stem)
    if "start_date" in raw or "end_date" in raw:
        flat = {"start": raw.pop("start_date", None), "end": raw.pop("end_date", None)}
        raw["date_range"] = deep_merge({k: v for k, v in flat.items() if v is not None}, raw.get("date_range") or {})
    if overrides:
        deep_merge(raw, {k: v for k, v in overrides.items() if v is not None})
    return build_config(raw)
