"""
Run configuration loading and validation.

Run files are YAML. Any value left out falls back to the defaults in
beam_opt_config.yaml, which hold the reference problem parameters.
"""

from typing import Dict, Any, Optional, Union
from pathlib import Path
import yaml

from .data_models import Bounds, GAConfig, JayaConfig

DEFAULT_CONFIG_PATH = Path(__file__).parent / "beam_opt_config.yaml"

ALGORITHMS = ['jaya', 'ga']


class ConfigValidationError(Exception):
    """Raised when run configuration is invalid."""
    pass


def load_run_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigValidationError("Configuration file is empty")

    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration must be a mapping at top level")

    return config


def load_defaults() -> Dict[str, Any]:
    """Load the packaged default parameters."""
    return load_run_config(DEFAULT_CONFIG_PATH)


def merge_with_defaults(config: Dict[str, Any], defaults: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Overlay a run configuration on the defaults.

    Nested sections (jaya, ga, bounds, output) are merged key by key.
    """
    if defaults is None:
        defaults = load_defaults()

    merged = dict(defaults)
    for key, value in config.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            section = dict(merged[key])
            section.update(value)
            merged[key] = section
        else:
            merged[key] = value
    return merged


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validate run configuration structure.

    Args:
        config: Merged run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if 'algorithm' not in config:
        raise ConfigValidationError("Missing required field: 'algorithm'")

    algorithm = config['algorithm']
    if algorithm not in ALGORITHMS:
        raise ConfigValidationError(
            f"Invalid algorithm: '{algorithm}'. Must be 'jaya' or 'ga'"
        )

    for section in ['jaya', 'ga', 'bounds', 'output']:
        if section in config and not isinstance(config[section], dict):
            raise ConfigValidationError(f"'{section}' must be a dictionary")

    seed = config.get('random_seed')
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool) or seed < 0):
        raise ConfigValidationError(
            f"'random_seed' must be a non-negative integer, got: {seed}"
        )

    # Building the dataclasses runs their own value checks
    if algorithm == 'jaya':
        build_jaya_config(config)
    else:
        build_ga_config(config)


def build_bounds(config: Dict[str, Any]) -> Bounds:
    try:
        return Bounds.from_dict(config.get('bounds', {}))
    except (TypeError, ValueError) as e:
        raise ConfigValidationError(f"Invalid bounds: {e}")


def build_jaya_config(config: Dict[str, Any]) -> JayaConfig:
    """
    Build an immutable JayaConfig from the 'jaya' and 'bounds' sections.

    Raises:
        ConfigValidationError: If a parameter is missing or out of range
    """
    section = config.get('jaya', {})
    try:
        return JayaConfig(
            population_size=section['population_size'],
            iterations=section['iterations'],
            bounds=build_bounds(config),
        )
    except KeyError as e:
        raise ConfigValidationError(f"Missing required field: 'jaya.{e.args[0]}'")
    except ValueError as e:
        raise ConfigValidationError(f"Invalid jaya parameters: {e}")


def build_ga_config(config: Dict[str, Any]) -> GAConfig:
    """
    Build an immutable GAConfig from the 'ga' and 'bounds' sections.

    Raises:
        ConfigValidationError: If a parameter is missing or out of range
    """
    section = config.get('ga', {})
    try:
        return GAConfig(
            population_size=section['population_size'],
            generations=section['generations'],
            crossover_rate=float(section['crossover_rate']),
            mutation_rate=float(section['mutation_rate']),
            mutation_strength=float(section['mutation_strength']),
            bounds=build_bounds(config),
        )
    except KeyError as e:
        raise ConfigValidationError(f"Missing required field: 'ga.{e.args[0]}'")
    except (TypeError, ValueError) as e:
        raise ConfigValidationError(f"Invalid ga parameters: {e}")
