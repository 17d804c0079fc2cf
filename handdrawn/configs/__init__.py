"""Perturbation configuration loading and validation."""

from handdrawn.configs.loader import (
    ConfigError,
    PerturbationConfig,
    config_from_mapping,
    load_config,
)
from handdrawn.configs.schema import PerturbationSchema

__all__ = [
    "ConfigError",
    "PerturbationConfig",
    "PerturbationSchema",
    "config_from_mapping",
    "load_config",
]
