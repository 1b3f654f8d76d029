"""
Configuration helpers for the hazard service.
"""

from .models import DEFAULT_SENSORS, ConfigError, HazardConfig, SensorConfig, build_config, load_config
from .settings import Secrets, get_secrets

__all__ = [
    "DEFAULT_SENSORS",
    "ConfigError",
    "HazardConfig",
    "SensorConfig",
    "build_config",
    "load_config",
    "Secrets",
    "get_secrets",
]
