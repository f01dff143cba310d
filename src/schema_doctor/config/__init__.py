"""Configuration management: TOML loading and config models.

Usage:
    >>> from schema_doctor.config import load_config, DoctorConfig
"""

from schema_doctor.config.loader import (
    DEFAULT_CONFIG_FILE,
    ConfigurationError,
    build_config,
    default_config,
    load_config,
)
from schema_doctor.config.models import DoctorConfig

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "ConfigurationError",
    "DoctorConfig",
    "build_config",
    "default_config",
    "load_config",
]
