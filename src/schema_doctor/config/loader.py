"""Configuration loading and validation.

File format (``.schema-doctor.toml``)::

    database_url = "postgresql://localhost/app"
    models = "app.models:Base"

    [globals]
    ignore_models = ["LegacyUser"]

    [detectors.incorrect_length_validation]
    enabled = true
    ignore_attributes = ["User.email"]

Every detector section is validated against the detector's
``config_schema()``; options that aren't set receive their declared
defaults.
"""

import tomllib
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, create_model

from schema_doctor.config.models import DoctorConfig
from schema_doctor.detectors import DETECTORS, Detector

DEFAULT_CONFIG_FILE = ".schema-doctor.toml"

_TOP_LEVEL_KEYS = {"globals", "detectors", "database_url", "models"}


class ConfigurationError(Exception):
    """Raised when a configuration file doesn't match the detectors' options."""

    pass


@lru_cache
def option_model(detector: type[Detector]) -> type[BaseModel]:
    """Build a pydantic model validating *detector*'s option values."""
    fields: dict[str, Any] = {
        name: (
            spec.annotation,
            Field(default_factory=spec.default_factory, description=spec.description),
        )
        for name, spec in detector.config_schema().items()
    }
    return create_model(
        f"{detector.__name__}Options",
        __config__=ConfigDict(extra="forbid"),
        **fields,
    )


def build_config(
    data: Mapping[str, Any],
    registry: Mapping[str, type[Detector]] | None = None,
) -> DoctorConfig:
    """Validate raw configuration data and fill in defaults.

    Args:
        data: Parsed configuration (e.g. the result of ``tomllib.load``).
        registry: Detectors to configure (default: all registered detectors).

    Returns:
        DoctorConfig with a complete option mapping for every detector.

    Raises:
        ConfigurationError: On unknown keys, detectors or options, global
            values for non-global options, or values of the wrong type.
    """
    if registry is None:
        registry = DETECTORS

    unknown_keys = set(data) - _TOP_LEVEL_KEYS
    if unknown_keys:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown_keys))}")

    detectors_data = data.get("detectors", {})
    if not isinstance(detectors_data, Mapping):
        raise ConfigurationError("'detectors' must be a table of detector sections")
    unknown_detectors = set(detectors_data) - set(registry)
    if unknown_detectors:
        raise ConfigurationError(
            f"Unknown detectors: {', '.join(sorted(unknown_detectors))}\n"
            f"Available detectors: {', '.join(registry)}"
        )

    detectors: dict[str, dict[str, Any]] = {}
    for identifier, detector in registry.items():
        try:
            options = option_model(detector).model_validate(detectors_data.get(identifier, {}))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration for {identifier}:\n{e}") from e
        detectors[identifier] = options.model_dump()

    global_specs = {
        name: spec
        for detector in registry.values()
        for name, spec in detector.config_schema().items()
        if spec.is_global
    }
    globals_data = data.get("globals", {})
    if not isinstance(globals_data, Mapping):
        raise ConfigurationError("'globals' must be a table of option values")

    globals_: dict[str, Any] = {}
    for name, value in globals_data.items():
        if name not in global_specs:
            raise ConfigurationError(
                f"{name!r} is not a global option. "
                f"Global options: {', '.join(sorted(global_specs)) or 'none'}"
            )
        try:
            globals_[name] = TypeAdapter(global_specs[name].annotation).validate_python(value)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid global option {name!r}:\n{e}") from e

    return DoctorConfig(
        globals=globals_,
        detectors=detectors,
        database_url=data.get("database_url"),
        models=data.get("models"),
    )


def default_config(registry: Mapping[str, type[Detector]] | None = None) -> DoctorConfig:
    """Return the configuration used when no file is given."""
    return build_config({}, registry)


def load_config(
    config_path: Path | None = None,
    registry: Mapping[str, type[Detector]] | None = None,
) -> DoctorConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the configuration file. None returns the
            defaults.
        registry: Detectors to configure (default: all registered detectors).

    Returns:
        Validated DoctorConfig.

    Raises:
        FileNotFoundError: If *config_path* doesn't exist.
        ConfigurationError: If the file is not valid TOML or doesn't match
            the detectors' options.
    """
    if config_path is None:
        return default_config(registry)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {config_path.name}: {e}") from e

    return build_config(data, registry)
