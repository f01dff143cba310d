"""Pydantic models for schema-doctor configuration."""

from typing import Any

from pydantic import BaseModel, Field


class DoctorConfig(BaseModel):
    """Complete configuration, usually loaded from ``.schema-doctor.toml``.

    Attributes:
        globals: Values for global options, shared by every detector
            declaring an option of the same name.
        detectors: Per-detector option values keyed by detector identifier.
            After loading, every declared option of every registered
            detector is present.
        database_url: Database to inspect.
        models: Model source, either ``module:Base`` or a TOML file path.
    """

    globals: dict[str, Any] = Field(default_factory=dict)
    detectors: dict[str, dict[str, Any]] = Field(default_factory=dict)
    database_url: str | None = None
    models: str | None = None
