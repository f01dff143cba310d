"""schema-doctor: report drift between database constraints and model validations.

Compares the schema a database enforces (column length limits, check
constraints) with the validators declared on application models and prints
one line per disagreement.

Usage:
    import sys
    from schema_doctor import (
        CachingSchemaInspector,
        StaticModelProvider,
        create_provider,
        default_config,
        run_detectors,
    )

    inspector = CachingSchemaInspector(create_provider("sqlite:///app.db"))
    ok = run_detectors(default_config(), inspector, StaticModelProvider(models), sys.stdout)
"""

__version__ = "0.1.0"

# Providers
from schema_doctor.adapters.base import SchemaMetadataProvider
from schema_doctor.adapters.reflection import SqlAlchemySchemaProvider

# Schema
from schema_doctor.schema.inspector import CachingSchemaInspector
from schema_doctor.schema.models import ColumnSchema

# Validations
from schema_doctor.validations.base import StaticModelProvider, ValidationMetadataProvider
from schema_doctor.validations.declarative import DeclarativeModelProvider
from schema_doctor.validations.models import ModelDef, Validator

# Detectors
from schema_doctor.detectors import DETECTORS, Detector, OptionSpec

# Config
from schema_doctor.config.loader import ConfigurationError, default_config, load_config
from schema_doctor.config.models import DoctorConfig

# Factory and runner
from schema_doctor.factory import create_provider
from schema_doctor.runner import run_detectors

__all__ = [
    # Providers
    "SchemaMetadataProvider",
    "SqlAlchemySchemaProvider",
    # Schema
    "CachingSchemaInspector",
    "ColumnSchema",
    # Validations
    "ValidationMetadataProvider",
    "StaticModelProvider",
    "DeclarativeModelProvider",
    "ModelDef",
    "Validator",
    # Detectors
    "DETECTORS",
    "Detector",
    "OptionSpec",
    # Config
    "DoctorConfig",
    "ConfigurationError",
    "default_config",
    "load_config",
    # Factory and runner
    "create_provider",
    "run_detectors",
]
