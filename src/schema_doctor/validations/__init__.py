"""Application-side validation metadata.

Usage:
    from schema_doctor.validations import ModelDef, Validator, StaticModelProvider
    from schema_doctor.validations import DeclarativeModelProvider, load_models
"""

from schema_doctor.validations.base import StaticModelProvider, ValidationMetadataProvider
from schema_doctor.validations.declarative import DeclarativeModelProvider
from schema_doctor.validations.loader import load_models
from schema_doctor.validations.models import ModelDef, Validator

__all__ = [
    "ModelDef",
    "Validator",
    "ValidationMetadataProvider",
    "StaticModelProvider",
    "DeclarativeModelProvider",
    "load_models",
]
